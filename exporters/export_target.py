"""Writable output locations for exported sites."""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional, Union

from errors import ResourceCopyError
from models import CopyResult, ResourceFailure, strip_hash

CSS_DIRECTORY = 'css'


class ExportTarget(ABC):
    """
    Abstract output location.

    All paths are relative to the target root. Directories are created on
    demand; callers gate on ``target_exists()`` before the first write.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('docc2html.exporters.export_target')

    @abstractmethod
    def target_exists(self) -> bool:
        pass

    @abstractmethod
    def ensure_dir(self, relative_path: str) -> None:
        """Create a directory and its parents; idempotent. Raises OSError."""
        pass

    @abstractmethod
    def write(self, content: str, relative_path: str) -> None:
        """Write a text file, creating parent directories, overwriting silently."""
        pass

    @abstractmethod
    def copy_raw(self, source_urls: Iterable[Union[str, Path]], to: str,
                 keep_hash: bool = True) -> CopyResult:
        """
        Copy files into a subdirectory of the target.

        Args:
            source_urls: Files to copy
            to: Target subdirectory ("" for the root)
            keep_hash: Keep ``<name>-<hash>.<ext>`` names unchanged

        Returns:
            Copied destinations and per-file failures
        """
        pass

    def copy_css(self, source_urls: Iterable[Union[str, Path]], keep_hash: bool) -> CopyResult:
        """Copy stylesheets into the ``css`` subdirectory."""
        return self.copy_raw(source_urls, to=CSS_DIRECTORY, keep_hash=keep_hash)


class FileSystemExportTarget(ExportTarget):
    """Export target backed by a local directory."""

    def __init__(self, target_path: Union[str, Path], logger: Optional[logging.Logger] = None):
        super().__init__(logger=logger)
        self.target_path = Path(target_path)

    def target_exists(self) -> bool:
        return self.target_path.exists()

    def ensure_dir(self, relative_path: str) -> None:
        path = self._resolve(relative_path)
        path.mkdir(parents=True, exist_ok=True)

    def write(self, content: str, relative_path: str) -> None:
        path = self._resolve(relative_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8', newline='\n') as f:
            f.write(content)

    def copy_raw(self, source_urls: Iterable[Union[str, Path]], to: str,
                 keep_hash: bool = True) -> CopyResult:
        result = CopyResult()
        sources = [Path(source) for source in source_urls]
        if not sources:
            return result

        # Failing to create the destination is fatal
        self.ensure_dir(to)
        destination_dir = self._resolve(to)

        for source in sources:
            filename = source.name if keep_hash else strip_hash(source.name)
            destination = destination_dir / filename
            relative_destination = destination.relative_to(self.target_path).as_posix()

            # First source wins when two names strip to the same file
            if relative_destination in result.copied:
                error = ResourceCopyError(
                    f"Skipped {source}: {relative_destination} was already copied from another file"
                )
                self.logger.warning(str(error))
                result.failed.append(ResourceFailure(
                    source=str(source),
                    destination=relative_destination,
                    error=str(error)
                ))
                continue

            try:
                shutil.copyfile(source, destination)
            except OSError as e:
                error = ResourceCopyError(f"Failed to copy {source} to {relative_destination}: {e}")
                self.logger.warning(str(error))
                result.failed.append(ResourceFailure(
                    source=str(source),
                    destination=relative_destination,
                    error=str(e)
                ))
                continue

            self.logger.debug(f"Copied {source} -> {relative_destination}")
            result.copied.append(relative_destination)

        return result

    def _resolve(self, relative_path: str) -> Path:
        relative_path = (relative_path or '').strip('/')
        if not relative_path:
            return self.target_path
        return self.target_path / relative_path

    def __str__(self) -> str:
        return str(self.target_path)


__all__ = ['ExportTarget', 'FileSystemExportTarget', 'CSS_DIRECTORY']
