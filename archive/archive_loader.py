"""Loads archive bundles, all or nothing."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from errors import ArchiveFormatError
from .base_archive import Archive
from .doccarchive import DocCArchive


class ArchiveLoader:
    """Opens archive paths as DocC bundles."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger('docc2html.archive.archive_loader')

    def load(self, paths: Sequence[Union[str, Path]]) -> List[Archive]:
        """
        Open every path as an archive.

        Args:
            paths: Archive bundle locations

        Returns:
            Loaded archives, in input order

        Raises:
            ArchiveFormatError: For the first path that is not an archive bundle
        """
        archives = []
        for path in paths:
            try:
                archive = DocCArchive(Path(path), logger=self.logger)
            except ArchiveFormatError as e:
                self.logger.error(f"Does not look like a .doccarchive: {e.path} ({e.reason})")
                raise

            self.logger.debug(f"Loaded archive: {archive.url}")
            archives.append(archive)

        return archives


__all__ = ['ArchiveLoader']
