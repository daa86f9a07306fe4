"""Filesystem reader for ``.doccarchive`` bundles."""

import json
import logging
from pathlib import Path
from typing import List, Optional

from errors import ArchiveFormatError, DocumentParseError
from models import Document
from .base_archive import Archive, DocumentFolder

ARCHIVE_SUFFIX = '.doccarchive'
DATA_DIRECTORY = 'data'
FAVICON_NAMES = ('favicon.ico', 'favicon.svg')

# The data/ directory itself is level 0
ROOT_FOLDER_LEVEL = 1


def _list_files(directory: Path, suffix: Optional[str] = None) -> List[Path]:
    """Sorted regular, non-hidden files directly inside ``directory``."""
    if not directory.is_dir():
        return []

    files = []
    for entry in directory.iterdir():
        if entry.name.startswith('.') or not entry.is_file():
            continue
        if suffix and entry.suffix.lower() != suffix:
            continue
        files.append(entry)

    return sorted(files, key=lambda path: path.name)


class FileSystemDocumentFolder(DocumentFolder):
    """Document folder backed by a directory of DocC render JSON files."""

    def __init__(self, url: Path, level: int, logger: Optional[logging.Logger] = None):
        super().__init__(url, level)
        self.logger = logger or logging.getLogger('docc2html.archive.doccarchive')

    def subfolders(self) -> List['FileSystemDocumentFolder']:
        if not self.url.is_dir():
            return []

        directories = sorted(
            (entry for entry in self.url.iterdir()
             if entry.is_dir() and not entry.name.startswith('.')),
            key=lambda path: path.name
        )
        return [
            FileSystemDocumentFolder(directory, self.level + 1, logger=self.logger)
            for directory in directories
        ]

    def page_urls(self) -> List[Path]:
        return _list_files(self.url, suffix='.json')

    def document(self, page_url: Path) -> Document:
        """
        Parse a render JSON page.

        Raises:
            DocumentParseError: If the file can't be read or isn't a JSON object
        """
        page_url = Path(page_url)
        if not page_url.is_absolute():
            page_url = self.url / page_url

        try:
            with open(page_url, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise DocumentParseError(f"Failed to read document {page_url}: {e}") from e

        if not isinstance(data, dict):
            raise DocumentParseError(f"Document {page_url} is not a JSON object")

        self.logger.debug(f"Parsed document {page_url}")
        return Document.from_dict(data)


class DocCArchive(Archive):
    """A ``.doccarchive`` directory tree on the local filesystem."""

    def __init__(self, url: Path, logger: Optional[logging.Logger] = None):
        """
        Open an archive bundle.

        Args:
            url: Path to the bundle directory

        Raises:
            ArchiveFormatError: If the path is not a directory with a data/ folder
        """
        super().__init__(url)
        self.logger = logger or logging.getLogger('docc2html.archive.doccarchive')

        if not self.url.exists():
            raise ArchiveFormatError(self.url, "path does not exist")
        if not self.url.is_dir():
            raise ArchiveFormatError(self.url, "not a directory")
        if not (self.url / DATA_DIRECTORY).is_dir():
            raise ArchiveFormatError(self.url, f"missing {DATA_DIRECTORY}/ directory")

        if self.url.suffix != ARCHIVE_SUFFIX:
            self.logger.debug(f"Archive {self.url} has no {ARCHIVE_SUFFIX} suffix")

    def user_image_urls(self) -> List[Path]:
        return _list_files(self.url / 'images')

    def user_video_urls(self) -> List[Path]:
        return _list_files(self.url / 'videos')

    def user_download_urls(self) -> List[Path]:
        return _list_files(self.url / 'downloads')

    def favicon_urls(self) -> List[Path]:
        return [self.url / name for name in FAVICON_NAMES if (self.url / name).is_file()]

    def system_image_urls(self) -> List[Path]:
        return _list_files(self.url / 'img')

    def stylesheet_urls(self) -> List[Path]:
        return _list_files(self.url / 'css', suffix='.css')

    def documentation_folder(self) -> Optional[FileSystemDocumentFolder]:
        return self._folder('documentation')

    def tutorials_folder(self) -> Optional[FileSystemDocumentFolder]:
        return self._folder('tutorials')

    def _folder(self, name: str) -> Optional[FileSystemDocumentFolder]:
        path = self.url / DATA_DIRECTORY / name
        if not path.is_dir():
            return None
        return FileSystemDocumentFolder(path, ROOT_FOLDER_LEVEL, logger=self.logger)


__all__ = ['DocCArchive', 'FileSystemDocumentFolder', 'ARCHIVE_SUFFIX', 'ROOT_FOLDER_LEVEL']
