"""Archive package for reading DocC documentation bundles.

- base_archive: Archive and DocumentFolder capability interfaces
- doccarchive: filesystem reader for ``.doccarchive`` directories
- archive_loader: opens a list of bundle paths, failing on the first bad one
"""

from .base_archive import Archive, DocumentFolder
from .doccarchive import DocCArchive, FileSystemDocumentFolder
from .archive_loader import ArchiveLoader

__all__ = [
    'Archive',
    'DocumentFolder',
    'DocCArchive',
    'FileSystemDocumentFolder',
    'ArchiveLoader'
]
