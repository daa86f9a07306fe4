"""Export package writing static HTML sites from DocC archives.

Package Structure:
- export_target: ExportTarget interface and the local filesystem target
- resource_copier: copies images, videos, downloads, favicons and system
  resources, optionally stripping content hashes from their names
- folder_builder: renders a folder tree depth first, emitting index
  variants for landing pages of same-named subfolders
"""

from .export_target import ExportTarget, FileSystemExportTarget
from .resource_copier import ResourceCopier
from .folder_builder import FolderBuilder

__all__ = [
    'ExportTarget',
    'FileSystemExportTarget',
    'ResourceCopier',
    'FolderBuilder'
]
