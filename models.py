"""Data models for the DocC archive to static HTML export pipeline."""

import re
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional

PATH_TO_ROOT_SEGMENT = "../"
SITE_STYLESHEET_PATH = "css/site.css"


class ExitCode(IntEnum):
    """Process exit codes of the command line tool."""
    SUCCESS = 0
    NOT_ENOUGH_ARGUMENTS = 1
    TARGET_DIRECTORY_EXISTS = 2
    EXPECTED_DOCC_ARCHIVE = 3
    UNEXPECTED_ERROR = 99


class ExportState(Enum):
    """Phases of a single export run."""
    NOT_STARTED = "not_started"
    TARGET_PREPARED = "target_prepared"
    RESOURCES_COPIED = "resources_copied"
    PAGES_GENERATED = "pages_generated"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class ExportOptions:
    """Flags selecting export behavior."""

    force: bool = False
    keep_hash: bool = False
    copy_system_css: bool = True
    build_index: bool = True
    build_api_docs: bool = True
    build_tutorials: bool = True

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'ExportOptions':
        """Build options from the ``export`` section of a config dictionary."""
        export_config = config.get('export', {}) or {}
        defaults = cls()
        return cls(
            force=bool(export_config.get('force', defaults.force)),
            keep_hash=bool(export_config.get('keep_hash', defaults.keep_hash)),
            copy_system_css=bool(export_config.get('copy_system_css', defaults.copy_system_css)),
            build_index=bool(export_config.get('build_index', defaults.build_index)),
            build_api_docs=bool(export_config.get('build_api_docs', defaults.build_api_docs)),
            build_tutorials=bool(export_config.get('build_tutorials', defaults.build_tutorials))
        )

    def to_dict(self) -> Dict[str, bool]:
        return {
            'force': self.force,
            'keep_hash': self.keep_hash,
            'copy_system_css': self.copy_system_css,
            'build_index': self.build_index,
            'build_api_docs': self.build_api_docs,
            'build_tutorials': self.build_tutorials
        }


def path_to_root(level: int) -> str:
    """Relative prefix leading from a folder at ``level`` back to the site root."""
    return PATH_TO_ROOT_SEGMENT * level


# <name>-<hash>.<ext>, DocC also writes <name>.<hash>.<ext>
HASHED_NAME_PATTERN = re.compile(r'^(?P<stem>.+?)[-.](?P<hash>[0-9a-f]{8,})(?P<ext>\.[^.]+)$')


def strip_hash(filename: str) -> str:
    """
    Remove a content hash segment from a resource filename.

    Args:
        filename: e.g. ``hero-5a4a0f37.svg``

    Returns:
        ``hero.svg``, or the unchanged name if it carries no hash
    """
    match = HASHED_NAME_PATTERN.match(filename)
    if not match:
        return filename
    return match.group('stem') + match.group('ext')


@dataclass
class Document:
    """A parsed DocC page (render JSON)."""

    identifier: str
    url: str
    title: str
    kind: str = "article"
    role: Optional[str] = None
    abstract: List[Dict[str, Any]] = field(default_factory=list)
    references: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    hierarchy: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Document':
        """Construct a document from DocC render JSON."""
        identifier = data.get('identifier', {}) or {}
        metadata = data.get('metadata', {}) or {}
        url = identifier.get('url', '')

        # Only the first hierarchy path is used for breadcrumbs
        paths = (data.get('hierarchy', {}) or {}).get('paths') or [[]]

        return cls(
            identifier=url,
            url=_url_path(url),
            title=metadata.get('title', '') or _url_path(url).rsplit('/', 1)[-1],
            kind=data.get('kind', 'article'),
            role=metadata.get('role') or metadata.get('roleHeading'),
            abstract=data.get('abstract', []) or [],
            references=data.get('references', {}) or {},
            hierarchy=list(paths[0]),
            raw=data
        )

    def __str__(self) -> str:
        return f"<Document {self.url or self.identifier}>"


def _url_path(url: str) -> str:
    """Strip the ``doc://bundle`` scheme and host from a DocC identifier."""
    if url.startswith('doc://'):
        remainder = url[len('doc://'):]
        slash = remainder.find('/')
        return remainder[slash:] if slash >= 0 else '/'
    return url


@dataclass(frozen=True)
class RenderingContext:
    """Per-page parameters passed to a renderer."""

    path_to_root: str
    references: Dict[str, Dict[str, Any]]
    is_index: bool = False
    index_links: bool = False
    keep_hash: bool = True
    stylesheet: str = SITE_STYLESHEET_PATH


@dataclass
class ResourceFailure:
    """A resource file that could not be copied."""

    source: str
    destination: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {'source': self.source, 'destination': self.destination, 'error': self.error}


@dataclass
class CopyResult:
    """Outcome of copying a group of resource files."""

    copied: List[str] = field(default_factory=list)
    failed: List[ResourceFailure] = field(default_factory=list)

    def extend(self, other: 'CopyResult') -> None:
        self.copied.extend(other.copied)
        self.failed.extend(other.failed)


@dataclass
class PageFailure:
    """A page that could not be rendered or written."""

    page: str
    output: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {'page': self.page, 'output': self.output, 'error': self.error}


@dataclass
class FolderBuildReport:
    """Pages produced, and pages that failed, while building a folder tree."""

    pages_written: List[str] = field(default_factory=list)
    index_pages_written: List[str] = field(default_factory=list)
    failures: List[PageFailure] = field(default_factory=list)

    def extend(self, other: 'FolderBuildReport') -> None:
        self.pages_written.extend(other.pages_written)
        self.index_pages_written.extend(other.index_pages_written)
        self.failures.extend(other.failures)

    @property
    def failed_pages(self) -> List[str]:
        return [failure.page for failure in self.failures]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pages_written': len(self.pages_written),
            'index_pages_written': len(self.index_pages_written),
            'failures': [failure.to_dict() for failure in self.failures]
        }


@dataclass
class ExportReport:
    """Aggregated outcome of one export run."""

    target: str
    options: ExportOptions
    state: ExportState = ExportState.NOT_STARTED
    archives: List[str] = field(default_factory=list)
    resources: CopyResult = field(default_factory=CopyResult)
    stylesheet_written: bool = False
    stylesheet_error: Optional[str] = None
    pages: FolderBuildReport = field(default_factory=FolderBuildReport)
    duration: float = 0.0

    @property
    def total_errors(self) -> int:
        stylesheet_errors = 1 if self.stylesheet_error else 0
        return len(self.resources.failed) + len(self.pages.failures) + stylesheet_errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target': self.target,
            'options': self.options.to_dict(),
            'state': self.state.value,
            'archives': list(self.archives),
            'resources': {
                'copied': len(self.resources.copied),
                'failures': [failure.to_dict() for failure in self.resources.failed]
            },
            'stylesheet': {
                'written': self.stylesheet_written,
                'error': self.stylesheet_error
            },
            'pages': self.pages.to_dict(),
            'total_errors': self.total_errors,
            'duration': round(self.duration, 3)
        }


__all__ = [
    'PATH_TO_ROOT_SEGMENT',
    'SITE_STYLESHEET_PATH',
    'ExitCode',
    'ExportState',
    'ExportOptions',
    'path_to_root',
    'strip_hash',
    'Document',
    'RenderingContext',
    'ResourceFailure',
    'CopyResult',
    'PageFailure',
    'FolderBuildReport',
    'ExportReport'
]
