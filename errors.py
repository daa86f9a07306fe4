"""Exception hierarchy for the DocC to HTML export pipeline."""

from pathlib import Path
from typing import Optional, Union

from models import ExitCode


class Docc2HtmlError(Exception):
    """Base exception for export errors."""

    exit_code = ExitCode.UNEXPECTED_ERROR


class UsageError(Docc2HtmlError):
    """Bad or insufficient command line input."""

    exit_code = ExitCode.NOT_ENOUGH_ARGUMENTS


class TargetExistsError(Docc2HtmlError):
    """Target directory exists and overwriting was not requested."""

    exit_code = ExitCode.TARGET_DIRECTORY_EXISTS

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(
            f"Target directory exists (call w/ -f/--force to overwrite): {self.path}"
        )


class ArchiveFormatError(Docc2HtmlError):
    """A path does not look like a DocC archive bundle."""

    exit_code = ExitCode.EXPECTED_DOCC_ARCHIVE

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Does not look like a .doccarchive: {self.path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class DocumentParseError(Docc2HtmlError):
    """A page document could not be parsed."""
    pass


class ResourceCopyError(Docc2HtmlError):
    """A single resource file could not be copied (non-fatal)."""
    pass


class PageRenderError(Docc2HtmlError):
    """A single page could not be rendered or written (non-fatal)."""
    pass


class StylesheetWriteError(Docc2HtmlError):
    """The site stylesheet could not be written (non-fatal)."""
    pass


class UnexpectedError(Docc2HtmlError):
    """Catch-all for failures outside the known taxonomy."""

    exit_code = ExitCode.UNEXPECTED_ERROR


__all__ = [
    'Docc2HtmlError',
    'UsageError',
    'TargetExistsError',
    'ArchiveFormatError',
    'DocumentParseError',
    'ResourceCopyError',
    'PageRenderError',
    'StylesheetWriteError',
    'UnexpectedError'
]
