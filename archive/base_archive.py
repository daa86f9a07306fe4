"""Abstract archive interfaces consumed by the export pipeline."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from models import Document


class DocumentFolder(ABC):
    """One directory level of an archive's logical content tree."""

    def __init__(self, url: Path, level: int):
        """
        Initialize the folder.

        Args:
            url: Location of the folder
            level: Depth of the folder's output directory below the site root
        """
        self.url = Path(url)
        self.level = level

    @property
    def name(self) -> str:
        """Final path component, used as the output directory name."""
        return self.url.name

    @abstractmethod
    def subfolders(self) -> List['DocumentFolder']:
        """Child folders, ordered; each has ``level + 1``."""
        pass

    @abstractmethod
    def page_urls(self) -> List[Path]:
        """Page identifiers at this level, ordered."""
        pass

    @abstractmethod
    def document(self, page_url: Path) -> Document:
        """
        Load and parse a single page.

        Args:
            page_url: One of the identifiers returned by ``page_urls()``

        Returns:
            Parsed Document
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.url} level={self.level}>"


class Archive(ABC):
    """Read-only handle to one documentation archive bundle."""

    def __init__(self, url: Path):
        self.url = Path(url)

    @property
    def name(self) -> str:
        return self.url.name

    @abstractmethod
    def user_image_urls(self) -> List[Path]:
        pass

    @abstractmethod
    def user_video_urls(self) -> List[Path]:
        pass

    @abstractmethod
    def user_download_urls(self) -> List[Path]:
        pass

    @abstractmethod
    def favicon_urls(self) -> List[Path]:
        pass

    @abstractmethod
    def system_image_urls(self) -> List[Path]:
        """Images shipped by the documentation renderer (content hashed)."""
        pass

    @abstractmethod
    def stylesheet_urls(self) -> List[Path]:
        """Stylesheets shipped by the documentation renderer (content hashed)."""
        pass

    @abstractmethod
    def documentation_folder(self) -> Optional[DocumentFolder]:
        """API documentation root, or None if the archive has none."""
        pass

    @abstractmethod
    def tutorials_folder(self) -> Optional[DocumentFolder]:
        """Tutorials root, or None if the archive has none."""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.url}>"


__all__ = ['Archive', 'DocumentFolder']
