"""Abstract renderer interface."""

from abc import ABC, abstractmethod

from models import Document, RenderingContext


class Renderer(ABC):
    """Produces markup for a parsed document."""

    @abstractmethod
    def render(self, document: Document, context: RenderingContext) -> str:
        """
        Render a document.

        Args:
            document: Parsed page
            context: Path-to-root prefix, references and index flags

        Returns:
            Complete HTML page
        """
        pass


__all__ = ['Renderer']
