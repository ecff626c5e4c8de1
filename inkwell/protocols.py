"""Protocol definitions for Inkwell.

The build orchestrator only depends on these interfaces, so the Markdown
converter and the page renderer can be swapped, for instance by fakes in
tests.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Document
    from .renderers import RenderedMarkdown


@runtime_checkable
class MarkdownConverter(Protocol):
    """Protocol for converting a Markdown body to HTML."""

    @abstractmethod
    async def render_markdown(
        self, body: str, source: str | None = None
    ) -> RenderedMarkdown:
        """Convert Markdown to HTML.

        Args:
            body: Markdown source.
            source: File name used in error messages.

        Returns:
            RenderedMarkdown with the HTML and the headings found.

        Raises:
            RenderError: If the body cannot be converted.
        """
        ...


@runtime_checkable
class PageRenderer(Protocol):
    """Protocol for rendering documents through named templates."""

    @abstractmethod
    def render_template(self, name: str, context: dict[str, Any]) -> str:
        """Render a named template.

        Raises:
            TemplateError: If the template is missing or fails.
        """
        ...

    @abstractmethod
    def render_document(self, document: Document) -> str:
        """Render the page of a single rendered document."""
        ...

    @abstractmethod
    def render_index(self, documents: Sequence[Document]) -> str:
        """Render the listing page for documents already in index order."""
        ...
