"""Markdown rendering for Inkwell.

Converts a document body from Markdown to HTML with mistune. While
rendering, every heading receives an anchor id derived from its text and
fenced code blocks are highlighted with Pygments.

Key classes:
- MarkdownRenderer: Converts Markdown to HTML.
- RenderedMarkdown: HTML output plus the headings found while rendering.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import mistune
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .content import Heading
from .errors import RenderError
from .utils import escape_html, generate_heading_id, strip_tags

DEFAULT_PLUGINS = ("strikethrough", "footnotes", "table", "url")


@dataclass(frozen=True)
class RenderedMarkdown:
    """Result of rendering one Markdown body.

    Attributes:
        html: The rendered HTML.
        headings: Headings in document order, with their anchor ids.
    """

    html: str
    headings: tuple[Heading, ...]


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer adding heading anchors and syntax highlighting.

    Attributes:
        headings: List of Heading objects extracted during rendering.
    """

    def __init__(self, css_class: str = "highlight"):
        super().__init__(escape=False)
        self.css_class = css_class
        self.headings: list[Heading] = []
        self._heading_id_counts: dict[str, int] = {}

    def _unique_id(self, text: str) -> str:
        base_id = generate_heading_id(text) or "section"
        heading_id = base_id
        # suffixed ids are recorded too, so "a-1" from text cannot repeat one
        while heading_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        self._heading_id_counts[heading_id] = 0
        return heading_id

    def heading(self, text: str, level: int, **attrs) -> str:
        """Render a heading with an auto-generated id and track it for the TOC.

        Args:
            text: Heading content as inline HTML.
            level: Heading level (1-6).
            **attrs: Additional attributes.

        Returns:
            HTML heading tag with id attribute.
        """
        heading_id = self._unique_id(text)
        plain = strip_tags(text).strip()
        self.headings.append(Heading(id=heading_id, text=plain, level=level))
        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block with Pygments syntax highlighting.

        Languages Pygments does not know are emitted as a plain code block.

        Args:
            code: The code content.
            info: Info string of the fence; its first word is the language.

        Returns:
            HTML string with highlighted code.
        """
        lang = info.split(None, 1)[0] if info and info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                formatter = HtmlFormatter(nowrap=False, cssclass=self.css_class)
                return highlight(code, lexer, formatter)
        lang_class = f' class="language-{escape_html(lang)}"' if lang else ""
        return f"<pre><code{lang_class}>{escape_html(code)}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    A fresh mistune parser is created per call, so one instance can render
    many documents concurrently.
    """

    def __init__(self, plugins: tuple[str, ...] = DEFAULT_PLUGINS):
        self.plugins = plugins

    def render(self, body: str, source: str | None = None) -> RenderedMarkdown:
        """Render Markdown content to HTML.

        Args:
            body: Markdown source content.
            source: File name used in error messages.

        Returns:
            RenderedMarkdown holding the HTML and the collected headings.

        Raises:
            RenderError: If the Markdown cannot be converted.
        """
        renderer = _HighlightRenderer()
        try:
            markdown = mistune.create_markdown(
                renderer=renderer, plugins=list(self.plugins)
            )
            html = markdown(body)
        except Exception as exc:
            raise RenderError(
                f"Cannot render Markdown: {type(exc).__name__}: {exc}", source, exc
            ) from exc
        return RenderedMarkdown(html=html, headings=tuple(renderer.headings))

    async def render_markdown(
        self, body: str, source: str | None = None
    ) -> RenderedMarkdown:
        """Render Markdown in a worker thread without blocking the event loop."""
        return await asyncio.to_thread(self.render, body, source)

    async def render_html(self, body: str, source: str | None = None) -> str:
        """Render Markdown to an HTML string."""
        rendered = await self.render_markdown(body, source)
        return rendered.html
