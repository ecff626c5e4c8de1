"""Template rendering engine for Inkwell.

This module uses Jinja2 to render the page of each document and the index
page listing all of them. Templates live in a single directory and are
looked up by logical name: ``post`` resolves to ``post.html.jinja``.

Key class:
- TemplateEngine: Resolves named templates and renders them.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    Undefined,
    UndefinedError,
    select_autoescape,
)
from markupsafe import Markup
from pygments.formatters import HtmlFormatter

from .config import SiteConfig
from .content import Document, Heading, parse_date
from .errors import TemplateError

__all__ = ["TemplateEngine", "format_date", "pygments_css", "render_toc"]


def render_toc(headings: Sequence[Heading]) -> Markup:
    """Render headings as a nested list of anchor links.

    A heading becomes a child of the closest preceding heading with a
    lower level.

    Args:
        headings: Heading objects in document order.

    Returns:
        Markup with nested ``<ul>`` lists, or empty Markup if no headings.
    """
    root: list[tuple[Heading, list]] = []
    open_lists: list[tuple[int, list]] = [(0, root)]
    for heading in headings:
        while open_lists[-1][0] >= heading.level:
            open_lists.pop()
        children: list[tuple[Heading, list]] = []
        open_lists[-1][1].append((heading, children))
        open_lists.append((heading.level, children))
    return _toc_list(root)


def _toc_list(nodes: list[tuple[Heading, list]]) -> Markup:
    if not nodes:
        return Markup("")
    items = Markup("").join(
        Markup('<li><a href="#{}">{}</a>{}</li>').format(
            heading.id, heading.text, _toc_list(children)
        )
        for heading, children in nodes
    )
    return Markup("<ul>{}</ul>").format(items)


def format_date(value: Any, fmt: str = "%Y-%m-%d") -> str:
    """Format a date attribute for display.

    Args:
        value: ISO-8601 string, date or datetime.
        fmt: strftime format.

    Returns:
        The formatted date, or the value unchanged as text when it is not
        a date.
    """
    parsed = parse_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    return parsed.strftime(fmt)


def pygments_css(css_class: str = "highlight") -> Markup:
    """Return Pygments CSS styles for highlighted code blocks."""
    return Markup(HtmlFormatter().get_style_defs(f".{css_class}"))


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        templates_dir: Directory containing the templates.
        extension: Suffix appended to logical template names.
        post_template: Logical name of the single-document template.
        index_template: Logical name of the listing template.
        output_extension: Suffix of generated pages, used to build links.
        env: Jinja2 environment.
    """

    def __init__(
        self,
        templates_dir: Path,
        extension: str = ".html.jinja",
        post_template: str = "post",
        index_template: str = "index",
        output_extension: str = ".html",
        strict: bool = False,
    ):
        self.templates_dir = Path(templates_dir)
        self.extension = extension
        self.post_template = post_template
        self.index_template = index_template
        self.output_extension = output_extension
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(
                enabled_extensions=("html", "htm", "xml", "jinja"),
                default_for_string=True,
            ),
            undefined=StrictUndefined if strict else Undefined,
            enable_async=False,
        )
        self._install_globals()

    @classmethod
    def from_config(cls, config: SiteConfig) -> TemplateEngine:
        """Create an engine from a SiteConfig."""
        return cls(
            config.templates_dir,
            extension=config.template_extension,
            post_template=config.post_template,
            index_template=config.index_template,
            output_extension=config.output_extension,
            strict=config.strict_templates,
        )

    def _install_globals(self) -> None:
        """Install global functions and filters in the Jinja environment."""
        self.env.globals["render_toc"] = render_toc
        self.env.globals["pygments_css"] = pygments_css
        self.env.filters["format_date"] = format_date

    def template_name(self, name: str) -> str:
        return f"{name}{self.extension}"

    def template_path(self, name: str) -> Path:
        """Return the file a logical template name resolves to."""
        return self.templates_dir / self.template_name(name)

    def render_template(self, name: str, context: dict[str, Any]) -> str:
        """Render a named template.

        Args:
            name: Logical template name, e.g. ``post``.
            context: Variables to make available in the template.

        Returns:
            Rendered HTML string.

        Raises:
            TemplateError: If the template does not exist, does not parse,
                or fails while rendering.
        """
        path = self.template_path(name)
        try:
            template = self.env.get_template(self.template_name(name))
            # passed as a mapping: keys like "self" are not valid keyword arguments
            return template.render(context)
        except TemplateNotFound as exc:
            raise TemplateError(f"Template '{name}' not found", path, exc) from exc
        except TemplateSyntaxError as exc:
            raise TemplateError(
                f"Template syntax error on line {exc.lineno}: {exc.message}", path, exc
            ) from exc
        except UndefinedError as exc:
            raise TemplateError(f"Undefined variable: {exc}", path, exc) from exc
        except Exception as exc:
            raise TemplateError(f"{type(exc).__name__}: {exc}", path, exc) from exc

    def document_context(self, document: Document) -> dict[str, Any]:
        """Build the template scope for one document.

        The document's attributes are merged at the top level, next to the
        fields every document has.
        """
        return {
            **document.attributes,
            "slug": document.slug,
            "title": document.title,
            "body": Markup(document.body),
            "toc": list(document.headings),
            "url": f"{document.slug}{self.output_extension}",
            "document": document,
        }

    def render_document(self, document: Document) -> str:
        """Render a rendered document with the post template."""
        return self.render_template(
            self.post_template, self.document_context(document)
        )

    def render_index(self, documents: Sequence[Document]) -> str:
        """Render the index template.

        Args:
            documents: Rendered documents, already in index order.

        Returns:
            Rendered HTML of the index page.
        """
        posts = [self.document_context(document) for document in documents]
        return self.render_template(
            self.index_template, {"posts": posts, "documents": list(documents)}
        )
