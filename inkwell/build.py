"""Site building functionality for Inkwell.

This module contains the build pipeline that turns a content directory into
a publishable output directory. A build runs five stages strictly in order:

1. Prepare: create the output directory and purge stale pages.
2. Discover & Parse: read every source document and parse it.
3. Filter: keep only the documents marked public.
4. Render: render every public document concurrently, then write the pages.
5. Index: sort the rendered documents by date and write the index page.

Any error aborts the build immediately and propagates unchanged. Nothing is
retried and partially written files are not cleaned up; rebuilding is
always safe because the output directory is purged first.

Key functions:
- run_build: Coroutine running one build for a SiteConfig.
- build_site: Synchronous wrapper around run_build.
- sort_for_index: Order documents for the index page.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from . import output
from .config import SiteConfig
from .content import Document
from .errors import ParseError
from .parser import parse_document
from .protocols import MarkdownConverter, PageRenderer
from .renderers import MarkdownRenderer
from .store import list_document_files, read_document_files
from .templates import TemplateEngine

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class BuildReport:
    """Result of a site build.

    Attributes:
        documents: Published documents, rendered, in index order.
        discovered: Number of source documents parsed, drafts included.
        output_dir: Directory the site was written to.
        written: Paths of the files written, index page last.
    """

    documents: list[Document]
    discovered: int
    output_dir: Path
    written: list[Path] = field(default_factory=list)

    @property
    def published(self) -> int:
        return len(self.documents)


def sort_for_index(documents: Iterable[Document]) -> list[Document]:
    """Order documents for the index page.

    Most recent first. Documents with equal dates keep their relative order;
    documents without a usable date come last, also in their original order.

    Args:
        documents: Documents in discovery order.

    Returns:
        New list in index order.
    """
    # sorted() stays stable with reverse=True
    return sorted(documents, key=_index_key, reverse=True)


def _index_key(document: Document) -> tuple[bool, datetime]:
    date = document.date
    return (date is not None, date or _OLDEST)


async def _prepare(config: SiteConfig) -> None:
    await output.ensure_output_dir(config.output_dir)
    removed = await output.purge(config.output_dir, config.output_extension)
    logger.info("Purged %d stale page(s) from %s", len(removed), config.output_dir)


async def _discover(config: SiteConfig) -> list[Document]:
    names = await list_document_files(config.content_dir, config.content_extension)
    contents = await read_document_files(config.content_dir, names)
    documents = [parse_document(name, contents[i]) for i, name in enumerate(names)]
    _check_unique_slugs(documents)
    logger.info("Parsed %d document(s) from %s", len(documents), config.content_dir)
    return documents


def _check_unique_slugs(documents: Iterable[Document]) -> None:
    seen: dict[str, str] = {}
    for document in documents:
        if document.slug in seen:
            raise ParseError(
                f"Slug '{document.slug}' is already used by {seen[document.slug]}",
                document.source_name,
            )
        seen[document.slug] = document.source_name


def _filter_public(
    documents: Iterable[Document], config: SiteConfig
) -> list[Document]:
    public = [document for document in documents if document.is_public]
    reserved = config.index_name.lower()
    for document in public:
        if document.slug.lower() == reserved:
            raise ParseError(
                f"'{config.index_filename}' is reserved for the index page",
                document.source_name,
            )
    return public


async def _render_document(
    document: Document, markdown: MarkdownConverter, pages: PageRenderer
) -> tuple[Document, str]:
    rendered = await markdown.render_markdown(document.body, document.source_name)
    rendered_document = document.with_body(rendered.html, rendered.headings)
    return rendered_document, pages.render_document(rendered_document)


async def _write_page(config: SiteConfig, document: Document, html: str) -> Path:
    path = config.output_path_for(document.slug)
    await output.write(path, html)
    return path


async def run_build(
    config: SiteConfig,
    markdown: MarkdownConverter | None = None,
    pages: PageRenderer | None = None,
) -> BuildReport:
    """Build the site described by a configuration.

    Args:
        config: Resolved project configuration.
        markdown: Markdown converter; defaults to MarkdownRenderer.
        pages: Page renderer; defaults to a TemplateEngine for the config.

    Returns:
        BuildReport describing the published documents.

    Raises:
        InkwellError: The first error raised by any stage, unchanged.
    """
    markdown = markdown or MarkdownRenderer()
    pages = pages or TemplateEngine.from_config(config)

    await _prepare(config)
    documents = await _discover(config)
    public = _filter_public(documents, config)
    logger.info("Rendering %d of %d document(s)", len(public), len(documents))

    # Pages are only written once every document rendered, so a failing
    # document leaves no pages behind.
    rendered = await asyncio.gather(
        *(_render_document(document, markdown, pages) for document in public)
    )
    written = await asyncio.gather(
        *(_write_page(config, document, html) for document, html in rendered)
    )

    ordered = sort_for_index(document for document, _ in rendered)
    await output.write(config.index_path, pages.render_index(ordered))
    logger.info("Wrote index page %s", config.index_path)

    return BuildReport(
        documents=ordered,
        discovered=len(documents),
        output_dir=config.output_dir,
        written=[*written, config.index_path],
    )


def build_site(
    config: SiteConfig,
    markdown: MarkdownConverter | None = None,
    pages: PageRenderer | None = None,
) -> BuildReport:
    """Run a build to completion on a fresh event loop.

    Args:
        config: Resolved project configuration.
        markdown: Optional Markdown converter.
        pages: Optional page renderer.

    Returns:
        BuildReport describing the published documents.
    """
    return asyncio.run(run_build(config, markdown=markdown, pages=pages))
