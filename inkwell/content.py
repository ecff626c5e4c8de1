"""Document model for Inkwell.

This module defines the value types that flow through the build pipeline
and the rules for reading the two attributes the pipeline itself relies on:
the publish flag and the date.

Key classes:
- Document: A parsed source document.
- Heading: A heading collected while rendering, used for tables of contents.

Key functions:
- coerce_public: Interpret a publish flag value.
- parse_date: Interpret a date value for index ordering.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from typing import Any, Union

from .utils import titleize

# JSON-like value an author may put in a metadata header.
AttributeValue = Union[
    str, int, float, bool, None, list["AttributeValue"], dict[str, "AttributeValue"]
]

PUBLIC_KEY = "public"
DATE_KEY = "date"
TITLE_KEY = "title"

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})


@dataclass(frozen=True)
class Heading:
    """Represents a heading extracted from markdown content for TOC generation.

    Attributes:
        id: Anchor ID for the heading (URL-friendly slug).
        text: The text content of the heading.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


@dataclass(frozen=True)
class Document:
    """A content unit read from the content store.

    Documents are never mutated. Rendering produces a new Document through
    ``with_body`` with the same slug and attributes.

    Attributes:
        slug: Identifier derived from the source file name.
        attributes: Author-declared metadata from the header block.
        body: Markdown source, or rendered HTML once rendered.
        source_name: Name of the file the document was read from.
        headings: Headings found while rendering the body.
    """

    slug: str
    attributes: dict[str, AttributeValue]
    body: str
    source_name: str = ""
    headings: tuple[Heading, ...] = field(default_factory=tuple)

    def with_body(self, body: str, headings: tuple[Heading, ...] = ()) -> Document:
        """Return a copy of this document with its body replaced."""
        return replace(self, body=body, headings=tuple(headings))

    @property
    def is_public(self) -> bool:
        return coerce_public(self.attributes.get(PUBLIC_KEY))

    @property
    def date(self) -> datetime | None:
        return parse_date(self.attributes.get(DATE_KEY))

    @property
    def title(self) -> str:
        value = self.attributes.get(TITLE_KEY)
        if isinstance(value, str) and value.strip():
            return value
        return titleize(self.slug)


def coerce_public(value: Any) -> bool:
    """Interpret a publish flag.

    ``True`` and non-zero numbers are public, as are the strings ``true``,
    ``yes``, ``on`` and ``1`` in any case. Everything else, including a
    missing flag, is not.

    Args:
        value: The raw attribute value.

    Returns:
        Whether the document should be published.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def parse_date(value: Any) -> datetime | None:
    """Interpret a date attribute for ordering.

    Accepts ISO-8601 date or datetime strings and ``date``/``datetime``
    objects. Values without a timezone are taken as UTC so that every
    result is comparable.

    Args:
        value: The raw attribute value.

    Returns:
        A timezone-aware datetime, or None if the value is missing or
        cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
