"""Document parsing for Inkwell.

Turns the raw text of a source file into a Document: the YAML metadata
header at the top of the file becomes the attributes, the rest becomes the
body, and the file name becomes the slug. Parsing is pure; no I/O happens
here.
"""

from __future__ import annotations

from datetime import date
from typing import Any

import yaml

from .content import AttributeValue, Document
from .errors import ParseError
from .utils import strip_extension

HEADER_DELIMITER = "---"
HEADER_END_MARKERS = ("---", "...")
BOM = "\ufeff"


def derive_slug(file_name: str) -> str:
    """Derive a document slug from its file name.

    Args:
        file_name: Base name of the source file, e.g. ``hello-world.md``.

    Returns:
        The file name without its extension, e.g. ``hello-world``.

    Raises:
        ParseError: If nothing is left once the extension is removed, or the
            name is not a plain file name.
    """
    slug = strip_extension(file_name)
    if not slug.strip() or slug in (".", ".."):
        raise ParseError("Cannot derive a slug from the file name", file_name)
    if "/" in slug or "\\" in slug:
        raise ParseError("File name must not contain path separators", file_name)
    return slug


def split_front_matter(
    raw_text: str, source: str | None = None
) -> tuple[dict[str, AttributeValue], str]:
    """Split a document into its metadata header and body.

    The header starts with a ``---`` line at the very top of the file and
    ends at the next ``---`` or ``...`` line. Without a header the whole
    text is the body.

    Args:
        raw_text: Full content of the source file.
        source: File name used in error messages.

    Returns:
        Tuple of (attributes, body).

    Raises:
        ParseError: If the header is unterminated, is not valid YAML, or
            does not describe a mapping.
    """
    text = raw_text[len(BOM) :] if raw_text.startswith(BOM) else raw_text
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != HEADER_DELIMITER:
        return {}, raw_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].rstrip() in HEADER_END_MARKERS:
            end = i
            break
    if end is None:
        raise ParseError("Unterminated metadata header", source)

    header = "".join(lines[1:end])
    body = "".join(lines[end + 1 :])
    try:
        data = yaml.safe_load(header)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid metadata header: {exc}", source, exc) from exc
    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise ParseError(
            f"Metadata header must be a mapping, got {type(data).__name__}", source
        )
    return normalize_attributes(data, source), body


def normalize_attributes(
    mapping: dict[Any, Any], source: str | None = None
) -> dict[str, AttributeValue]:
    """Convert YAML-loaded metadata to JSON-like attribute values.

    Dates become ISO-8601 strings, tuples become lists and mapping keys
    become strings.

    Args:
        mapping: Header mapping as returned by ``yaml.safe_load``.
        source: File name used in error messages.

    Returns:
        A new mapping holding only AttributeValue data.

    Raises:
        ParseError: If a value has a type with no JSON-like equivalent.
    """
    return {
        _normalize_key(key): _normalize(value, source)
        for key, value in mapping.items()
    }


def _normalize_key(key: Any) -> str:
    if isinstance(key, date):
        return key.isoformat()
    return str(key)


def _normalize(value: Any, source: str | None) -> AttributeValue:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_normalize(item, source) for item in value]
    if isinstance(value, dict):
        return normalize_attributes(value, source)
    raise ParseError(
        f"Unsupported metadata value of type {type(value).__name__}", source
    )


def parse_document(file_name: str, raw_text: str) -> Document:
    """Parse a source file into a Document.

    Args:
        file_name: Base name of the source file.
        raw_text: Full content of the source file.

    Returns:
        Document with slug, attributes and markdown body.
    """
    slug = derive_slug(file_name)
    attributes, body = split_front_matter(raw_text, file_name)
    return Document(slug=slug, attributes=attributes, body=body, source_name=file_name)
