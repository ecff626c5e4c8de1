"""Utility functions for Inkwell.

Small string and path helpers shared by the pipeline modules.

Key functions:
    has_extension: Case-insensitive suffix test for file names.
    strip_extension: Remove the final extension from a file name.
    titleize: Convert a slug to a human-readable title.
    strip_tags: Reduce an HTML fragment to plain text.
    generate_heading_id: Convert heading text to an anchor id.
    escape_html: Escape special HTML characters.
"""

from __future__ import annotations

import html
import re

TAG_RE = re.compile(r"<[^>]+>")


def has_extension(name: str, extension: str) -> bool:
    """Check whether a file name ends with an extension.

    Args:
        name: File name.
        extension: Suffix such as ".md"; an empty string matches everything.

    Returns:
        True if ``name`` ends with ``extension``, ignoring case.

    Examples:
        >>> has_extension("Notes.MD", ".md")
        True
    """
    if not extension:
        return True
    return name.lower().endswith(extension.lower())


def strip_extension(name: str) -> str:
    """Remove the final extension from a file name.

    Examples:
        >>> strip_extension("hello-world.md")
        'hello-world'

        >>> strip_extension("release.v2.md")
        'release.v2'
    """
    stem, dot, _ = name.rpartition(".")
    return stem if dot else name


def titleize(slug: str) -> str:
    """Convert a slug to a human-readable title.

    Examples:
        >>> titleize("hello-world")
        'Hello World'
    """
    words = re.split(r"[\s\-_]+", slug)
    return " ".join(word.capitalize() for word in words if word) or "Untitled"


def strip_tags(text: str) -> str:
    """Remove HTML tags and decode entities, leaving plain text."""
    return html.unescape(TAG_RE.sub("", text))


def generate_heading_id(text: str) -> str:
    """Generate a URL-friendly id from heading text.

    Inline markup is dropped, the text is lower-cased, punctuation removed
    and runs of whitespace or hyphens collapsed to a single hyphen.

    Args:
        text: The heading text, possibly containing inline HTML.

    Returns:
        Slug suitable for anchor links; may be empty.
    """
    slug = strip_tags(text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Examples:
        >>> escape_html('Tom & "Jerry"')
        'Tom &amp; &quot;Jerry&quot;'
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )
