"""Content store access for Inkwell.

Lists and reads the source documents of a content directory. Every blocking
filesystem call runs in a worker thread so that many reads can be in flight
on the event loop at once.

Key functions:
- list_document_files: Names of the documents in a directory.
- read_document_files: Contents of many documents, aligned with their names.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from .errors import SiteIOError
from .utils import has_extension

logger = logging.getLogger(__name__)


def _scan_files(dir_path: Path, extension: str) -> list[str]:
    names = []
    for entry in dir_path.iterdir():
        # is_file() follows symlinks, so links to directories are excluded
        if not entry.is_file():
            continue
        if has_extension(entry.name, extension):
            names.append(entry.name)
    return sorted(names)


async def list_document_files(dir_path: Path, extension: str = "") -> list[str]:
    """List the regular files directly inside a directory.

    Args:
        dir_path: Directory to scan. Subdirectories are not entered.
        extension: Case-insensitive suffix filter; empty matches every file.

    Returns:
        Sorted list of file names.

    Raises:
        SiteIOError: If the directory is missing or cannot be read.
    """
    try:
        names = await asyncio.to_thread(_scan_files, Path(dir_path), extension)
    except OSError as exc:
        raise SiteIOError(
            f"Cannot list directory: {exc.strerror or exc}", dir_path, exc
        ) from exc
    logger.debug("Found %d file(s) in %s", len(names), dir_path)
    return names


async def read_document_file(dir_path: Path, name: str) -> str:
    """Read a single UTF-8 document.

    Args:
        dir_path: Directory containing the document.
        name: File name of the document.

    Returns:
        The file content.

    Raises:
        SiteIOError: If the file cannot be read or is not valid UTF-8.
    """
    path = Path(dir_path) / name
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except OSError as exc:
        raise SiteIOError(
            f"Cannot read file: {exc.strerror or exc}", path, exc
        ) from exc
    except UnicodeDecodeError as exc:
        raise SiteIOError(f"File is not valid UTF-8: {exc}", path, exc) from exc


async def read_document_files(dir_path: Path, names: Sequence[str]) -> list[str]:
    """Read many documents concurrently.

    The reads may finish in any order; result ``i`` is always the content of
    ``names[i]``. The first failing read fails the whole batch.

    Args:
        dir_path: Directory containing the documents.
        names: File names to read.

    Returns:
        File contents in the same order as ``names``.
    """
    contents = await asyncio.gather(
        *(read_document_file(dir_path, name) for name in names)
    )
    return list(contents)
