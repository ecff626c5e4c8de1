"""Output directory management for Inkwell.

The output directory is always a pure function of the current sources:
before each build every previously generated page directly inside it is
removed, then the new pages are written. Files with other extensions and
subdirectories are left alone.

Key functions:
- ensure_output_dir: Create the output directory if needed.
- purge: Delete generated pages left over from a previous build.
- write: Write one page.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .errors import SiteIOError
from .store import list_document_files

logger = logging.getLogger(__name__)


def _make_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


async def ensure_output_dir(path: Path) -> None:
    """Create a directory and its parents if they do not exist.

    Args:
        path: Directory to create.

    Raises:
        SiteIOError: If the directory cannot be created, for instance
            because a file already exists at that path.
    """
    try:
        await asyncio.to_thread(_make_dir, Path(path))
    except OSError as exc:
        raise SiteIOError(
            f"Cannot create output directory: {exc.strerror or exc}", path, exc
        ) from exc


async def _remove(path: Path) -> None:
    try:
        await asyncio.to_thread(path.unlink)
    except OSError as exc:
        raise SiteIOError(
            f"Cannot delete file: {exc.strerror or exc}", path, exc
        ) from exc
    logger.debug("Removed %s", path)


async def purge(path: Path, extension: str) -> list[str]:
    """Delete every file directly inside a directory matching an extension.

    Subdirectories are not entered. Deletions run concurrently; a single
    failure fails the whole purge.

    Args:
        path: Directory to clean.
        extension: Case-insensitive suffix of the files to delete.

    Returns:
        Names of the deleted files.

    Raises:
        SiteIOError: If the directory cannot be listed or a file cannot be
            deleted.
    """
    directory = Path(path)
    names = await list_document_files(directory, extension)
    await asyncio.gather(*(_remove(directory / name) for name in names))
    return names


def _write_text(path: Path, content: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


async def write(path: Path, content: str) -> None:
    """Write a file, creating it or replacing its content.

    Args:
        path: File to write.
        content: Text to write, encoded as UTF-8.

    Raises:
        SiteIOError: If the file cannot be written.
    """
    try:
        await asyncio.to_thread(_write_text, Path(path), content)
    except OSError as exc:
        raise SiteIOError(
            f"Cannot write file: {exc.strerror or exc}", path, exc
        ) from exc
    logger.debug("Wrote %s", path)
