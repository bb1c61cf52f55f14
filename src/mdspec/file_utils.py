"""Asynchronous file reading for specification sources."""

from __future__ import annotations

import asyncio
from pathlib import Path

from mdspec.config import MDSPEC_ENCODING
from mdspec.exceptions import SourceReadError


def read_text(path: Path, encoding: str = MDSPEC_ENCODING) -> str:
    """Read a whole file as text.

    Raises:
        SourceReadError: If the file cannot be read or decoded.
    """
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read {path}: {exc}") from exc


async def read_text_async(path: Path, encoding: str = MDSPEC_ENCODING) -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.

    Raises:
        SourceReadError: If the file cannot be read or decoded.
    """
    return await asyncio.to_thread(read_text, path, encoding)
