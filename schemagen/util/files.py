# SPDX-License-Identifier: MIT
"""Filesystem helpers for the generation step.

These handle the output directory lifecycle, the marker file, and path
rendering for tool arguments.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import BinaryIO


def create_directory(path: Path | str, clear: bool = False) -> Path:
    """Ensure a directory exists, optionally clearing it first.

    Args:
        path: Directory to create.
        clear: If True, remove any existing directory tree before
            re-creating it.

    Returns:
        The directory as a Path.

    Raises:
        OSError: If the path exists but is not a directory, or if
            removal/creation fails.
    """
    directory = Path(path)
    if clear and directory.exists():
        shutil.rmtree(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def canonical_path(path: Path | str) -> str:
    """Return the canonical absolute path as a string."""
    return str(Path(path).resolve())


def relativize(path: Path | str, base: Path | str | None) -> str:
    """Render a path relative to base when it lies beneath it.

    Falls back to the absolute path when no base is given or when
    the path is outside base.

    Examples:
        >>> relativize("/work/proj/src/a.xsd", "/work/proj")
        'src/a.xsd'
        >>> relativize("/elsewhere/a.xsd", "/work/proj")
        '/elsewhere/a.xsd'
    """
    absolute = Path(os.path.abspath(path))
    if base is None:
        return str(absolute)
    try:
        return str(absolute.relative_to(os.path.abspath(base)))
    except ValueError:
        return str(absolute)


def touch(path: Path | str) -> None:
    """Create the file if needed and set its modification time to now."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.touch(exist_ok=True)
    os.utime(target, None)


def copy_stream(stream: BinaryIO, dest: Path | str) -> None:
    """Copy a binary stream into dest, creating parent directories."""
    dest_path = Path(dest)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    with open(dest_path, "wb") as out:
        shutil.copyfileobj(stream, out)
