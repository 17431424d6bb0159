# SPDX-License-Identifier: MIT
"""Configuration for schemagen.

Provides program discovery for the generator and loading of JSON
configuration files into XjcOptions.
"""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from schemagen.core.errors import ConfigurationError
from schemagen.core.request import SourceContentType, XjcOptions


@dataclass
class ProgramInfo:
    """Information about a found program.

    Attributes:
        path: Path to the program executable.
        version: Version string if detected.
    """

    path: Path
    version: str | None = None


def find_program(
    name: str,
    *,
    hints: list[Path | str] | None = None,
    version_flag: str = "--version",
    required: bool = False,
) -> ProgramInfo | None:
    """Find a program on the system.

    Searches for the program in:
    1. Hint paths (if provided)
    2. PATH environment variable

    Args:
        name: Program name (e.g., 'xjc', 'java').
        hints: Additional paths to search.
        version_flag: Flag to get version (for version detection).
        required: If True, raise error if not found.

    Returns:
        ProgramInfo if found, None otherwise.

    Raises:
        FileNotFoundError: If required and not found.
    """
    found_path: Path | None = None

    if hints:
        for hint in hints:
            hint_path = Path(hint)
            if hint_path.is_file() and os.access(hint_path, os.X_OK):
                found_path = hint_path
                break
            # Check if hint is a directory containing the program
            candidate = hint_path / name
            if sys.platform == "win32" and not candidate.suffix:
                candidate = candidate.with_suffix(".exe")
            if candidate.is_file() and os.access(candidate, os.X_OK):
                found_path = candidate
                break

    if found_path is None:
        result = shutil.which(name)
        if result:
            found_path = Path(result)

    if found_path is None:
        if required:
            raise FileNotFoundError(f"Required program not found: {name}")
        return None

    return ProgramInfo(path=found_path, version=_get_program_version(found_path, version_flag))


def _get_program_version(path: Path, version_flag: str) -> str | None:
    """Try to get the version of a program."""
    try:
        result = subprocess.run(
            [str(path), version_flag],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0:
            # Java tools print their version on stderr
            for line in (result.stdout + "\n" + result.stderr).split("\n"):
                line = line.strip()
                if line:
                    return line
        return None
    except (subprocess.TimeoutExpired, OSError):
        return None


def load_config(path: Path | str) -> dict[str, Any]:
    """Load a JSON configuration file.

    Args:
        path: Path to the config file.

    Returns:
        Configuration dict.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If the file is not a JSON object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path}: invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: expected a JSON object")
    return data


# Options that take a single string value
STRING_OPTIONS = ("encoding", "package_name", "target", "schemas_within_artifact")


def options_from_config(data: dict[str, Any]) -> XjcOptions:
    """Build XjcOptions from a configuration dict.

    Keys are the XjcOptions attribute names. Unknown keys are rejected
    so typos do not silently fall back to defaults.

    Raises:
        ConfigurationError: On unknown keys or invalid values.
    """
    known = {f.name: f for f in fields(XjcOptions)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigurationError(f"unknown configuration keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, value in data.items():
        if key == "source_type":
            try:
                value = SourceContentType.parse(str(value))
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
        elif key == "catalog":
            if value is not None and not isinstance(value, str):
                raise ConfigurationError("'catalog' must be a path string")
            value = Path(value) if value is not None else None
        elif key in STRING_OPTIONS:
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"'{key}' must be a string")
        elif key == "arguments":
            if not isinstance(value, list) or not all(
                isinstance(token, str) for token in value
            ):
                raise ConfigurationError("'arguments' must be a list of strings")
            value = list(value)
        elif isinstance(getattr(XjcOptions, key, None), bool) and not isinstance(
            value, bool
        ):
            raise ConfigurationError(f"'{key}' must be true or false")
        values[key] = value

    return XjcOptions(**values)
