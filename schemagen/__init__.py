# SPDX-License-Identifier: MIT
"""
Schemagen: incremental schema-to-source generation.

Schemagen decides whether generated sources are stale with respect to
their schemas and bindings, and assembles a deterministic invocation
of the XJC binding compiler when they are.
"""

from __future__ import annotations

import json
import os

from schemagen.core.assembler import ArgumentAssembler
from schemagen.core.context import LocalProjectContext, ProjectContext
from schemagen.core.errors import SchemagenError
from schemagen.core.orchestrator import (
    GenerationConfig,
    GenerationOrchestrator,
)
from schemagen.core.request import GenerationRequest, XjcOptions
from schemagen.core.source import (
    ArchiveEntry,
    BindingFile,
    LocalFile,
    RemoteResource,
    source_from_locator,
)
from schemagen.core.staleness import StalenessChecker

__version__ = "0.1.0"

# Internal storage for CLI variables, layered over SCHEMAGEN_VARS
_cli_vars: dict[str, str] | None = None


def _load_vars() -> dict[str, str]:
    """Return the variable store, loading SCHEMAGEN_VARS on first use."""
    global _cli_vars

    if _cli_vars is None:
        _cli_vars = {}
        schemagen_vars = os.environ.get("SCHEMAGEN_VARS")
        if schemagen_vars:
            try:
                loaded = json.loads(schemagen_vars)
            except json.JSONDecodeError:
                loaded = {}
            if isinstance(loaded, dict):
                _cli_vars.update(loaded)
    return _cli_vars


def _set_cli_vars(variables: dict[str, str]) -> None:
    """Set variables parsed from the command line (called by the CLI)."""
    _load_vars().update(variables)


def get_var(name: str, default: str | None = None) -> str | None:
    """Get a variable set on the command line or from the environment.

    Variables can be set when invoking schemagen:
        schemagen generate SCHEMAGEN_OUTPUT_DIR=gen -s order.xsd

    Precedence (highest to lowest):
        1. Command line: schemagen generate VAR=value
        2. SCHEMAGEN_VARS: a JSON object of variables
        3. Environment variable: VAR=value schemagen

    Args:
        name: Variable name.
        default: Default value if not set.

    Returns:
        The variable value, or default if not set.
    """
    variables = _load_vars()
    if name in variables:
        return variables[name]

    return os.environ.get(name, default)


__all__ = [
    "__version__",
    "get_var",
    "ArgumentAssembler",
    "ArchiveEntry",
    "BindingFile",
    "GenerationConfig",
    "GenerationOrchestrator",
    "GenerationRequest",
    "LocalFile",
    "LocalProjectContext",
    "ProjectContext",
    "RemoteResource",
    "SchemagenError",
    "StalenessChecker",
    "XjcOptions",
    "source_from_locator",
]
