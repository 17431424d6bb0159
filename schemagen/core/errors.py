# SPDX-License-Identifier: MIT
"""Custom exceptions for schemagen.

All schemagen exceptions inherit from SchemagenError. Staleness probe
failures are never raised as errors; they resolve to "stale" inside
the checker. Everything else propagates to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from schemagen.core.source import SchemaSource


class SchemagenError(Exception):
    """Base class for all schemagen exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(SchemagenError):
    """Invalid configuration file or configuration values."""


class GenerationError(SchemagenError):
    """Error during the generation step.

    Wraps I/O failures (directory creation, schema copies) so callers
    see a single failure kind. The original exception is chained as
    ``__cause__``.
    """


class NoSourcesFoundError(SchemagenError):
    """No schema sources were resolved for the generation step."""

    def __init__(self, message: str = "no schema sources found") -> None:
        super().__init__(message)


class LocatorResolutionError(SchemagenError):
    """A source locator could not be decomposed into a file name.

    Attributes:
        locator: The offending locator string.
    """

    def __init__(self, locator: str, reason: str = "") -> None:
        self.locator = locator
        message = f"cannot resolve locator [{locator}]"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ToolInvocationError(SchemagenError):
    """The external code generator reported failure.

    Attributes:
        exit_code: The non-zero status returned by the tool.
        sources: The schema sources handed to the tool.
    """

    def __init__(self, exit_code: int, sources: Sequence[SchemaSource]) -> None:
        self.exit_code = exit_code
        self.sources = list(sources)
        super().__init__(format_failure_report(self.sources))


def format_failure_report(sources: Sequence[SchemaSource]) -> str:
    """Render the boxed failure report listing every source by index."""
    lines = ["", "+=================== [XJC Error]", "|"]
    for index, source in enumerate(sources):
        lines.append(f"| {index}: {source.locator}")
    lines.append("|")
    lines.append("+=================== [End XJC Error]")
    return "\n".join(lines) + "\n"
