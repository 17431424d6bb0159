# SPDX-License-Identifier: MIT
"""Staleness detection for generated sources.

Generated sources are stale when:

a) the marker file does not exist, or
b) the marker file is older than any schema source or binding file.

Any uncertainty resolves to "stale". A source that cannot be reached,
or that reports no modification time, forces regeneration: redundant
work is preferable to silently outdated generated code.
"""

from __future__ import annotations

import http.client
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from schemagen.core.source import BindingFile, SchemaSource

logger = logging.getLogger(__name__)

# Failures that mean "could not connect to the source"
PROBE_ERRORS = (OSError, ValueError, http.client.HTTPException)


class StalenessChecker:
    """Decides whether generation is required.

    Attributes:
        timeout: Timeout in seconds for remote timestamp probes, or
            None to wait indefinitely.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def is_stale(
        self,
        marker: Path | str,
        sources: Iterable[SchemaSource],
        bindings: Iterable[BindingFile] = (),
    ) -> bool:
        """Check whether the generated output is older than its inputs.

        Args:
            marker: Marker file recording the last successful generation.
            sources: Schema sources.
            bindings: Binding customization files.

        Returns:
            True if generation is required.
        """
        marker_path = Path(marker)
        prefix = f"Marker file [{os.path.abspath(marker_path)}]"

        if not marker_path.exists():
            logger.debug("%s not found. Generation required.", prefix)
            return True

        logger.debug(
            "%s found. Checking timestamps of sources and bindings.", prefix
        )
        marker_time = marker_path.stat().st_mtime

        for source in sources:
            if self._source_is_newer(source, marker_time):
                return True

        for binding in bindings:
            try:
                binding_time = binding.last_modified()
            except OSError as e:
                logger.debug(
                    "Cannot read timestamp of binding %s (%s). Generation required.",
                    binding.path,
                    e,
                )
                return True
            if binding_time > marker_time:
                logger.debug("%s is newer than the marker file.", binding.path)
                return True

        logger.debug("%s is up to date.", prefix)
        return False

    def _source_is_newer(self, source: SchemaSource, marker_time: float) -> bool:
        """Probe one source. Probe failures count as newer."""
        try:
            source_time = source.last_modified(timeout=self.timeout)
        except PROBE_ERRORS as e:
            logger.debug(
                "Cannot determine timestamp of %s (%s). Generation required.",
                source.locator,
                e,
            )
            return True

        if source_time is None:
            logger.debug(
                "%s reports no modification time. Generation required.",
                source.locator,
            )
            return True

        if source_time > marker_time:
            logger.debug("%s is newer than the marker file.", source.locator)
            return True

        return False
