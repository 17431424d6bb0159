# SPDX-License-Identifier: MIT
"""Assemble the generator argument vector from a GenerationRequest.

Emission order is fixed, since the generator is sensitive to both
order and duplication:

1. Enabled flags.
2. Named arguments (the formatted proxy first, when one is active).
3. ``-extension`` when an episode is requested and extension mode is
   off, followed by ``-episode <path>``.
4. ``-catalog <path>``.
5. Raw pass-through tokens.
6. One ``-b <path>`` pair per binding file.
7. One token per schema source.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from schemagen.core.arguments import ArgumentBuilder, format_proxy
from schemagen.core.errors import NoSourcesFoundError
from schemagen.util.files import canonical_path, relativize

if TYPE_CHECKING:
    from schemagen.core.request import GenerationRequest

logger = logging.getLogger(__name__)

EXTENSION_FLAG = "extension"
PROXY_ARGUMENT = "httpproxy"


class ArgumentAssembler:
    """Builds the ordered token vector for one generator invocation."""

    def __init__(self, tool_name: str = "XJC") -> None:
        self.tool_name = tool_name

    def build(self, request: GenerationRequest) -> list[str]:
        """Assemble the argument vector.

        Args:
            request: The generation request.

        Returns:
            The ordered argument tokens.

        Raises:
            NoSourcesFoundError: If the request has no schema sources.
            OSError: If the episode file's parent directory cannot be
                created.
        """
        builder = ArgumentBuilder()

        for name, enabled in request.flags.items():
            builder.with_flag(enabled, name)

        named = dict(request.named_arguments)
        if request.proxy is not None and not named.get(PROXY_ARGUMENT):
            builder.with_named_argument(PROXY_ARGUMENT, format_proxy(request.proxy))
            named.pop(PROXY_ARGUMENT, None)
        for name, value in named.items():
            builder.with_named_argument(name, value)

        episode = request.episode
        if episode.enabled and episode.file is not None:
            # The episode argument requires extension mode
            if not builder.has_flag(EXTENSION_FLAG):
                logger.info(
                    "Adding '%s' flag to %s arguments, since episode generation "
                    "requires it",
                    EXTENSION_FLAG,
                    self.tool_name,
                )
                builder.with_flag(True, EXTENSION_FLAG)

            episode_file = Path(episode.file)
            episode_file.parent.mkdir(parents=True, exist_ok=True)
            builder.with_named_argument("episode", canonical_path(episode_file))

        if request.catalog is not None:
            builder.with_named_argument("catalog", canonical_path(request.catalog))

        builder.with_raw_arguments(request.raw_arguments)

        for binding in request.bindings:
            # Each binding file must be a separate argument pair
            builder.with_named_argument("-b", relativize(binding.path, request.base_dir))

        if not request.sources:
            logger.warning(
                "No schema sources found. Please check your configuration."
            )
            raise NoSourcesFoundError()

        builder.with_raw_arguments(
            source.to_argument(request.base_dir) for source in request.sources
        )

        arguments = builder.build()
        log_arguments(arguments, self.tool_name)
        return arguments


def log_arguments(arguments: list[str], tool_name: str) -> None:
    """Log the argument vector at debug level, one token per line."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("%s arguments (%d):", tool_name, len(arguments))
    for index, token in enumerate(arguments):
        logger.debug("  %d: %s", index, token)
