# SPDX-License-Identifier: MIT
"""Argument vector construction for the code generator.

The generator is sensitive to token order and duplication, so arguments
are accumulated through an explicit builder that preserves call order.
There are three token categories:

1. Flags: ``-name``, emitted only when enabled.
2. Named arguments: ``-name value`` as two separate tokens, emitted
   only when the value is non-empty.
3. Raw arguments: pre-built tokens appended verbatim.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from schemagen.core.request import ProxySpec


def _option(name: str) -> str:
    """Prefix a name with a single dash unless it already has one."""
    return name if name.startswith("-") else f"-{name}"


class ArgumentBuilder:
    """Ordered accumulator for generator command-line tokens.

    Example:
        >>> builder = ArgumentBuilder()
        >>> builder.with_flag(True, "npa").with_flag(False, "nv")
        ArgumentBuilder(['-npa'])
        >>> builder.with_named_argument("p", "com.example").build()
        ['-npa', '-p', 'com.example']
    """

    def __init__(self) -> None:
        self._tokens: list[str] = []

    def with_flag(self, enabled: bool, name: str) -> ArgumentBuilder:
        """Add ``-name`` if enabled. Disabled flags emit nothing."""
        if enabled:
            self._tokens.append(_option(name))
        return self

    def with_named_argument(self, name: str, value: str | None) -> ArgumentBuilder:
        """Add ``-name value`` as two tokens when value is non-empty."""
        if value:
            self._tokens.append(_option(name))
            self._tokens.append(value)
        return self

    def with_raw_arguments(self, tokens: Iterable[str]) -> ArgumentBuilder:
        """Append pre-built tokens verbatim, in order."""
        self._tokens.extend(tokens)
        return self

    def has_flag(self, name: str) -> bool:
        """Check whether a flag token has already been added."""
        return _option(name) in self._tokens

    def build(self) -> list[str]:
        """Return a copy of the accumulated tokens."""
        return list(self._tokens)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._tokens!r})"


def format_proxy(proxy: ProxySpec | None) -> str | None:
    """Render a proxy as ``[username[:password]@]host:port``.

    Args:
        proxy: The active proxy, or None.

    Returns:
        The formatted proxy string, or None when no proxy is active.

    Examples:
        >>> from schemagen.core.request import ProxySpec
        >>> format_proxy(ProxySpec("h", 8080, username="u", password="p"))
        'u:p@h:8080'
        >>> format_proxy(ProxySpec("h", 80))
        'h:80'
        >>> format_proxy(None) is None
        True
    """
    if proxy is None:
        return None

    credentials = ""
    if proxy.username is not None:
        credentials = proxy.username
        if proxy.password is not None:
            credentials += f":{proxy.password}"
        credentials += "@"

    return f"{credentials}{proxy.host}:{proxy.port}"
