# SPDX-License-Identifier: MIT
"""Proxy settings source.

The active proxy is read per run from the standard proxy environment
variables and never persisted.
"""

from __future__ import annotations

import logging
import os
import urllib.parse
from typing import TYPE_CHECKING

from schemagen.core.request import ProxySpec

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# Checked in order; the first one set wins
PROXY_VARIABLES = ("https_proxy", "HTTPS_PROXY", "http_proxy", "HTTP_PROXY")

DEFAULT_PORTS = {"http": 80, "https": 443}


def parse_proxy(value: str) -> ProxySpec | None:
    """Parse a proxy URL such as ``http://user:pw@host:3128``.

    Returns:
        The ProxySpec, or None if the value has no host.
    """
    text = value.strip()
    if not text:
        return None
    if "://" not in text:
        text = f"http://{text}"

    parts = urllib.parse.urlsplit(text)
    if not parts.hostname:
        return None

    try:
        port = parts.port
    except ValueError:
        logger.warning("Ignoring proxy with invalid port: %s", value)
        return None
    if port is None:
        port = DEFAULT_PORTS.get(parts.scheme, 80)

    username = urllib.parse.unquote(parts.username) if parts.username else None
    password = urllib.parse.unquote(parts.password) if parts.password else None
    return ProxySpec(
        host=parts.hostname, port=port, username=username, password=password
    )


def proxy_from_environment(environ: Mapping[str, str] | None = None) -> ProxySpec | None:
    """Return the active proxy from the environment, if any.

    Args:
        environ: Environment mapping; defaults to os.environ.
    """
    if environ is None:
        environ = os.environ
    for name in PROXY_VARIABLES:
        value = environ.get(name)
        if value:
            proxy = parse_proxy(value)
            if proxy is not None:
                logger.debug("Using proxy %s:%s from %s", proxy.host, proxy.port, name)
                return proxy
    return None
