# SPDX-License-Identifier: MIT
"""External code generator integrations."""

from schemagen.tools.xjc import CodeGenerator, XjcTool, find_xjc

__all__ = [
    "CodeGenerator",
    "XjcTool",
    "find_xjc",
]
