# SPDX-License-Identifier: MIT
"""XJC binding compiler invocation.

The orchestrator talks to the generator through the CodeGenerator
protocol: hand it an argument vector and a classpath, get back an exit
status. XjcTool is the concrete implementation. It runs either an
``xjc`` executable or the XJC facade class through ``java``.
"""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from schemagen.configure.config import ProgramInfo, find_program

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

# Entry point used when running XJC from a classpath
XJC_FACADE_CLASS = "com.sun.tools.xjc.XJCFacade"


@runtime_checkable
class CodeGenerator(Protocol):
    """Protocol for the external code generator."""

    def run(self, arguments: Sequence[str], classpath: str) -> int:
        """Run the generator.

        Args:
            arguments: Ordered argument vector.
            classpath: Classpath for the generator.

        Returns:
            Exit status; 0 means success.
        """
        ...


class XjcTool:
    """Runs XJC as a subprocess.

    With an ``xjc`` executable the classpath is already part of the
    argument vector. With ``java`` the classpath is also used to launch
    the XJC facade class.

    Example:
        tool = XjcTool(find_xjc())
        status = tool.run(["-d", "out", "schema.xsd"], classpath="")
    """

    def __init__(
        self,
        program: ProgramInfo,
        *,
        use_java: bool = False,
        cwd: Path | None = None,
    ) -> None:
        """Create an XJC runner.

        Args:
            program: The xjc (or java, with use_java) executable.
            use_java: Launch the XJC facade class through java.
            cwd: Working directory for the subprocess.
        """
        self.program = program
        self.use_java = use_java
        self.cwd = cwd

    def command(self, arguments: Sequence[str], classpath: str) -> list[str]:
        """Build the full command line for a generator run."""
        cmd = [str(self.program.path)]
        if self.use_java:
            if classpath:
                cmd.extend(["-cp", classpath])
            cmd.append(XJC_FACADE_CLASS)
        cmd.extend(arguments)
        return cmd

    def run(self, arguments: Sequence[str], classpath: str) -> int:
        cmd = self.command(arguments, classpath)
        logger.info("Running: %s", " ".join(cmd))

        try:
            result = subprocess.run(cmd, cwd=self.cwd)
        except OSError as e:
            logger.error("Failed to run %s: %s", self.program.path, e)
            return 1
        return result.returncode


def find_xjc(
    *,
    hints: list[Path | str] | None = None,
    required: bool = False,
) -> XjcTool | None:
    """Locate XJC and return a runner for it.

    Searches for an ``xjc`` executable first, then falls back to
    ``java`` with the XJC facade class (the classpath must then
    contain the XJC jars).

    Args:
        hints: Additional paths to search.
        required: If True, raise when neither program is found.

    Returns:
        An XjcTool, or None if nothing was found.

    Raises:
        FileNotFoundError: If required and not found.
    """
    xjc = find_program("xjc", hints=hints, version_flag="-version")
    if xjc is not None:
        return XjcTool(xjc)

    java = find_program("java", hints=hints, version_flag="-version")
    if java is not None:
        logger.debug("xjc not found, using %s with %s", java.path, XJC_FACADE_CLASS)
        return XjcTool(java, use_java=True)

    if required:
        raise FileNotFoundError("Required program not found: xjc")
    return None
