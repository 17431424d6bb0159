# SPDX-License-Identifier: MIT
"""Tests for schemagen.tools.xjc."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from schemagen.configure.config import ProgramInfo
from schemagen.tools.xjc import XJC_FACADE_CLASS, CodeGenerator, XjcTool, find_xjc


class TestXjcTool:
    def test_is_code_generator(self) -> None:
        assert isinstance(XjcTool(ProgramInfo(Path("xjc"))), CodeGenerator)

    def test_command_with_xjc(self) -> None:
        tool = XjcTool(ProgramInfo(Path("/opt/jaxb/bin/xjc")))
        cmd = tool.command(["-d", "out", "a.xsd"], classpath="lib/a.jar")
        assert cmd == [str(Path("/opt/jaxb/bin/xjc")), "-d", "out", "a.xsd"]

    def test_command_with_java(self) -> None:
        tool = XjcTool(ProgramInfo(Path("/usr/bin/java")), use_java=True)
        cmd = tool.command(["a.xsd"], classpath="lib/jaxb-xjc.jar")
        assert cmd == [
            str(Path("/usr/bin/java")),
            "-cp",
            "lib/jaxb-xjc.jar",
            XJC_FACADE_CLASS,
            "a.xsd",
        ]

    def test_command_with_java_no_classpath(self) -> None:
        tool = XjcTool(ProgramInfo(Path("java")), use_java=True)
        assert tool.command(["a.xsd"], classpath="") == [
            "java",
            XJC_FACADE_CLASS,
            "a.xsd",
        ]

    def test_run_returns_exit_status(self, tmp_path: Path) -> None:
        tool = XjcTool(ProgramInfo(Path("xjc")), cwd=tmp_path)
        with patch("subprocess.run", return_value=MagicMock(returncode=3)) as run:
            assert tool.run(["a.xsd"], "") == 3
        run.assert_called_once_with(["xjc", "a.xsd"], cwd=tmp_path)

    def test_run_launch_failure(self) -> None:
        tool = XjcTool(ProgramInfo(Path("xjc")))
        with patch("subprocess.run", side_effect=FileNotFoundError("xjc")):
            assert tool.run(["a.xsd"], "") == 1


class TestFindXjc:
    def test_prefers_xjc(self) -> None:
        xjc = ProgramInfo(Path("/usr/bin/xjc"))
        with patch("schemagen.tools.xjc.find_program", return_value=xjc) as find:
            tool = find_xjc()
        assert tool is not None
        assert tool.program is xjc
        assert tool.use_java is False
        assert find.call_args[0][0] == "xjc"

    def test_falls_back_to_java(self) -> None:
        java = ProgramInfo(Path("/usr/bin/java"))
        with patch("schemagen.tools.xjc.find_program", side_effect=[None, java]):
            tool = find_xjc()
        assert tool is not None
        assert tool.program is java
        assert tool.use_java is True

    def test_nothing_found(self) -> None:
        with patch("schemagen.tools.xjc.find_program", return_value=None):
            assert find_xjc() is None

    def test_nothing_found_required(self) -> None:
        with patch("schemagen.tools.xjc.find_program", return_value=None):
            with pytest.raises(FileNotFoundError, match="xjc"):
                find_xjc(required=True)

    def test_hints_passed(self, tmp_path: Path) -> None:
        with patch("schemagen.tools.xjc.find_program", return_value=None) as find:
            find_xjc(hints=[tmp_path])
        assert find.call_args.kwargs["hints"] == [tmp_path]
