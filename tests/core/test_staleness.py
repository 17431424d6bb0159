# SPDX-License-Identifier: MIT
"""Tests for schemagen.core.staleness."""

from __future__ import annotations

import os
import urllib.error
import zipfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from schemagen.core.source import ArchiveEntry, BindingFile, LocalFile, SchemaSource
from schemagen.core.staleness import StalenessChecker

OLD = 1_000_000
MARKER_TIME = 2_000_000
NEW = 3_000_000


def write(path: Path, mtime: float, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    os.utime(path, (mtime, mtime))
    return path


def fake_source(result: float | None = None, error: Exception | None = None) -> MagicMock:
    source = MagicMock(spec=SchemaSource)
    source.locator = "http://example.com/a.xsd"
    if error is not None:
        source.last_modified.side_effect = error
    else:
        source.last_modified.return_value = result
    return source


@pytest.fixture
def marker(tmp_path: Path) -> Path:
    return write(tmp_path / "stale" / ".flag", MARKER_TIME)


class TestMarkerMissing:
    def test_missing_marker_is_stale(self, tmp_path: Path) -> None:
        checker = StalenessChecker()
        assert checker.is_stale(tmp_path / "nope", [], []) is True

    def test_missing_marker_skips_probes(self, tmp_path: Path) -> None:
        source = fake_source(OLD)
        StalenessChecker().is_stale(tmp_path / "nope", [source], [])
        source.last_modified.assert_not_called()


class TestLocalTimestamps:
    def test_all_older_is_fresh(self, tmp_path: Path, marker: Path) -> None:
        a = write(tmp_path / "a.xsd", OLD)
        b = write(tmp_path / "b.xsd", OLD)
        binding = write(tmp_path / "a.xjb", OLD)

        checker = StalenessChecker()
        assert (
            checker.is_stale(marker, [LocalFile(a), LocalFile(b)], [BindingFile(binding)])
            is False
        )

    def test_no_inputs_with_marker_is_fresh(self, marker: Path) -> None:
        assert StalenessChecker().is_stale(marker, [], []) is False

    def test_newer_source_is_stale(self, tmp_path: Path, marker: Path) -> None:
        a = write(tmp_path / "a.xsd", OLD)
        b = write(tmp_path / "b.xsd", NEW)
        assert StalenessChecker().is_stale(marker, [LocalFile(a), LocalFile(b)]) is True

    def test_newer_binding_is_stale(self, tmp_path: Path, marker: Path) -> None:
        a = write(tmp_path / "a.xsd", OLD)
        binding = write(tmp_path / "a.xjb", NEW)
        assert (
            StalenessChecker().is_stale(marker, [LocalFile(a)], [BindingFile(binding)])
            is True
        )

    def test_equal_timestamp_is_fresh(self, tmp_path: Path, marker: Path) -> None:
        a = write(tmp_path / "a.xsd", MARKER_TIME)
        assert StalenessChecker().is_stale(marker, [LocalFile(a)]) is False

    def test_missing_source_is_stale(self, tmp_path: Path, marker: Path) -> None:
        assert StalenessChecker().is_stale(marker, [LocalFile(tmp_path / "x.xsd")]) is True

    def test_missing_binding_is_stale(self, tmp_path: Path, marker: Path) -> None:
        checker = StalenessChecker()
        assert checker.is_stale(marker, [], [BindingFile(tmp_path / "x.xjb")]) is True


class TestProbeFailures:
    """Any probe failure resolves to stale, regardless of other sources."""

    @pytest.mark.parametrize(
        "error",
        [
            urllib.error.URLError("connection refused"),
            TimeoutError("timed out"),
            ConnectionResetError(),
            ValueError("unknown url type"),
        ],
    )
    def test_probe_error_is_stale(
        self, tmp_path: Path, marker: Path, error: Exception
    ) -> None:
        fresh = LocalFile(write(tmp_path / "a.xsd", OLD))
        failing = fake_source(error=error)

        assert StalenessChecker().is_stale(marker, [fresh, failing]) is True

    def test_failure_stops_further_probes(self, marker: Path) -> None:
        failing = fake_source(error=urllib.error.URLError("down"))
        later = fake_source(OLD)

        assert StalenessChecker().is_stale(marker, [failing, later]) is True
        later.last_modified.assert_not_called()

    def test_unknown_timestamp_is_stale(self, marker: Path) -> None:
        assert StalenessChecker().is_stale(marker, [fake_source(None)]) is True

    def test_remote_older_is_fresh(self, marker: Path) -> None:
        assert StalenessChecker().is_stale(marker, [fake_source(OLD)]) is False

    def test_timeout_passed_to_probe(self, marker: Path) -> None:
        source = fake_source(OLD)
        StalenessChecker(timeout=5).is_stale(marker, [source])
        source.last_modified.assert_called_once_with(timeout=5)

    def test_archive_missing_entry_is_stale(self, tmp_path: Path, marker: Path) -> None:
        jar = tmp_path / "a.jar"
        with zipfile.ZipFile(jar, "w") as archive:
            archive.writestr("a.xsd", "")
        os.utime(jar, (OLD, OLD))

        checker = StalenessChecker()
        assert checker.is_stale(marker, [ArchiveEntry(jar, "a.xsd")]) is False
        assert checker.is_stale(marker, [ArchiveEntry(jar, "b.xsd")]) is True
