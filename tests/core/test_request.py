# SPDX-License-Identifier: MIT
"""Tests for schemagen.core.request."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from schemagen.core.request import (
    STANDARD_EPISODE_FILENAME,
    EpisodeConfig,
    GenerationRequest,
    ProxySpec,
    SourceContentType,
    XjcOptions,
)
from schemagen.core.source import LocalFile


class TestSourceContentType:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("xmlschema", SourceContentType.XML_SCHEMA),
            ("XML_SCHEMA", SourceContentType.XML_SCHEMA),
            ("relaxng-compact", SourceContentType.RELAXNG_COMPACT),
            ("Relaxng_Compact", SourceContentType.RELAXNG_COMPACT),
            ("wsdl", SourceContentType.WSDL),
        ],
    )
    def test_parse(self, text: str, expected: SourceContentType) -> None:
        assert SourceContentType.parse(text) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="unknown source content type"):
            SourceContentType.parse("yaml")


class TestEpisodeConfig:
    def test_under(self, tmp_path: Path) -> None:
        episode = EpisodeConfig.under(tmp_path)
        assert episode.enabled is True
        assert episode.file == tmp_path / "META-INF" / STANDARD_EPISODE_FILENAME

    def test_enabled_requires_file(self) -> None:
        with pytest.raises(ValueError):
            EpisodeConfig(enabled=True)

    def test_default_disabled(self) -> None:
        assert EpisodeConfig().enabled is False


class TestGenerationRequest:
    def test_is_frozen(self) -> None:
        request = GenerationRequest()
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.catalog = Path("x")  # type: ignore[misc]

    def test_copies_caller_containers(self) -> None:
        flags = {"npa": True}
        sources = [LocalFile(Path("a.xsd"))]
        request = GenerationRequest(flags=flags, sources=sources)  # type: ignore[arg-type]

        flags["nv"] = True
        sources.append(LocalFile(Path("b.xsd")))

        assert dict(request.flags) == {"npa": True}
        assert len(request.sources) == 1


class TestXjcOptions:
    def test_flag_order(self) -> None:
        assert list(XjcOptions().flags()) == [
            "xmlschema",
            "npa",
            "nv",
            "verbose",
            "quiet",
            "enableIntrospection",
            "extension",
            "readOnly",
            "no-header",
            "mark-generated",
        ]

    def test_source_type_flag(self) -> None:
        flags = XjcOptions(source_type=SourceContentType.WSDL).flags()
        assert flags["wsdl"] is True
        assert "xmlschema" not in flags

    def test_to_request_named_arguments(self, tmp_path: Path) -> None:
        options = XjcOptions(encoding="UTF-8", package_name="com.example", target="2.1")
        request = options.to_request(
            output_dir=tmp_path / "out",
            sources=[LocalFile(tmp_path / "a.xsd")],
            classpath="lib/a.jar",
        )
        assert list(request.named_arguments.items()) == [
            ("encoding", "UTF-8"),
            ("p", "com.example"),
            ("target", "2.1"),
            ("d", str(tmp_path / "out")),
            ("classpath", "lib/a.jar"),
        ]

    def test_to_request_episode_defaults_to_output_dir(self, tmp_path: Path) -> None:
        request = XjcOptions().to_request(output_dir=tmp_path, sources=[])
        assert request.episode.enabled is True
        assert request.episode.file == tmp_path / "META-INF" / STANDARD_EPISODE_FILENAME

    def test_to_request_episode_dir(self, tmp_path: Path) -> None:
        request = XjcOptions().to_request(
            output_dir=tmp_path / "out", sources=[], episode_dir=tmp_path / "res"
        )
        assert request.episode.file == (
            tmp_path / "res" / "META-INF" / STANDARD_EPISODE_FILENAME
        )

    def test_to_request_no_episode(self, tmp_path: Path) -> None:
        request = XjcOptions(generate_episode=False).to_request(
            output_dir=tmp_path, sources=[]
        )
        assert request.episode.enabled is False

    def test_to_request_carries_extras(self, tmp_path: Path) -> None:
        proxy = ProxySpec("h", 80)
        options = XjcOptions(arguments=["-Xfluent-api"], catalog=Path("c.cat"))
        request = options.to_request(
            output_dir=tmp_path, sources=[], proxy=proxy, base_dir=tmp_path
        )
        assert request.raw_arguments == ("-Xfluent-api",)
        assert request.catalog == Path("c.cat")
        assert request.proxy is proxy
        assert request.base_dir == tmp_path
