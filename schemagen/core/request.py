# SPDX-License-Identifier: MIT
"""Generation request model.

A GenerationRequest is the complete, immutable description of one
generator invocation: which flags are on, which named arguments carry
values, which sources and bindings go in, and where the episode goes.

XjcOptions is the typed, user-facing configuration. It knows the
generator's native option names and the order they are emitted in,
and turns itself into a GenerationRequest.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from schemagen.core.source import BindingFile, SchemaSource

# Episode file name, placed under <episode dir>/META-INF/
STANDARD_EPISODE_FILENAME = "sun-jaxb.episode"


class SourceContentType(Enum):
    """Content type of the schema sources; maps to one generator flag."""

    XML_SCHEMA = "xmlschema"
    DTD = "dtd"
    RELAXNG = "relaxng"
    RELAXNG_COMPACT = "relaxng-compact"
    WSDL = "wsdl"

    @property
    def flag(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> SourceContentType:
        """Parse a content type by value or by name, case-insensitively."""
        normalized = text.strip().lower().replace("_", "-")
        for member in cls:
            if normalized in (member.value, member.name.lower().replace("_", "-")):
                return member
        raise ValueError(f"unknown source content type: {text!r}")


@dataclass(frozen=True)
class ProxySpec:
    """An HTTP(S) proxy handed to the generator.

    Attributes:
        host: Proxy host name.
        port: Proxy port.
        username: Optional user name.
        password: Optional password; only used with a username.
    """

    host: str
    port: int
    username: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class EpisodeConfig:
    """Episode file generation settings.

    Attributes:
        enabled: Whether the generator should write an episode file.
        file: Target episode file.
    """

    enabled: bool = False
    file: Path | None = None

    def __post_init__(self) -> None:
        if self.enabled and self.file is None:
            raise ValueError("episode generation is enabled but no file is set")

    @classmethod
    def under(
        cls, directory: Path | str, file_name: str = STANDARD_EPISODE_FILENAME
    ) -> EpisodeConfig:
        """Create an enabled episode config at <directory>/META-INF/<file_name>."""
        return cls(enabled=True, file=Path(directory) / "META-INF" / file_name)


@dataclass(frozen=True)
class GenerationRequest:
    """Everything the argument assembler needs for one invocation.

    Attributes:
        flags: Ordered boolean flags (name -> on/off).
        named_arguments: Ordered named arguments (name -> value); None
            or empty values are omitted.
        raw_arguments: Pre-built tokens passed through verbatim.
        sources: Schema sources, in order.
        bindings: Binding customization files, in order.
        episode: Episode generation settings.
        catalog: Optional catalog file for entity resolution.
        proxy: Optional active proxy.
        base_dir: Directory local paths are relativized against.
    """

    flags: Mapping[str, bool] = field(default_factory=dict)
    named_arguments: Mapping[str, str | None] = field(default_factory=dict)
    raw_arguments: tuple[str, ...] = ()
    sources: tuple[SchemaSource, ...] = ()
    bindings: tuple[BindingFile, ...] = ()
    episode: EpisodeConfig = field(default_factory=EpisodeConfig)
    catalog: Path | None = None
    proxy: ProxySpec | None = None
    base_dir: Path | None = None

    def __post_init__(self) -> None:
        # Freeze caller-supplied containers
        object.__setattr__(self, "flags", dict(self.flags))
        object.__setattr__(self, "named_arguments", dict(self.named_arguments))
        object.__setattr__(self, "raw_arguments", tuple(self.raw_arguments))
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "bindings", tuple(self.bindings))


@dataclass
class XjcOptions:
    """Typed configuration for the XJC binding compiler.

    Each attribute corresponds to one generator option; see to_request()
    for the mapping and emission order.
    """

    source_type: SourceContentType = SourceContentType.XML_SCHEMA
    no_package_level_annotations: bool = False
    lax_schema_validation: bool = False
    verbose: bool = False
    quiet: bool = False
    enable_introspection: bool = False
    extension: bool = False
    read_only: bool = False
    no_generated_header_comments: bool = False
    add_generated_annotation: bool = False

    encoding: str | None = None
    package_name: str | None = None
    target: str | None = None

    arguments: list[str] = field(default_factory=list)
    generate_episode: bool = True
    catalog: Path | None = None
    clear_output_dir: bool = True
    fail_on_no_sources: bool = True
    schemas_within_artifact: str | None = None

    def flags(self) -> dict[str, bool]:
        """Return the generator flags in emission order."""
        return {
            self.source_type.flag: True,
            "npa": self.no_package_level_annotations,
            "nv": self.lax_schema_validation,
            "verbose": self.verbose,
            "quiet": self.quiet,
            "enableIntrospection": self.enable_introspection,
            "extension": self.extension,
            "readOnly": self.read_only,
            "no-header": self.no_generated_header_comments,
            "mark-generated": self.add_generated_annotation,
        }

    def to_request(
        self,
        *,
        output_dir: Path | str,
        sources: Sequence[SchemaSource],
        bindings: Sequence[BindingFile] = (),
        classpath: str | None = None,
        episode_dir: Path | str | None = None,
        proxy: ProxySpec | None = None,
        base_dir: Path | str | None = None,
    ) -> GenerationRequest:
        """Build the GenerationRequest for one invocation.

        Args:
            output_dir: Directory the generator writes sources into.
            sources: Schema sources.
            bindings: Binding customization files.
            classpath: Classpath handed to the generator, if any.
            episode_dir: Root directory for the episode file; defaults
                to output_dir.
            proxy: Active proxy, if any.
            base_dir: Directory local paths are relativized against.

        Returns:
            The immutable request.
        """
        named: dict[str, str | None] = {
            "encoding": self.encoding,
            "p": self.package_name,
            "target": self.target,
            "d": os.path.abspath(output_dir),
            "classpath": classpath,
        }

        episode = EpisodeConfig()
        if self.generate_episode:
            episode = EpisodeConfig.under(
                episode_dir if episode_dir is not None else output_dir
            )

        return GenerationRequest(
            flags=self.flags(),
            named_arguments=named,
            raw_arguments=tuple(self.arguments),
            sources=tuple(sources),
            bindings=tuple(bindings),
            episode=episode,
            catalog=Path(self.catalog) if self.catalog is not None else None,
            proxy=proxy,
            base_dir=Path(base_dir) if base_dir is not None else None,
        )
