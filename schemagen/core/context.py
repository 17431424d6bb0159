# SPDX-License-Identifier: MIT
"""Project context protocol.

The generation step does not know which build system hosts it. All it
needs from the host is passed in through a ProjectContext: where to
write, what to relativize against, the classpath, the marker file, and
hooks to announce new source and resource directories.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ProjectContext(Protocol):
    """Protocol for the host build system adapter."""

    @property
    def output_dir(self) -> Path:
        """Directory the generator writes sources into."""
        ...

    @property
    def base_dir(self) -> Path:
        """Project base directory, used to shorten logged paths."""
        ...

    @property
    def build_output_dir(self) -> Path:
        """Directory whose contents end up in the packaged artifact."""
        ...

    @property
    def classpath(self) -> str:
        """Classpath handed to the generator."""
        ...

    @property
    def marker_file(self) -> Path:
        """Marker file recording the last successful generation."""
        ...

    def register_generated_sources(self, directory: Path) -> None:
        """Announce a directory of generated sources to the host."""
        ...

    def register_resources(self, directory: Path) -> None:
        """Announce a resource directory to the host."""
        ...


@dataclass
class LocalProjectContext:
    """Standalone ProjectContext that records registrations in lists.

    Used by the command-line interface and by tests. Relative paths
    are resolved against base_dir.

    Attributes:
        base_dir: Project base directory.
        output_dir: Generated sources directory.
        build_output_dir: Packaged output directory.
        classpath: Generator classpath.
        marker_file: Marker file path.
        generated_source_dirs: Directories registered as generated sources.
        resource_dirs: Directories registered as resources.
    """

    base_dir: Path = field(default_factory=Path.cwd)
    output_dir: Path = Path("target/generated-sources/xjc")
    build_output_dir: Path = Path("target/classes")
    classpath: str = ""
    marker_file: Path = Path("target/xjc-stale/.xjcStaleFlag")
    generated_source_dirs: list[Path] = field(default_factory=list)
    resource_dirs: list[Path] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir).absolute()
        self.output_dir = self._resolve(self.output_dir)
        self.build_output_dir = self._resolve(self.build_output_dir)
        self.marker_file = self._resolve(self.marker_file)

    def _resolve(self, path: Path | str) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.base_dir / path

    def register_generated_sources(self, directory: Path) -> None:
        if directory not in self.generated_source_dirs:
            self.generated_source_dirs.append(directory)

    def register_resources(self, directory: Path) -> None:
        if directory not in self.resource_dirs:
            self.resource_dirs.append(directory)
