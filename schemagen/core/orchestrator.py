# SPDX-License-Identifier: MIT
"""Generation orchestrator.

Runs one incremental generation step:

1. Ask the StalenessChecker whether generation is required.
2. Assemble the generator arguments.
3. Prepare the output directory and invoke the generator.
4. Register output directories with the host and optionally copy the
   schemas into the packaged output.
5. Touch the marker file, but only when every step above succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from schemagen.core.assembler import ArgumentAssembler
from schemagen.core.errors import (
    GenerationError,
    NoSourcesFoundError,
    ToolInvocationError,
)
from schemagen.core.request import XjcOptions
from schemagen.core.staleness import StalenessChecker
from schemagen.util.files import canonical_path, copy_stream, create_directory, touch

if TYPE_CHECKING:
    from collections.abc import Sequence

    from schemagen.core.context import ProjectContext
    from schemagen.core.request import GenerationRequest, ProxySpec
    from schemagen.core.source import BindingFile, SchemaSource
    from schemagen.tools.xjc import CodeGenerator

logger = logging.getLogger(__name__)

XJC_COMPLETED_OK = 0


@dataclass
class GenerationConfig:
    """Inputs for one generation run.

    Attributes:
        sources: Schema sources.
        bindings: Binding customization files.
        options: Generator options and step policies.
        episode_dir: Root directory of the episode file; defaults to
            the context's output directory.
        proxy: Active proxy, if any.
    """

    sources: list[SchemaSource] = field(default_factory=list)
    bindings: list[BindingFile] = field(default_factory=list)
    options: XjcOptions = field(default_factory=XjcOptions)
    episode_dir: Path | None = None
    proxy: ProxySpec | None = None


class GenerationOrchestrator:
    """Composes staleness checking, argument assembly and tool invocation.

    Example:
        context = LocalProjectContext(base_dir=Path("."))
        orchestrator = GenerationOrchestrator(context, find_xjc(required=True))
        regenerated = orchestrator.run(
            GenerationConfig(sources=[LocalFile(Path("schema.xsd"))])
        )
    """

    def __init__(
        self,
        context: ProjectContext,
        tool: CodeGenerator,
        *,
        checker: StalenessChecker | None = None,
        assembler: ArgumentAssembler | None = None,
    ) -> None:
        self.context = context
        self.tool = tool
        self.checker = checker or StalenessChecker()
        self.assembler = assembler or ArgumentAssembler()

    def is_generation_required(self, config: GenerationConfig) -> bool:
        """Check whether the generated sources are stale."""
        return self.checker.is_stale(
            self.context.marker_file, config.sources, config.bindings
        )

    def run(self, config: GenerationConfig) -> bool:
        """Run the generation step if required.

        Args:
            config: Inputs for this run.

        Returns:
            True if sources were regenerated, False if the step was
            skipped.

        Raises:
            SchemagenError: On any unrecoverable failure.
        """
        if not self.is_generation_required(config):
            logger.info("Generated sources are up to date, skipping generation")
            return False

        if not self.perform_generation(config):
            return False

        touch(self.context.marker_file)
        logger.debug("Updated marker file %s", self.context.marker_file)
        return True

    def build_request(self, config: GenerationConfig) -> GenerationRequest:
        """Create the GenerationRequest for this run."""
        return config.options.to_request(
            output_dir=self.context.output_dir,
            sources=config.sources,
            bindings=config.bindings,
            classpath=self.context.classpath or None,
            episode_dir=config.episode_dir,
            proxy=config.proxy,
            base_dir=self.context.base_dir,
        )

    def perform_generation(self, config: GenerationConfig) -> bool:
        """Invoke the generator and post-process its output.

        Does not consult or touch the marker file.

        Returns:
            True if the marker file should be updated.

        Raises:
            NoSourcesFoundError: If there are no sources and the options
                require failing in that case.
            ToolInvocationError: If the generator reports failure.
            LocatorResolutionError: If a schema file name cannot be derived.
            GenerationError: On I/O failures, wrapping the original error.
        """
        options = config.options
        try:
            request = self.build_request(config)
            arguments = self.assembler.build(request)

            output_dir = create_directory(
                self.context.output_dir, clear=options.clear_output_dir
            )

            # Clearing may have removed the episode file's parent directory
            episode = request.episode
            if episode.enabled and episode.file is not None and options.clear_output_dir:
                episode.file.parent.mkdir(parents=True, exist_ok=True)

            status = self.tool.run(arguments, self.context.classpath)
            if status != XJC_COMPLETED_OK:
                error = ToolInvocationError(status, request.sources)
                logger.error("%s", error.message)
                raise error

            self.context.register_generated_sources(output_dir)
            if episode.enabled:
                self.context.register_resources(
                    Path(config.episode_dir or self.context.output_dir)
                )

            if options.schemas_within_artifact is not None:
                target_dir = self.context.build_output_dir / options.schemas_within_artifact
                self.copy_schemas(request.sources, target_dir)

        except NoSourcesFoundError:
            if options.fail_on_no_sources:
                raise
            logger.warning("No schema sources found, skipping generation")
            return False
        except OSError as e:
            raise GenerationError(f"generation failed: {e}") from e

        return True

    def copy_schemas(
        self, sources: Sequence[SchemaSource], target_dir: Path
    ) -> list[Path]:
        """Copy each source into target_dir under its base file name.

        Existing target files are left alone with a warning.

        Returns:
            The files that were written.

        Raises:
            LocatorResolutionError: If a source has no derivable file name.
            OSError: If reading a source or writing a copy fails.
        """
        target_dir.mkdir(parents=True, exist_ok=True)

        copied: list[Path] = []
        for source in sources:
            target_file = target_dir / source.file_name()
            if target_file.exists():
                logger.warning(
                    "File [%s] already exists. Not copying schema [%s] to it.",
                    canonical_path(target_file),
                    source.locator,
                )
                continue
            with source.open(timeout=self.checker.timeout) as stream:
                copy_stream(stream, target_file)
            copied.append(target_file)

        logger.info("Copied %d schema(s) to %s", len(copied), target_dir)
        return copied
