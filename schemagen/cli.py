# SPDX-License-Identifier: MIT
"""Command-line interface for schemagen."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from schemagen.configure.config import load_config, options_from_config
from schemagen.configure.proxy import proxy_from_environment
from schemagen.core.context import LocalProjectContext
from schemagen.core.errors import ConfigurationError, SchemagenError
from schemagen.core.orchestrator import GenerationConfig, GenerationOrchestrator
from schemagen.core.request import XjcOptions
from schemagen.core.source import (
    BindingFile,
    LocalFile,
    SchemaSource,
    source_from_locator,
)
from schemagen.core.staleness import StalenessChecker

# Set up logging
logger = logging.getLogger("schemagen")

DEFAULT_OUTPUT_DIR = "target/generated-sources/xjc"
DEFAULT_BUILD_OUTPUT_DIR = "target/classes"
DEFAULT_MARKER = "target/xjc-stale/.xjcStaleFlag"


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Parse KEY=value arguments from a list.

    Args:
        args: List of arguments.

    Returns:
        Tuple of (variables dict, remaining args).
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        if "=" in arg and not arg.startswith("-"):
            key, _, value = arg.partition("=")
            if key:  # Valid KEY=value
                variables[key] = value
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)

    return variables, remaining


def _setting(value: Any, var: str, default: str | None = None) -> Any:
    """Resolve a setting: CLI value first, then get_var(), then default."""
    from schemagen import get_var

    if value is not None:
        return value
    return get_var(var, default)


def _parse_timeout(value: str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except ValueError:
        raise ConfigurationError(f"invalid timeout: {value!r}") from None
    if timeout <= 0:
        raise ConfigurationError(f"timeout must be positive: {value!r}")
    return timeout


def build_context(args: argparse.Namespace) -> LocalProjectContext:
    """Create the project context from command-line arguments."""
    return LocalProjectContext(
        base_dir=Path(_setting(args.base_dir, "SCHEMAGEN_BASE_DIR", ".")),
        output_dir=Path(
            _setting(args.output_dir, "SCHEMAGEN_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)
        ),
        build_output_dir=Path(
            _setting(
                args.build_output_dir,
                "SCHEMAGEN_BUILD_OUTPUT_DIR",
                DEFAULT_BUILD_OUTPUT_DIR,
            )
        ),
        classpath=_setting(args.classpath, "CLASSPATH", ""),
        marker_file=Path(_setting(args.marker, "SCHEMAGEN_MARKER", DEFAULT_MARKER)),
    )


def build_config(
    args: argparse.Namespace, context: LocalProjectContext
) -> GenerationConfig:
    """Create the generation config from a config file and arguments.

    Command-line options take precedence over the config file.
    """
    data: dict[str, Any] = {}
    if args.config:
        data = load_config(args.config)

    source_locators: list[str] = list(data.pop("sources", []))
    binding_paths: list[str] = list(data.pop("bindings", []))
    options: XjcOptions = options_from_config(data)

    source_locators.extend(args.source or [])
    binding_paths.extend(args.binding or [])

    if args.package:
        options.package_name = args.package
    if args.catalog:
        options.catalog = _anchor_path(args.catalog, context.base_dir)
    if args.no_episode:
        options.generate_episode = False
    if args.keep_output:
        options.clear_output_dir = False
    if args.allow_no_sources:
        options.fail_on_no_sources = False

    _, raw_arguments = parse_variables(getattr(args, "extra", []))
    options.arguments.extend(raw_arguments)

    sources: list[SchemaSource] = [
        source_from_locator(_anchor(locator, context.base_dir))
        for locator in source_locators
    ]
    bindings = [
        BindingFile(_anchor_path(path, context.base_dir)) for path in binding_paths
    ]

    episode_dir = (
        _anchor_path(args.episode_dir, context.base_dir) if args.episode_dir else None
    )
    proxy = None if args.no_proxy else proxy_from_environment()

    return GenerationConfig(
        sources=sources,
        bindings=bindings,
        options=options,
        episode_dir=episode_dir,
        proxy=proxy,
    )


def _anchor_path(path: str, base_dir: Path) -> Path:
    candidate = Path(path)
    return candidate if candidate.is_absolute() else base_dir / candidate


def _anchor(locator: str, base_dir: Path) -> str | Path:
    """Anchor plain relative paths at base_dir; leave URLs alone."""
    source = source_from_locator(locator)
    if isinstance(source, LocalFile):
        return _anchor_path(str(source.path), base_dir)
    return locator


def _prepare(
    args: argparse.Namespace,
) -> tuple[LocalProjectContext, GenerationConfig, StalenessChecker]:
    from schemagen import _set_cli_vars

    variables, _ = parse_variables(getattr(args, "extra", []))
    if variables:
        _set_cli_vars(variables)

    context = build_context(args)
    config = build_config(args, context)
    checker = StalenessChecker(
        timeout=_parse_timeout(_setting(args.timeout, "SCHEMAGEN_TIMEOUT"))
    )
    return context, config, checker


def cmd_generate(args: argparse.Namespace) -> int:
    """Run the generation step if the generated sources are stale."""
    from schemagen.tools.xjc import find_xjc

    setup_logging(args.verbose, args.debug)

    try:
        context, config, checker = _prepare(args)

        xjc_hint = _setting(args.xjc, "XJC")
        tool = find_xjc(hints=[xjc_hint] if xjc_hint else None)
        if tool is None:
            logger.error("xjc not found in PATH")
            logger.info("Install a JAXB distribution or pass --xjc")
            return 1

        orchestrator = GenerationOrchestrator(context, tool, checker=checker)
        regenerated = orchestrator.run(config)
    except (SchemagenError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1

    if regenerated:
        logger.info("Generated sources in %s", context.output_dir)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Report whether the generated sources are stale."""
    setup_logging(args.verbose, args.debug)

    try:
        context, config, checker = _prepare(args)
    except (SchemagenError, FileNotFoundError) as e:
        logger.error("%s", e)
        return 1

    stale = checker.is_stale(context.marker_file, config.sources, config.bindings)
    print("stale" if stale else "up-to-date")
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "-s",
        "--source",
        action="append",
        metavar="LOCATOR",
        help="Schema path or URL (repeatable)",
    )
    parser.add_argument(
        "-b",
        "--binding",
        action="append",
        metavar="FILE",
        help="Binding customization file (repeatable)",
    )
    parser.add_argument("--base-dir", help="Project base directory (default: .)")
    parser.add_argument(
        "-d",
        "--output-dir",
        help=f"Generated sources directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--build-output-dir",
        help=f"Packaged output directory (default: {DEFAULT_BUILD_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--marker", help=f"Marker file (default: {DEFAULT_MARKER})"
    )
    parser.add_argument("--classpath", help="Classpath for the generator")
    parser.add_argument(
        "--timeout",
        help="Timeout in seconds for remote timestamp probes (default: none)",
    )
    parser.add_argument(
        "--episode-dir", help="Episode root directory (default: output dir)"
    )
    parser.add_argument(
        "--no-episode", action="store_true", help="Do not generate an episode file"
    )
    parser.add_argument("--catalog", help="Catalog file for entity resolution")
    parser.add_argument("-p", "--package", help="Target package for generated code")
    parser.add_argument(
        "--keep-output",
        action="store_true",
        help="Do not clear the output directory before generating",
    )
    parser.add_argument(
        "--allow-no-sources",
        action="store_true",
        help="Skip instead of failing when no sources are found",
    )
    parser.add_argument(
        "--no-proxy",
        action="store_true",
        help="Ignore proxy settings from the environment",
    )
    parser.add_argument(
        "extra",
        nargs="*",
        help="Variables (KEY=value) or, after --, extra generator arguments",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the schemagen CLI."""
    parser = argparse.ArgumentParser(
        prog="schemagen",
        description="Incremental schema-to-source generation with XJC.",
        epilog="Run 'schemagen <command> --help' for command-specific help.",
    )
    from schemagen import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # schemagen generate
    gen_parser = subparsers.add_parser(
        "generate", help="Generate sources if schemas or bindings changed"
    )
    add_common_args(gen_parser)
    gen_parser.add_argument("--xjc", help="Path to the xjc executable or its directory")
    gen_parser.set_defaults(func=cmd_generate)

    # schemagen check
    check_parser = subparsers.add_parser(
        "check", help="Report whether generated sources are stale"
    )
    add_common_args(check_parser)
    check_parser.set_defaults(func=cmd_check)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
