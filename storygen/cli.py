"""CLI entrypoints for storygen commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .analyzers import analyze_component
from .config import ConfigError, GeneratorConfig, load_config
from .diagnostics import ERROR, LoggingSink, RecordingSink
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator, component_name_for


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .storygen.yml or the directory holding it (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storygen",
        description="Generate Storybook stories from Lit component sources.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report skipped files and errors.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write a .stories.ts file next to every matching component.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument(
        "pattern",
        nargs="?",
        default=None,
        help="Glob pattern for component files, e.g. 'src/**/*.ce.ts' (defaults to the configured pattern).",
    )

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the tag and reactive properties extracted from one file as JSON.",
    )
    _add_verbose_option(inspect_parser, suppress_default=True)
    _add_config_option(inspect_parser)
    inspect_parser.add_argument("file", help="Component source file to analyze.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for storygen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet), log_file=args.log_file)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "generate":
        _run_generate(parser, config, args.pattern)
    elif args.command == "inspect":
        _run_inspect(parser, config, Path(args.file))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(parser: argparse.ArgumentParser, config: GeneratorConfig, pattern: str | None) -> None:
    orchestrator = Orchestrator(config)
    try:
        result = orchestrator.run(pattern)
    except ValueError as exc:
        parser.exit(1, f"storygen generate failed: {exc}\n")
    print(f"{result.success_count} generated, {result.error_count} errors")
    if result.error_count:
        parser.exit(1)


def _run_inspect(parser: argparse.ArgumentParser, config: GeneratorConfig, path: Path) -> None:
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        parser.exit(1, f"Cannot read {path}: {exc}\n")

    sink = RecordingSink(forward=LoggingSink(get_logger("inspect")))
    descriptor = analyze_component(
        source,
        component_name_for(path, config.source_marker),
        source_path=path,
        registration_function=config.registration_function,
        decorators=frozenset(config.reactive_decorators),
        dialect=config.dialect,
        sink=sink,
    )
    payload = {
        "component": descriptor.component_name,
        "tag": descriptor.tag_name,
        "properties": {
            name: {
                "type": prop.semantic_type.value,
                **({"default": prop.default} if prop.has_default else {}),
            }
            for name, prop in descriptor.properties.items()
        },
        "errors": sink.messages(ERROR),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main(sys.argv[1:])
