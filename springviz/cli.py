"""CLI entrypoints for springviz commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError
from .extractors import ExtractionError
from .graph import format_relations, parse_relations
from .logging import configure_logging
from .orchestrator import Orchestrator


def _relation_selector(value: str) -> str:
    try:
        parse_relations(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


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


def _add_source_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "package",
        nargs="?",
        default="",
        help="Only extract files whose path contains this package or path fragment.",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Directory to scan for source files (defaults to current directory).",
    )
    strictness = parser.add_mutually_exclusive_group()
    strictness.add_argument(
        "--strict",
        dest="strict",
        action="store_true",
        default=None,
        help="Abort on the first file that cannot be extracted.",
    )
    strictness.add_argument(
        "--lenient",
        dest="strict",
        action="store_false",
        help="Skip files that cannot be extracted and report them on stderr.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="springviz",
        description="Draw the dependency-injection graph of annotated Java sources.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write diagnostics to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    graph_parser = subparsers.add_parser(
        "graph",
        help="Render the component graph in Graphviz DOT format.",
    )
    _add_verbose_option(graph_parser, suppress_default=True)
    _add_source_options(graph_parser)
    graph_parser.add_argument(
        "-r",
        "--relations",
        type=_relation_selector,
        default=None,
        help=(
            "Comma-separated relations to draw "
            f"(default: {format_relations(parse_relations(None))})."
        ),
    )
    graph_parser.add_argument(
        "--name",
        default=None,
        help="Name of the emitted digraph (default: Components).",
    )
    graph_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the graph to this file instead of stdout.",
    )

    classes_parser = subparsers.add_parser(
        "classes",
        help="Print the extracted class records as JSON.",
    )
    _add_verbose_option(classes_parser, suppress_default=True)
    _add_source_options(classes_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for springviz commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()

    try:
        if args.command == "graph":
            outcome = orchestrator.render(
                args.root,
                args.package,
                relations=args.relations,
                strict=args.strict,
                graph_name=args.name,
            )
            if args.output is not None:
                args.output.write_text(outcome.document, encoding="utf-8")
            else:
                sys.stdout.write(outcome.document)
        elif args.command == "classes":
            run = orchestrator.extract(args.root, args.package, strict=args.strict)
            payload = [record.to_dict() for record in run.records]
            print(json.dumps(payload, indent=2))
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except ExtractionError as exc:
        parser.exit(1, f"springviz {args.command} failed: {exc}\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, ValueError) as exc:
        parser.exit(1, f"springviz {args.command} failed: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
