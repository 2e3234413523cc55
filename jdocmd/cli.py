"""CLI entrypoints for jdocmd commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .documenter import Documenter
from .logging import configure_logging


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jdocmd",
        description="Generate Markdown documentation from Javadoc comments.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write one Markdown file per source file found under INPUT.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("input", metavar="INPUT", help="Directory containing the sources.")
    generate_parser.add_argument(
        "-d",
        "--destination",
        default=None,
        help="Directory for the generated Markdown files (defaults to ./generated).",
    )
    generate_parser.add_argument(
        "-c",
        "--context",
        default=None,
        help="Project context path holding .jdocmd.yml (defaults to INPUT).",
    )
    generate_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Worker pool size (defaults to one worker per four files).",
    )
    generate_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jdocmd commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=getattr(args, "log_file", None),
    )

    if args.command == "generate":
        _run_generate(parser, args)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    context = Path(args.context or args.input)
    try:
        config = load_config(context)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    if args.workers is not None:
        config.workers = args.workers

    print(f"Generating documentation from {args.input}")
    try:
        run = Documenter(config).run(args.input, args.destination)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")

    if not run.written and not run.failures:
        print("No source files found")
        return
    for path in run.written:
        print(f"{path.name} was created")
    if not run.ok:
        parser.exit(1, f"{len(run.failures)} file(s) could not be documented\n")


if __name__ == "__main__":
    main(sys.argv[1:])
