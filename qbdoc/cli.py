"""CLI entrypoints for qbdoc commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError
from .generator import ControllerNotFoundError, DocumentGenerator
from .logging import configure_logging


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


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the Laravel project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qbdoc",
        description="Generate OpenAPI query parameters for spatie/laravel-query-builder endpoints.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write the OpenAPI document for a project.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="File to write the document to (defaults to stdout).",
    )
    generate_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation width.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the document over HTTP at /docs/api.json.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_path_argument(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for qbdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        try:
            document = DocumentGenerator().generate(args.path)
        except (FileNotFoundError, ControllerNotFoundError, ConfigError) as exc:
            parser.exit(1, f"qbdoc generate failed: {exc}\n")
        payload = json.dumps(document, indent=args.indent or None, ensure_ascii=False)
        if args.output is None:
            print(payload)
        else:
            args.output.write_text(payload + "\n", encoding="utf-8")
            print(f"Documentation written to {_relativize(args.output)}")
    elif args.command == "serve":
        from .service import run_service

        run_service(args.path, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
