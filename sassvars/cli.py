"""CLI entrypoints for sassvars commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import CompileError, ExtractionError
from .logging import configure_logging, get_logger
from .render import render


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sassvars",
        description="Extract resolved Sass variable values from a stylesheet tree.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Compile an entry stylesheet and print its variables as JSON.",
    )
    _add_verbose_option(extract_parser, suppress_default=True)
    extract_parser.add_argument("entry", help="Entry stylesheet to compile.")
    extract_parser.add_argument(
        "-I",
        "--include-path",
        action="append",
        default=[],
        help="Additional import search path (repeatable).",
    )
    extract_parser.add_argument(
        "-p",
        "--plugin",
        action="append",
        default=[],
        help="Plugin to run on the result, e.g. serialize, compact, minimal (repeatable).",
    )
    extract_parser.add_argument(
        "--config",
        help="Path to .sassvars.yml (defaults to the entry's directory).",
    )
    extract_parser.add_argument(
        "-o",
        "--output",
        help="Write JSON to this file instead of stdout.",
    )
    extract_parser.add_argument(
        "--log-file",
        help="Also write DEBUG logs for every extraction stage to this file.",
    )
    extract_parser.add_argument(
        "--css",
        action="store_true",
        help="Include the compiled CSS alongside the variables.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP extraction service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sassvars commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "extract":
        try:
            payload = _run_extract(args)
        except (CompileError, ExtractionError, ConfigError, ValueError) as exc:
            parser.exit(1, f"sassvars extract failed: {exc}\n")
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        text = json.dumps(payload, indent=2)
        if args.output:
            Path(args.output).write_text(text + "\n", encoding="utf-8")
            get_logger("cli").info("Variables written to %s", args.output)
        else:
            print(text)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_extract(args: argparse.Namespace) -> object:
    entry = Path(args.entry).expanduser()
    if not entry.is_file():
        raise FileNotFoundError(f"Entry stylesheet not found: {entry}")

    config = load_config(Path(args.config) if args.config else entry.parent)
    compile_options = config.compile_options(file=str(entry))
    compile_options.include_paths.extend(args.include_path)
    extract_options = config.extract_options()
    extract_options.plugins.extend(args.plugin)

    rendered = render(compile_options, extract_options)
    if args.css:
        return {"css": rendered.css, "vars": rendered.vars}
    return rendered.vars


if __name__ == "__main__":
    main(sys.argv[1:])
