"""Command-line interface for regexrail render/svg workflows."""
from __future__ import annotations

import argparse
import json
import os
import sys
import traceback
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .components import Component, ComponentError, parse_components
from .render import DEFAULT_HEIGHT, DEFAULT_WIDTH, RenderOptions, render_components, render_svg


@dataclass
class CliError(Exception):
    code: str
    message: str
    hint: Optional[str] = None
    exit_code: int = 1
    retryable: bool = True


class UsageError(Exception):
    pass


class FriendlyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # pragma: no cover - argparse callback
        raise UsageError(message)


def _add_render_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("components", nargs="?", help="JSON array of regex components (stdin if omitted)")
    parser.add_argument("width", nargs="?", type=int, default=DEFAULT_WIDTH, help="Target width in pixels")
    parser.add_argument("height", nargs="?", type=int, default=DEFAULT_HEIGHT, help="Target height in pixels")
    parser.add_argument("dark_theme", nargs="?", default="true", help="'true' to apply the dark theme")


def _build_parser() -> argparse.ArgumentParser:
    parser = FriendlyArgumentParser(
        prog="regexrail",
        description="Render regex component trees as railroad diagrams.",
    )
    parser.add_argument("--error-format", choices=["text", "json"], default="text")
    parser.add_argument("--debug", action="store_true")

    subparsers = parser.add_subparsers(dest="command")

    render_parser = subparsers.add_parser("render", help="Render components to a base64 PNG JSON payload")
    _add_render_arguments(render_parser)

    svg_parser = subparsers.add_parser("svg", help="Print the themed SVG without rasterizing")
    _add_render_arguments(svg_parser)

    return parser


def _read_components_json(text: Optional[str]) -> str:
    if text is not None:
        return text

    if sys.stdin.isatty():
        raise CliError(
            "E_ARGS",
            "no input provided",
            hint="Pass the components JSON as an argument or pipe it on stdin.",
            exit_code=2,
        )

    data = sys.stdin.read()
    if not data.strip():
        raise CliError(
            "E_ARGS",
            "stdin was empty",
            hint="Pipe a JSON array of components into stdin.",
            exit_code=2,
        )
    return data


def _load_components(text: Optional[str]) -> List[Component]:
    raw = _read_components_json(text)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CliError(
            "E_PARSE_JSON",
            f"failed to parse components JSON: {exc}",
            hint="Pass a JSON array such as '[{\"type\": \"pattern_character\", \"text\": \"a\"}]'.",
            exit_code=2,
        )
    try:
        return parse_components(payload)
    except ComponentError as exc:
        raise CliError(
            "E_INPUT",
            f"invalid component tree: {exc}",
            hint="Each component must be an object; children must be an array.",
            exit_code=2,
        )


def _options_from_args(args: argparse.Namespace) -> RenderOptions:
    if args.width <= 0 or args.height <= 0:
        raise CliError(
            "E_ARGS",
            "width and height must be > 0",
            hint="Use positive pixel sizes like 800 600.",
            exit_code=2,
        )
    return RenderOptions(
        width=args.width,
        height=args.height,
        dark_theme=args.dark_theme.lower() == "true",
    )


def _error_from_exception(exc: Exception) -> CliError:
    if isinstance(exc, CliError):
        return exc
    return CliError(
        "E_INTERNAL",
        str(exc) or exc.__class__.__name__,
        hint="Re-run with --debug to see traceback.",
        exit_code=1,
        retryable=False,
    )


def _emit_error(err: CliError, *, error_format: str) -> None:
    if error_format == "json":
        payload = {
            "ok": False,
            "code": err.code,
            "message": err.message,
            "hint": err.hint,
            "retryable": err.retryable,
        }
        sys.stderr.write(json.dumps(payload) + "\n")
        return

    sys.stderr.write(f"error[{err.code}]: {err.message}\n")
    if err.hint:
        sys.stderr.write(f"hint: {err.hint}\n")


def _handle_render(args: argparse.Namespace) -> int:
    options = _options_from_args(args)
    components = _load_components(args.components)
    result = render_components(components, options)
    sys.stdout.write(result.to_json() + "\n")
    return 0


def _handle_svg(args: argparse.Namespace) -> int:
    options = _options_from_args(args)
    components = _load_components(args.components)
    svg_text = render_svg(components, options)
    sys.stdout.write(svg_text)
    if not svg_text.endswith("\n"):
        sys.stdout.write("\n")
    return 0


def main(argv: Optional[Iterable[str]] = None) -> int:
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    parser = _build_parser()

    if not raw_argv:
        err = CliError(
            "E_ARGS",
            "missing subcommand",
            hint="Use one of: render, svg.",
            exit_code=2,
        )
        _emit_error(err, error_format="text")
        return err.exit_code

    debug_enabled = "--debug" in raw_argv or os.getenv("REGEXRAIL_DEBUG") == "1"
    error_format = "text"
    if "--error-format" in raw_argv:
        idx = raw_argv.index("--error-format")
        if idx + 1 < len(raw_argv):
            error_format = raw_argv[idx + 1]

    try:
        args = parser.parse_args(raw_argv)
        error_format = args.error_format

        if args.command == "render":
            return _handle_render(args)
        if args.command == "svg":
            return _handle_svg(args)

        raise CliError(
            "E_ARGS",
            "missing subcommand",
            hint="Use one of: render, svg.",
            exit_code=2,
        )
    except UsageError as exc:
        err = CliError(
            "E_ARGS",
            str(exc),
            hint="Use subcommands: render, svg.",
            exit_code=2,
        )
        _emit_error(err, error_format=error_format)
        return err.exit_code
    except Exception as exc:  # pragma: no cover - exercised in integration tests
        err = _error_from_exception(exc)
        _emit_error(err, error_format=error_format)
        if debug_enabled:
            traceback.print_exc(file=sys.stderr)
        return err.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
