"""Command-line interface for chord layout tooling."""

import argparse
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .checker import Severity, check, has_errors
from .config import LayoutSettings, load_settings
from .exporter import dump_json, dump_yaml, export, to_keychordz, to_qmk_combos, to_qmk_keymap
from .keys import KEY_ORDER, parse_key
from .layout import Layout
from .log import configure_logging
from .parser import parse
from .result import Err
from .resolver import preview

EXPORT_FORMATS = ["keychordz", "yaml", "json", "qmk-keymap", "qmk-combos"]


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="chord_layout",
        description="Chorded keyboard layout checking, export and preview",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="Path to a settings YAML file",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-json", action="store_true", help="Log as JSON lines")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- check subcommand ---
    check_parser = subparsers.add_parser(
        "check",
        help="Report duplicate chords and other layout problems",
    )
    check_parser.add_argument("layout", type=Path, help="Layout file")

    # --- export subcommand ---
    export_parser = subparsers.add_parser(
        "export",
        help="Export a layout for firmware or other tools",
    )
    export_parser.add_argument("layout", type=Path, help="Layout file")
    export_parser.add_argument(
        "-f", "--format",
        choices=EXPORT_FORMATS,
        default=None,
        help="Output format (default: from settings, keychordz)",
    )
    export_parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file (default: stdout)",
    )
    export_parser.add_argument(
        "--strict",
        action="store_true",
        help="Refuse to export when check reports errors",
    )
    export_parser.add_argument(
        "--numeric",
        action="store_true",
        help="keychordz only: write finger sets as 16-bit masks",
    )

    # --- preview subcommand ---
    preview_parser = subparsers.add_parser(
        "preview",
        help="Show what pressing each key next would produce",
    )
    preview_parser.add_argument("layout", type=Path, help="Layout file")
    preview_parser.add_argument(
        "keys",
        nargs="*",
        metavar="KEY",
        help="Keys currently pressed, e.g. LP LR",
    )

    # --- format subcommand ---
    format_parser = subparsers.add_parser(
        "format",
        help="Rewrite a layout in canonical form",
    )
    format_parser.add_argument("layout", type=Path, help="Layout file")
    format_parser.add_argument(
        "-i", "--in-place",
        action="store_true",
        help="Edit file in place",
    )
    format_parser.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")

    return parser


def _load_layout(path: Path, settings: LayoutSettings) -> Layout | None:
    """Read and parse a layout file, reporting errors to stderr."""
    if not path.exists():
        print(f"Error: Layout file not found: {path}", file=sys.stderr)
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Cannot read layout file {path}: {e}", file=sys.stderr)
        return None
    result = parse(text, settings.parse)
    if isinstance(result, Err):
        print(f"Error: {path}: {result.error}", file=sys.stderr)
        return None
    return result.value


def cmd_check(args: argparse.Namespace, settings: LayoutSettings) -> int:
    """Execute check subcommand."""
    layout = _load_layout(args.layout, settings)
    if layout is None:
        return 1

    diagnostics = check(layout, settings.check)
    for diagnostic in diagnostics:
        print(f"{args.layout}: {diagnostic}")

    errors = sum(1 for d in diagnostics if d.severity is Severity.ERROR)
    warnings = len(diagnostics) - errors
    print(f"{len(layout)} chords, {errors} errors, {warnings} warnings")
    return 1 if errors else 0


def cmd_export(args: argparse.Namespace, settings: LayoutSettings) -> int:
    """Execute export subcommand."""
    layout = _load_layout(args.layout, settings)
    if layout is None:
        return 1

    strict = args.strict or settings.export.strict
    if strict:
        diagnostics = check(layout, settings.check)
        if has_errors(diagnostics):
            for diagnostic in diagnostics:
                if diagnostic.severity is Severity.ERROR:
                    print(f"Error: {args.layout}: {diagnostic.message}", file=sys.stderr)
            print("Export blocked by layout errors (--strict)", file=sys.stderr)
            return 2

    fmt = args.format or settings.export.format
    if fmt == "keychordz":
        content = to_keychordz(layout, numeric=args.numeric)
    elif fmt == "yaml":
        content = dump_yaml(export(layout))
    elif fmt == "json":
        content = dump_json(export(layout))
    else:
        rendered = to_qmk_keymap(layout) if fmt == "qmk-keymap" else to_qmk_combos(layout)
        if isinstance(rendered, Err):
            print(f"Error: {rendered.error}", file=sys.stderr)
            return 1
        content = rendered.value + "\n"

    if args.output:
        args.output.write_text(content, encoding="utf-8")
        print(f"Exported {len(layout)} chords to {args.output}")
    else:
        sys.stdout.write(content)
    return 0


def cmd_preview(args: argparse.Namespace, settings: LayoutSettings) -> int:
    """Execute preview subcommand."""
    layout = _load_layout(args.layout, settings)
    if layout is None:
        return 1

    try:
        pressed = frozenset(parse_key(name) for name in args.keys)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = preview(layout, pressed)
    if isinstance(result, Err):
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    for key, output in zip(KEY_ORDER, result.value.slots):
        marker = "*" if key in pressed else " "
        print(f"{marker} {key.value}  {output if output is not None else ''}")
    if result.value.current is not None:
        print(f"current: {result.value.current}")
    return 0


def cmd_format(args: argparse.Namespace, settings: LayoutSettings) -> int:
    """Execute format subcommand."""
    layout = _load_layout(args.layout, settings)
    if layout is None:
        return 1

    formatted = layout.to_text() + "\n"
    if args.in_place:
        args.layout.write_text(formatted, encoding="utf-8")
        print(f"Formatted {args.layout}")
    elif args.output:
        args.output.write_text(formatted, encoding="utf-8")
        print(f"Wrote {args.output}")
    else:
        sys.stdout.write(formatted)
    return 0


COMMANDS = {
    "check": cmd_check,
    "export": cmd_export,
    "preview": cmd_preview,
    "format": cmd_format,
}


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, log_json=args.log_json)
    try:
        settings = load_settings(args.settings)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print(f"Error: invalid settings file {args.settings}: {e}", file=sys.stderr)
        sys.exit(1)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)
    sys.exit(command(args, settings))


if __name__ == "__main__":
    main()
