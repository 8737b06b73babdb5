"""Command-line front door for filesteward.

Binds a steward to ROOT, then either prints an entry (as JSON or as an
indented tree) or applies a JSON task plan through the bulk runner.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from . import config
from .entry_model import Entry, EntryKind
from .errors import FileStewardError
from .steward import FileSteward

DEFAULT_STYLE = "monokai"

_KIND_MARKERS = {
    EntryKind.DIRECTORY: "/",
    EntryKind.SYMLINK: "@",
    EntryKind.FIFO: "|",
    EntryKind.SOCKET: "=",
    EntryKind.BLOCK_DEVICE: "#",
    EntryKind.CHAR_DEVICE: "#",
}


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def entry_to_dict(entry: Entry) -> dict[str, object]:
    """Serialize an entry (and any expanded children) to JSON-ready data."""
    data: dict[str, object] = {
        "path": str(entry.path),
        "kind": entry.kind.value,
        "size": entry.size,
        "mode": oct(entry.mode),
        "mtime_ns": entry.mtime_ns,
    }
    if entry.children is not None:
        data["children"] = [entry_to_dict(child) for child in entry.children]
    return data


def render_tree(entries: tuple[Entry, ...], depth: int = 0) -> list[str]:
    """Render nested entries as indented name lines with kind markers."""
    lines: list[str] = []
    for entry in entries:
        lines.append(f"{'  ' * depth}{entry.path.name}{_KIND_MARKERS.get(entry.kind, '')}")
        if entry.children:
            lines.extend(render_tree(entry.children, depth + 1))
    return lines


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def format_json(data: object, style: str, color: bool) -> str:
    """Dump ``data`` as indented JSON, Pygments-highlighted when ``color``."""
    text = json.dumps(data, indent=2) + "\n"
    if not color:
        return text
    return highlight(text, JsonLexer(), TerminalFormatter(style=_normalize_style(style)))


def load_plan(path: Path) -> list[object]:
    """Read a JSON task plan; the top level must be an array."""
    try:
        plan = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SystemExit(f"Cannot read plan {path}: {exc}") from exc
    except ValueError as exc:
        raise SystemExit(f"Plan {path} is not valid JSON: {exc}") from exc
    if not isinstance(plan, list):
        raise SystemExit(f"Plan {path} must contain a JSON array of tasks.")
    return plan


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filesteward",
        description="Inspect or mutate a directory tree without leaving its root.",
    )
    parser.add_argument("root", help="Directory the steward is bound to (created when missing).")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for JSON output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every executed operation.")
    commands = parser.add_subparsers(dest="command", required=True)

    inspect_parser = commands.add_parser("inspect", help="Print one entry as JSON.")
    inspect_parser.add_argument("path", nargs="?", default=None, help="Path under ROOT. Defaults to ROOT.")
    inspect_parser.add_argument("--children", action="store_true", help="Include directory children.")
    inspect_parser.add_argument("--recursive", action="store_true", help="Expand children recursively.")
    inspect_parser.add_argument("--absolute", action="store_true", help="Report absolute instead of ROOT-relative paths.")

    tree_parser = commands.add_parser("tree", help="Print a directory as an indented tree.")
    tree_parser.add_argument("path", nargs="?", default=None, help="Directory under ROOT. Defaults to ROOT.")

    apply_parser = commands.add_parser("apply", help="Run a JSON task plan in order.")
    apply_parser.add_argument("plan", type=Path, help="JSON file holding an array of task objects.")
    apply_parser.add_argument("--async", dest="use_async", action="store_true", help="Use the non-blocking execution mode.")
    apply_parser.add_argument("--no-stream", action="store_true", help="Buffer whole files instead of streaming them.")
    apply_parser.add_argument("--chunk-size", type=_positive_int, default=None, help="Streaming chunk size in bytes.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run one command, and return the process exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.load_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    color = not args.no_color and sys.stdout.isatty()

    try:
        if args.command == "apply":
            steward = FileSteward(
                os.path.abspath(args.root),
                stream=False if args.no_stream else None,
                chunk_size=args.chunk_size,
            )
            plan = load_plan(args.plan)
            if args.use_async:
                asyncio.run(steward.run_sequential_async(plan))
            else:
                steward.run_sequential(plan)
            return 0

        steward = FileSteward(os.path.abspath(args.root))
        if args.command == "tree":
            entries = steward.list_directory(args.path, recursive=True)
            sys.stdout.write("".join(f"{line}\n" for line in render_tree(entries)))
            return 0

        entry = steward.inspect(
            args.path,
            relative=not args.absolute,
            children=args.children or args.recursive,
            recursive=args.recursive,
        )
        sys.stdout.write(format_json(entry_to_dict(entry), args.style, color))
        return 0
    except FileStewardError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1


if __name__ == "__main__":
    sys.exit(main())
