#!/usr/bin/env python3
# /tagwalk/main.py
"""
tagwalk Command-Line Entry Point
================================

Runs one markup action on a file, the way an editor key binding would:
1) Environment Loading: reads ~/.config/tagwalk/.env early (e.g. TAGWALK_ACTIONTRACE).
2) Path Setup: ensures the tagwalk package is importable from a source checkout.
3) Configuration & Logging: loads config and initializes logging ASAP.
4) Core Import: imports the engine after logging is ready.
5) Action Run: loads the file into an in-memory editor, places the caret or
   selection, runs the action and prints (or writes back) the result.

Examples:
    python main.py matchPair page.html --caret 120
    python main.py toggleComment page.html --select 40 72 --write
    python main.py wrapWithAbbreviation page.html --caret 10 --abbr "div#main"
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

# --- Step 1: Load Environment Variables from the User's Config Directory ---
try:
    load_dotenv(dotenv_path=Path.home() / ".config" / "tagwalk" / ".env")
except OSError:
    pass

# --- Step 2: Set up the Python Path ---
project_root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from tagwalk.utils.logging_config import setup_logging  # noqa: E402
from tagwalk.utils.utils import caret_line_col, detect_syntax, load_config, read_text_file  # noqa: E402

logger = logging.getLogger("tagwalk")


def build_parser() -> argparse.ArgumentParser:
    """Returns the argument parser of the runner."""
    # Imported here so `--help` works before logging is configured.
    from tagwalk.core.Actions import ACTIONS

    parser = argparse.ArgumentParser(
        prog="tagwalk",
        description="Run a markup navigation/editing action on a file.",
    )
    parser.add_argument("action", choices=sorted(ACTIONS), help="Action to run.")
    parser.add_argument("file", type=Path, help="Document to operate on.")
    parser.add_argument("--caret", type=int, default=0, help="Caret offset (default: 0).")
    parser.add_argument(
        "--select", nargs=2, type=int, metavar=("START", "END"), help="Selection to start from."
    )
    parser.add_argument("--abbr", help="Abbreviation for wrapWithAbbreviation.")
    parser.add_argument("--direction", choices=["in", "out"], help="Direction for matchPair.")
    parser.add_argument("--syntax", help="Override the detected syntax.")
    parser.add_argument("--profile", help="Output profile (html, xhtml, xml).")
    parser.add_argument("--config", type=Path, help="TOML config merged over the defaults.")
    parser.add_argument("--write", action="store_true", help="Write the result back to the file.")
    return parser


def _action_args(args: argparse.Namespace) -> tuple[list[Any], Optional[str]]:
    """Returns the positional arguments for the action, or a usage error."""
    if args.action == "wrapWithAbbreviation":
        if not args.abbr:
            return [], "wrapWithAbbreviation needs --abbr"
        return [args.abbr], None
    if args.action == "matchPair" and args.direction:
        return [args.direction], None
    return [], None


def run(argv: Optional[list[str]] = None) -> int:
    """
    Parses ``argv``, runs the action and returns the process exit status:
    0 when the action changed something, 1 for a no-op, 2 on errors.
    """
    args = build_parser().parse_args(argv)

    config: dict[str, Any] = load_config(args.config)
    setup_logging(config)

    from tagwalk.core.Actions import MarkupActions
    from tagwalk.core.EditorBuffer import BufferEditor

    action_args, error = _action_args(args)
    if error:
        print(f"tagwalk: {error}", file=sys.stderr)
        return 2

    try:
        content, encoding = read_text_file(args.file)
    except OSError as e:
        logger.error("Could not read '%s': %s", args.file, e)
        print(f"tagwalk: cannot read {args.file}: {e}", file=sys.stderr)
        return 2

    editor_cfg = config.get("editor", {})
    editor = BufferEditor(
        content,
        caret=args.caret,
        syntax=args.syntax or detect_syntax(str(args.file), content, config),
        profile=args.profile or editor_cfg.get("profile", "xhtml"),
    )
    if args.select:
        editor.create_selection(*args.select)

    actions = MarkupActions(editor, config=config)
    changed = actions.run(args.action, *action_args)

    line, col = caret_line_col(editor.get_content(), editor.get_caret_pos())
    selection = editor.get_selection_range()
    logger.info(
        "%s on '%s' (%s): %s, Ln %d, Col %d, selection %d..%d",
        args.action, args.file, editor.get_syntax(),
        "changed" if changed else "no-op", line, col, selection.start, selection.end,
    )
    print(f"Ln {line}, Col {col}, selection {selection.start}..{selection.end}", file=sys.stderr)

    if args.write:
        if editor.modified:
            args.file.write_text(editor.get_content(), encoding=encoding)
            logger.info("Wrote '%s' (%s).", args.file, encoding)
    else:
        sys.stdout.write(editor.get_content())
    return 0 if changed else 1


def start() -> None:
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    start()
