"""Command-line front door for gitstage.

Parses CLI options, merges them with persisted config, configures logging,
and dispatches into the interactive session.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import __version__
from .app import run_app
from .config import (
    LOG_LEVEL_NAMES,
    load_highlight_enabled,
    load_key_overrides,
    load_log_level,
    load_style_name,
    load_theme_name,
    save_theme_name,
)
from .errors import StartupError
from .highlight import DEFAULT_STYLE
from .keys import build_keymap
from .logging_setup import resolve_log_level, setup_logging
from .ui_theme import available_theme_names, normalize_theme_name

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitstage",
        description="List new and modified files in a git working tree, view them, and stage them.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory inside the repository. Defaults to current directory.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}); remembered as the new default.",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for the file view.")
    parser.add_argument("--no-color", action="store_true", help="Disable colors and syntax highlighting.")
    parser.add_argument("--no-highlight", action="store_true", help="Disable syntax highlighting in the file view.")
    parser.add_argument("--list", action="store_true", help="Print the change list and exit.")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVEL_NAMES,
        help="Log level for the log file (default: config or WARNING).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and run gitstage.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Startup failures exit with status 1 and a diagnostic.
    """
    args = build_parser().parse_args(argv)

    setup_logging(resolve_log_level(args.log_level, load_log_level()))

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.is_dir():
        raise SystemExit(f"gitstage: not a directory: {path}")

    if args.theme is not None:
        theme_name = normalize_theme_name(args.theme)
        save_theme_name(theme_name)
    else:
        theme_name = load_theme_name()

    style: str | None = args.style or load_style_name() or DEFAULT_STYLE
    if args.no_highlight or not load_highlight_enabled():
        style = None

    try:
        exit_code = run_app(
            path,
            theme_name=theme_name,
            style=style,
            no_color=args.no_color,
            list_only=args.list,
            keymap=build_keymap(load_key_overrides()),
        )
    except StartupError as exc:
        logger.error("startup failed: %s", exc)
        raise SystemExit(f"gitstage: {exc}") from exc
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
