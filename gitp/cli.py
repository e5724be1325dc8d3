"""Command-line front door for gitp.

Parses CLI options, configures logging, resolves the repository root, then
dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from .git import detect_repo_root
from .runtime import run_browser
from .ui_theme import available_theme_names

LOG_ENV_VAR = "GITP_LOG"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitp",
        description="Browse branches, commits, diffs and file contents of a git repository.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path inside a repository. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for file contents.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-file",
        default=None,
        metavar="PATH",
        help=f"Append log records to PATH (also read from ${LOG_ENV_VAR}).",
    )
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    return parser


def configure_logging(log_file: str | None, debug: bool) -> None:
    """Route ``gitp`` log records to a file, or nowhere.

    The terminal is in raw mode while browsing, so records are never written
    to stderr.
    """
    package_logger = logging.getLogger("gitp")
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    target = log_file or os.environ.get(LOG_ENV_VAR)
    if target:
        handler: logging.Handler = logging.FileHandler(target, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    package_logger.addHandler(handler)


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser on the enclosing repository.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.debug)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    root = detect_repo_root(path)
    if root is None:
        raise SystemExit(f"Not a git repository: {path}")

    logger.debug("repository root resolved to %s", root)
    run_browser(root, theme_name=args.theme, style=args.style, no_color=args.no_color)


if __name__ == "__main__":
    main()
