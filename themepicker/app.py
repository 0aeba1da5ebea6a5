"""Command line bootstrap."""

from __future__ import annotations

import argparse
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from themepicker import __version__
from themepicker.config.settings import AppSettings
from themepicker.errors import RegistryUnavailableError, format_error_for_user
from themepicker.themes.models import ApplyOutcome
from themepicker.themes.service import ThemeService

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings: AppSettings, *, verbose: bool = False) -> logging.Logger:
    logger = logging.getLogger("themepicker")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    log_dir = settings.app_data_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "themepicker.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)

    if verbose:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(console)
    logger.propagate = False
    return logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="themepicker",
        description="Apply a color theme to Waybar, Hyprland and kitty.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--root", type=Path, help="Themes root directory (saved for later runs)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr as well")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List available themes")
    apply_cmd = commands.add_parser("apply", help="Make a theme active")
    apply_cmd.add_argument("theme", help="Theme directory name")
    apply_cmd.add_argument("--no-wallpaper", action="store_true", help="Keep the current wallpaper")
    commands.add_parser("recompile", help="Retry recompiling derived files for the active theme")
    commands.add_parser("wallpaper", help="Set a random wallpaper from the active theme")
    return parser


def run_cli(argv: list[str] | None = None, settings: AppSettings | None = None) -> int:
    """Parse arguments, run one command, and return the exit code."""
    args = build_parser().parse_args(argv)
    settings = settings or AppSettings()
    if args.root is not None:
        settings.themes_root = args.root.expanduser().resolve()
    logger = configure_logging(settings, verbose=args.verbose)
    logger.debug("themepicker %s command=%s root=%s", __version__, args.command, settings.themes_root)

    service = ThemeService(settings)

    if args.command == "list":
        return _list_themes(service)
    if args.command == "apply":
        outcome = service.apply_theme(args.theme, change_wallpaper=not args.no_wallpaper)
    elif args.command == "recompile":
        outcome = service.recompile()
    else:
        outcome = service.change_wallpaper()
    return _report(outcome)


def _list_themes(service: ThemeService) -> int:
    try:
        themes = service.list_themes()
    except RegistryUnavailableError as exc:
        print(format_error_for_user(exc), file=sys.stderr)
        return 1

    active = service.active_theme_id
    for theme in themes:
        marker = "*" if theme.theme_id == active else " "
        line = f"{marker} {theme.theme_id:<20} {theme.name}"
        if theme.description:
            line += f" - {theme.description}"
        print(line.rstrip())
    for warning in service.load_warnings():
        print(f"warning: {warning}", file=sys.stderr)
    return 0


def _report(outcome: ApplyOutcome) -> int:
    if outcome.ok:
        print(outcome.message)
        return 0
    print(outcome.message, file=sys.stderr)
    return 1
