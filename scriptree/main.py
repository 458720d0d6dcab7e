"""Unified scriptree entry point that greets users then runs the CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.style import Style
from rich.text import Text

from . import __version__
from .exceptions import ConfigError
from .utils.config import load_config

console = Console()


def welcome_message(version: str) -> Text:
    banner = (
        "┌─┐┌─┐┬─┐┬┌─┐┌┬┐┬─┐┌─┐┌─┐",
        "└─┐│  ├┬┘│├─┘ │ ├┬┘├┤ ├┤ ",
        "└─┘└─┘┴└─┴┴   ┴ ┴└─└─┘└─┘",
    )
    # Leaf green fading into bark brown and back, one colour per column.
    palette = ("#7BD389", "#8CCB7E", "#A3BF72", "#B9A968", "#C49A6C", "#B9A968", "#A3BF72", "#8CCB7E")

    text = Text()
    for row in banner:
        for column, glyph in enumerate(row):
            text.append(glyph, Style(color=palette[column % len(palette)], bold=True))
        text.append("\n")
    text.append("Interactive menus for your shell commands\n", Style(color="green", bold=True))
    text.append(f"Version: {version}\n", Style(color="bright_green"))
    return text


def _parse_args(argv: Sequence[str]) -> tuple[argparse.Namespace, list[str]]:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--no-banner", action="store_true", help="Suppress the welcome message."
    )
    parser.add_argument("--home", default=None)
    return parser.parse_known_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    from .cli import main as cli_entry  # local import to avoid circular dependency

    raw_args = list(argv) if argv is not None else sys.argv[1:]
    parsed, passthrough = _parse_args(raw_args)
    home_args: list[str] = []
    config_path = None
    if parsed.home:
        home_args = ["--home", parsed.home]
        config_path = Path(parsed.home).expanduser() / "config.yml"
    try:
        show_banner = load_config(config_path).show_banner
    except ConfigError:
        # cli.main loads the same file again and reports the error with exit status 1.
        show_banner = False
    if show_banner and not parsed.no_banner:
        console.print(welcome_message(__version__))
    return cli_entry.main([*home_args, *passthrough])


def run() -> None:  # pragma: no cover - console script
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover - CLI entry
    run()
