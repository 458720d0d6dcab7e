"""Command-line entry point for scriptree operations."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from ..constants import ScriptType
from ..exceptions import ScriptreeError
from ..interfaces.prompts import Prompter
from ..menu.session import CommandRunner
from ..utils.config import load_config
from ..utils.log import configure_logging
from ..utils.registry import ScriptRegistry
from ..utils.shell import ShellRunner
from .chat import ScriptChat
from .commands import (
    EXIT_FAILURE,
    EXIT_OK,
    CliContext,
    run_config,
    run_delete,
    run_list,
    run_modify,
    run_print,
    run_run,
    run_save,
    run_update,
)
from .prompts import QuestionaryPrompter

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="scriptree",
        description="Save, run and extend interactive menus of shell commands.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging.")
    parser.add_argument(
        "--home", default=None, help="Override the directory holding config.yml and saved scripts."
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    save = subparsers.add_parser("save", aliases=["s"], help="save a script from a YAML or JSON file")
    save.add_argument("file", help="Path to a .yml, .yaml or .json script file.")
    save.add_argument(
        "--type",
        dest="script_type",
        choices=[item.value for item in ScriptType],
        default=None,
        help="Force the script dialect instead of detecting it from the file name.",
    )
    save.add_argument(
        "--key", dest="starting_key", default=None, help="Top-level key holding the script (e.g. 'scripts')."
    )
    save.add_argument("--yes", "-y", action="store_true", help="Replace an existing script without asking.")

    subparsers.add_parser("list", aliases=["l"], help="list saved scripts")

    for name, alias, help_text in (
        ("run", "r", "run a previously saved script"),
        ("delete", "D", "delete a previously saved script"),
        ("update", "u", "re-read a saved script from its source file"),
        ("print", "p", "print the option tree of a saved script"),
        ("modify", "m", "add commands to a previously saved script"),
    ):
        sub = subparsers.add_parser(name, aliases=[alias], help=help_text)
        sub.add_argument("name", nargs="?", default=None, help="Script name; omit to pick from a menu.")

    config = subparsers.add_parser("config", aliases=["c"], help="display or change configuration")
    config.add_argument(
        "--set",
        dest="assignments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Change a configuration value (repeatable).",
    )
    return parser.parse_args(argv)


_ALIASES = {
    "s": "save",
    "l": "list",
    "r": "run",
    "D": "delete",
    "u": "update",
    "p": "print",
    "m": "modify",
    "c": "config",
}


def build_context(
    home: str | Path | None = None,
    *,
    chat: ScriptChat | None = None,
    prompter: Prompter | None = None,
    runner: CommandRunner | None = None,
) -> CliContext:
    config = load_config(Path(home).expanduser() / "config.yml" if home else None)
    registry = ScriptRegistry(config.registry_path).load()
    return CliContext(
        config=config,
        registry=registry,
        chat=chat or ScriptChat(),
        prompter=prompter or QuestionaryPrompter(),
        runner=runner or ShellRunner(),
    )


def dispatch(args: argparse.Namespace, ctx: CliContext) -> int:
    command = _ALIASES.get(args.command, args.command)
    if command == "save":
        return run_save(
            ctx,
            args.file,
            script_type=args.script_type,
            starting_key=args.starting_key,
            assume_yes=args.yes,
        )
    if command == "list":
        return run_list(ctx)
    if command == "run":
        return run_run(ctx, args.name)
    if command == "delete":
        return run_delete(ctx, args.name)
    if command == "update":
        return run_update(ctx, args.name)
    if command == "print":
        return run_print(ctx, args.name)
    if command == "modify":
        return run_modify(ctx, args.name)
    if command == "config":
        return run_config(ctx, args.assignments)
    raise ValueError(f"Unsupported command: {command}")


def main(argv: Sequence[str] | None = None, *, ctx: CliContext | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.verbose)
    chat = ctx.chat if ctx else ScriptChat()
    try:
        context = ctx or build_context(args.home, chat=chat)
        return dispatch(args, context)
    except ScriptreeError as error:
        logger.debug("Operation failed", exc_info=True)
        chat.wrap_error(error)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        chat.console.print("\n[red]Aborted by user.[/red]")
        return EXIT_OK
