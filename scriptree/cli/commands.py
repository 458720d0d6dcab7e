"""Modular command handlers for the scriptree CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..constants import QUIT_COMMAND, SENTINEL_TITLES, Modification, ScriptType
from ..exceptions import ConfigError
from ..interfaces.config import AppConfig
from ..interfaces.prompts import Prompter, PromptRequest
from ..interfaces.script import Script
from ..menu.collector import CommandCollector
from ..menu.modify import apply_new_command, derive_modify_script, describe_replacement
from ..menu.session import CommandRunner, MenuSession
from ..parser.files import get_script_from_file
from ..utils.config import save_config, set_config_value
from ..utils.registry import ScriptRegistry
from .chat import ScriptChat

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass
class CliContext:
    """Everything an operation needs, passed explicitly to each handler."""

    config: AppConfig
    registry: ScriptRegistry
    chat: ScriptChat
    prompter: Prompter
    runner: CommandRunner

    def simple_base(self, name: str) -> Script | None:
        """Saved simple script that a new simple file should be merged into.

        A script saved as a single bare command has no option group to merge
        into, so it is replaced (after confirmation) instead.
        """

        script = self.registry.get_script(name)
        if script is None or script.script_type != ScriptType.SIMPLE.value:
            return None
        if not script.has_option(script.name):
            return None
        return script


def run_save(
    ctx: CliContext,
    file_name: str,
    *,
    script_type: str | None = None,
    starting_key: str | None = None,
    assume_yes: bool = False,
) -> int:
    script = get_script_from_file(
        file_name,
        script_type=script_type,
        starting_key=starting_key,
        default_type=ctx.config.default_script_type,
        base_lookup=ctx.simple_base,
    )
    existing = ctx.registry.get_script(script.name)
    merged = (
        script.script_type == ScriptType.SIMPLE.value
        and script.has_option(script.name)
        and ctx.simple_base(script.name) is not None
    )
    if existing is not None and not merged and not assume_yes:
        if not _confirm(ctx, "confirm-replace-script", f"Replace the saved script {script.name}?"):
            ctx.chat.say(f"Kept the saved script {script.name} unchanged.")
            return EXIT_OK

    ctx.registry.add_script(script)
    ctx.registry.save()
    verb = "Updated" if merged else "Saved"
    ctx.chat.success(f"{verb} script {script.name} from {file_name}.")
    return EXIT_OK


def run_list(ctx: CliContext) -> int:
    if not _has_scripts(ctx):
        return EXIT_OK
    scripts = [ctx.registry.get_script(name) for name in ctx.registry.script_names()]
    ctx.chat.print_scripts([script for script in scripts if script is not None])
    return EXIT_OK


def run_run(ctx: CliContext, name: str | None = None) -> int:
    script, code = _resolve_script(ctx, name, "run")
    if script is None:
        return code
    MenuSession(script, ctx.prompter, ctx.runner, ctx.chat).run()
    return EXIT_OK


def run_delete(ctx: CliContext, name: str | None = None) -> int:
    script, code = _resolve_script(ctx, name, "delete")
    if script is None:
        return code
    if not _confirm(ctx, "shouldDelete", f"Delete the script {script.name}?"):
        ctx.chat.say(f"Script {script.name} was not deleted.")
        return EXIT_OK
    ctx.registry.remove_script(script.name)
    ctx.registry.remove_script_name(script.name)
    ctx.registry.save()
    ctx.chat.success(f"Deleted script {script.name}.")
    return EXIT_OK


def run_update(ctx: CliContext, name: str | None = None) -> int:
    script, code = _resolve_script(ctx, name, "update")
    if script is None:
        return code
    if not script.source or not Path(script.source).is_file():
        ctx.chat.warn(f"The source file of {script.name} is no longer available: {script.source or '-'}")
        return EXIT_FAILURE

    updated = get_script_from_file(
        script.source,
        script_type=script.script_type,
        starting_key=script.name,
        default_type=ctx.config.default_script_type,
        base_lookup=ctx.simple_base,
    )
    ctx.registry.add_script(updated)
    ctx.registry.save()
    ctx.chat.success(f"Updated script {updated.name} from {script.source}.")
    return EXIT_OK


def run_print(ctx: CliContext, name: str | None = None) -> int:
    script, code = _resolve_script(ctx, name, "print")
    if script is None:
        return code
    ctx.chat.print_tree(script)
    return EXIT_OK


def run_modify(ctx: CliContext, name: str | None = None) -> int:
    script, code = _resolve_script(ctx, name, "modify")
    if script is None:
        return code
    if not script.get_options():
        ctx.chat.warn(f"Script {script.name} is a single command; there is no menu to add commands to.")
        return EXIT_FAILURE

    ctx.chat.say(f"Running {script.name} in modify mode.")
    outcome = MenuSession(
        derive_modify_script(script), ctx.prompter, ctx.runner, ctx.chat, modify=True
    ).run()
    if outcome.modification is Modification.ADD_COMMAND and outcome.option_key:
        return _add_new_command(ctx, script, outcome.option_key)
    return EXIT_OK


def run_config(ctx: CliContext, assignments: Sequence[str] = ()) -> int:
    config = ctx.config
    for assignment in assignments:
        if "=" not in assignment:
            raise ConfigError(assignment, "expected the format key=value")
        key, raw_value = assignment.split("=", 1)
        config = set_config_value(config, key.strip(), raw_value)
    if assignments:
        path = save_config(config)
        ctx.config = config
        ctx.chat.success(f"Saved configuration to {path}.")
    ctx.chat.print_config(config)
    return EXIT_OK


# ----------------------------------------------------------------------
# Internal helpers
# ----------------------------------------------------------------------
def _has_scripts(ctx: CliContext) -> bool:
    if len(ctx.registry) == 0:
        ctx.chat.warn("There are no saved scripts yet. Save one with `scriptree save <file>`.")
        return False
    return True


def _resolve_script(ctx: CliContext, name: str | None, operation: str) -> tuple[Script | None, int]:
    if not _has_scripts(ctx):
        return None, EXIT_OK
    if name is None:
        name = _choose_script(ctx, operation)
        if name is None:
            return None, EXIT_OK
    script = ctx.registry.get_script(name)
    if script is None:
        ctx.chat.warn(f"Script {name} does not exist.")
        return None, EXIT_FAILURE
    return script, EXIT_OK


def _choose_script(ctx: CliContext, operation: str) -> str | None:
    choices = tuple((name, name) for name in ctx.registry.script_names())
    request = PromptRequest(
        type="list",
        name=operation,
        message=f"Which script would you like to {operation}?",
        choices=(*choices, (SENTINEL_TITLES[QUIT_COMMAND], QUIT_COMMAND)),
    )
    answer = ctx.prompter.ask(request)
    if answer is None or answer == QUIT_COMMAND:
        return None
    return str(answer)


def _confirm(ctx: CliContext, name: str, message: str) -> bool:
    return bool(ctx.prompter.ask(PromptRequest(type="confirm", name=name, message=message, default=False)))


def _add_new_command(ctx: CliContext, script: Script, option_key: str) -> int:
    ctx.chat.say("Describe the new command.")
    collector = CommandCollector()
    question = collector.next_question()
    while question is not None:
        collector.next_answer(ctx.prompter.ask(question))
        if collector.last_error:
            ctx.chat.warn(collector.last_error)
        question = collector.next_question()

    collected = collector.build()
    command_key = collected.command_key(option_key)
    if script.has_option(command_key):
        ctx.chat.warn(f"{collected.leaf} already names a group of options in {script.name}.")
        return EXIT_FAILURE

    replaced = script.has_command(command_key)
    if replaced and not _confirm(ctx, "confirm-replace-command", describe_replacement(collected)):
        ctx.chat.say(f"Did not replace {collected.leaf}.")
        return EXIT_OK

    apply_new_command(script, option_key, collected)
    ctx.registry.add_script(script)
    ctx.registry.save()
    if replaced:
        ctx.chat.success(f"Replaced {collected.leaf} in {script.name}.")
    else:
        ctx.chat.success(f"Saved new command {collected.leaf} to {script.name}.")
    logger.debug("Modify run stored '%s'", command_key)
    return EXIT_OK
