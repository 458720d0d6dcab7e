"""Modify-mode helpers: the derived browsing copy and applying new commands."""

from __future__ import annotations

import logging

from ..constants import ADD_COMMAND, BACK_COMMAND, QUIT_COMMAND
from ..exceptions import StructureError
from ..interfaces.script import Command, Directory, Option, Script, join_key
from .collector import CollectedCommand

logger = logging.getLogger(__name__)


def insert_choice(choices: list[str], label: str) -> list[str]:
    """Return a new list with ``label`` placed just before ``back`` (or ``quit``)."""

    updated = list(choices)
    if BACK_COMMAND in updated:
        index = updated.index(BACK_COMMAND)
    elif QUIT_COMMAND in updated:
        index = updated.index(QUIT_COMMAND)
    else:
        index = len(updated)
    updated.insert(index, label)
    return updated


def modify_message(option: Option) -> str:
    target = option.message or option.name
    return f"Add a command to {target}"


def derive_modify_script(script: Script) -> Script:
    """Return a copy of ``script`` prepared for the modify walk.

    Command choices are removed so only option groups can be browsed, every
    option gains the ``add-command`` sentinel ahead of ``back``/``quit`` and
    messages are rewritten. ``script`` itself is left untouched.
    """

    derived = Script.copy(script)
    for key, option in script.get_options().items():
        navigable = [
            choice for choice in option.choices if not script.has_command(join_key(key, choice))
        ]
        derived.update_option(
            key,
            Option(
                name=option.name,
                message=modify_message(option),
                choices=insert_choice(navigable, ADD_COMMAND),
                type=option.type,
            ),
        )
    return derived


def apply_new_command(script: Script, option_key: str, collected: CollectedCommand) -> str:
    """Add or replace ``collected`` under ``option_key`` and return its command key."""

    option = script.get_option(option_key)
    if option is None:
        raise StructureError(option_key, "cannot add a command to a missing option")
    command_key = collected.command_key(option_key)
    if script.has_option(command_key):
        raise StructureError(command_key, "an option group already uses this name")

    script.update_command(command_key, Command.copy(collected.command))
    if collected.directory is not None:
        script.update_directory(command_key, Directory.copy(collected.directory))

    if collected.leaf not in option.choices:
        script.update_option(
            option_key,
            Option(
                name=option.name,
                message=option.message,
                choices=insert_choice(option.choices, collected.leaf),
                type=option.type,
            ),
        )
    logger.debug("Stored command '%s' in script '%s'", command_key, script.name)
    return command_key


def describe_replacement(collected: CollectedCommand) -> str:
    """Confirmation text shown before an existing command is overwritten."""

    directives = " && ".join(collected.command.directives)
    prompt = f"Replace {collected.leaf} with {directives} command"
    message = collected.command.message
    path = collected.directory.path if collected.directory else None
    if message and path:
        return f"{prompt}, {message} message and {path} directory?"
    if message:
        return f"{prompt} and {message} message?"
    if path:
        return f"{prompt} and {path} directory?"
    return f"{prompt}?"
