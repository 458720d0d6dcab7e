"""Builder for the advanced (nested) script dialect."""

from __future__ import annotations

import logging
from typing import Any

from ..constants import BACK_COMMAND, QUIT_COMMAND, ScriptType
from ..exceptions import ParseError, StructureError
from ..interfaces.script import Command, Directory, Option, Script, join_key, leaf_name
from .nodes import CommandNode, OptionNode, decode_node

logger = logging.getLogger(__name__)


def parse_advanced_script(
    data: Any,
    name: str,
    file_name: str,
    *,
    source: str | None = None,
) -> Script:
    """Build a :class:`Script` from a nested declaration.

    Args:
        data: The value stored under the script name in the source document.
        name: Script name, also used as the root key.
        file_name: Source file name, used in error messages.
        source: Optional path recorded on the script for later updates.

    Returns:
        A fully populated script whose option choices follow declaration order.
    """

    script = Script(name=name, script_type=ScriptType.ADVANCED.value, source=source)
    _add_node(script, data, name, file_name)
    try:
        script.validate()
    except StructureError as exc:
        raise ParseError(file_name, str(exc)) from exc
    logger.debug(
        "Parsed advanced script '%s': %d option(s), %d command(s)",
        name,
        len(script.options),
        len(script.commands),
    )
    return script


def _add_node(script: Script, raw: Any, key: str, file_name: str) -> None:
    node = decode_node(raw, key, file_name)
    if isinstance(node, CommandNode):
        _add_command(script, node, key)
    else:
        _add_option(script, node, key, file_name)


def _add_command(script: Script, node: CommandNode, key: str) -> None:
    if node.directory is not None:
        script.update_directory(key, Directory(node.directory))
    script.update_command(
        key,
        Command(
            directives=list(node.directives),
            message=node.message,
            variables=dict(node.variables),
            exit=node.exit,
        ),
    )


def _add_option(script: Script, node: OptionNode, key: str, file_name: str) -> None:
    # Children first: the parent's choices are only final once every child key exists.
    choices: list[str] = []
    for child_name, child in node.children:
        _add_node(script, child, join_key(key, child_name), file_name)
        choices.append(child_name)

    if key != script.name:
        choices.append(BACK_COMMAND)
    choices.append(QUIT_COMMAND)

    script.update_option(key, Option(name=leaf_name(key), message=node.message, choices=choices))
