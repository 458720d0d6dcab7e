"""Tagged-variant decoding of advanced-dialect nodes.

Every node in an advanced declaration is either a command node or an option
node, discriminated by which reserved keys it carries. Decoding validates the
node eagerly so the builder in :mod:`scriptree.parser.advanced` only ever sees
well-formed values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..constants import (
    KEY_SEPARATOR,
    SENTINEL_CHOICES,
    SIMPLE_SCRIPT_OPTION_SEPARATOR,
    ScriptKeys,
)
from ..exceptions import ParseError

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset(key.value for key in ScriptKeys)
_SCALARS = (str, int, float, bool)


@dataclass(frozen=True)
class CommandNode:
    directives: tuple[str, ...]
    message: str | None = None
    variables: dict[str, str] = field(default_factory=dict)
    directory: str | None = None
    exit: bool = False


@dataclass(frozen=True)
class OptionNode:
    message: str = ""
    children: tuple[tuple[str, Any], ...] = ()


def decode_node(raw: Any, key: str, file_name: str) -> CommandNode | OptionNode:
    """Decode the raw mapping found at ``key`` into a node variant."""

    if not isinstance(raw, Mapping):
        raise ParseError(file_name, f"'{key}' must be a mapping, got {type(raw).__name__}")

    unknown = [str(name) for name in raw if name not in _KNOWN_KEYS]
    if unknown:
        logger.warning("Ignoring unknown key(s) %s at '%s' in %s", ", ".join(unknown), key, file_name)

    has_command = ScriptKeys.COMMAND.value in raw
    has_exit = ScriptKeys.EXIT_COMMAND.value in raw
    has_options = ScriptKeys.OPTIONS.value in raw

    if has_command and has_exit:
        raise ParseError(file_name, f"'{key}' declares both 'command' and 'exit-command'")
    if (has_command or has_exit) and has_options:
        raise ParseError(file_name, f"'{key}' declares both a command and options")
    if not (has_command or has_exit or has_options):
        raise ParseError(file_name, f"'{key}' must declare one of 'command', 'exit-command' or 'options'")

    message = _decode_message(raw, key, file_name)

    if has_options:
        if ScriptKeys.DIRECTORY.value in raw:
            raise ParseError(file_name, f"'{key}' sets a directory but only commands can have one")
        if ScriptKeys.VARIABLES.value in raw:
            raise ParseError(file_name, f"'{key}' sets variables but only commands can have them")
        return OptionNode(
            message=message or "",
            children=_decode_children(raw[ScriptKeys.OPTIONS.value], key, file_name),
        )

    tag = ScriptKeys.EXIT_COMMAND if has_exit else ScriptKeys.COMMAND
    return CommandNode(
        directives=decode_directives(raw[tag.value], key, file_name),
        message=message,
        variables=_decode_variables(raw.get(ScriptKeys.VARIABLES.value), key, file_name),
        directory=_decode_directory(raw.get(ScriptKeys.DIRECTORY.value), key, file_name),
        exit=has_exit,
    )


def decode_directives(value: Any, key: str, file_name: str) -> tuple[str, ...]:
    """Return directives from a string, a list, or a ``1..n`` positional mapping.

    Positional mappings must be numbered contiguously from 1; gaps, duplicates
    and non-numeric keys are rejected rather than truncated.
    """

    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        if not value:
            raise ParseError(file_name, f"'{key}' has an empty directive list")
        return tuple(_directive(item, f"{key}[{idx}]", file_name) for idx, item in enumerate(value))
    if not isinstance(value, Mapping):
        raise ParseError(file_name, f"'{key}' command must be a string, list or numbered mapping")
    if not value:
        raise ParseError(file_name, f"'{key}' has an empty directive mapping")

    numbered: dict[int, Any] = {}
    for raw_line, directive in value.items():
        line = _line_number(raw_line, key, file_name)
        if line in numbered:
            raise ParseError(file_name, f"'{key}' numbers directive {line} more than once")
        numbered[line] = directive

    expected = list(range(1, len(numbered) + 1))
    if sorted(numbered) != expected:
        missing = sorted(set(range(1, max(numbered) + 1)) - set(numbered))
        detail = f"missing {', '.join(map(str, missing))}" if missing else "must start at 1"
        raise ParseError(file_name, f"'{key}' directive numbering is not contiguous ({detail})")
    return tuple(_directive(numbered[line], f"{key}.{line}", file_name) for line in expected)


def validate_choice_name(name: Any, key: str, file_name: str) -> str:
    if not isinstance(name, (str, int)) or isinstance(name, bool) or str(name).strip() == "":
        raise ParseError(file_name, f"'{key}' has an empty or non-string option name")
    name = str(name)
    if KEY_SEPARATOR in name or SIMPLE_SCRIPT_OPTION_SEPARATOR in name:
        raise ParseError(
            file_name,
            f"option name '{name}' under '{key}' may not contain "
            f"'{KEY_SEPARATOR}' or '{SIMPLE_SCRIPT_OPTION_SEPARATOR}'",
        )
    if any(character.isspace() for character in name):
        raise ParseError(file_name, f"option name '{name}' under '{key}' may not contain whitespace")
    if name in SENTINEL_CHOICES:
        raise ParseError(file_name, f"option name '{name}' under '{key}' is reserved")
    return name


def is_valid_variables_shape(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    return all(isinstance(k, str) and isinstance(v, _SCALARS) for k, v in value.items())


def _decode_message(raw: Mapping[str, Any], key: str, file_name: str) -> str | None:
    message = raw.get(ScriptKeys.MESSAGE.value)
    if message is None:
        return None
    if not isinstance(message, _SCALARS):
        raise ParseError(file_name, f"'{key}' message must be text")
    return str(message)


def _decode_children(value: Any, key: str, file_name: str) -> tuple[tuple[str, Any], ...]:
    if not isinstance(value, Mapping):
        raise ParseError(file_name, f"'{key}' options must be a mapping")
    if not value:
        raise ParseError(file_name, f"'{key}' options must declare at least one choice")
    return tuple((validate_choice_name(name, key, file_name), child) for name, child in value.items())


def _decode_variables(value: Any, key: str, file_name: str) -> dict[str, str]:
    if value is None:
        return {}
    if not is_valid_variables_shape(value):
        raise ParseError(
            file_name,
            f"'{key}' variables must be a flat mapping of names to text values",
        )
    return {name: _stringify(item) for name, item in value.items()}


def _decode_directory(value: Any, key: str, file_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ParseError(file_name, f"'{key}' directory must be a non-empty path")
    return value


def _line_number(raw_line: Any, key: str, file_name: str) -> int:
    if isinstance(raw_line, bool):
        raise ParseError(file_name, f"'{key}' has a non-numeric directive number '{raw_line}'")
    if isinstance(raw_line, int):
        return raw_line
    if isinstance(raw_line, str) and raw_line.strip().isdigit():
        return int(raw_line.strip())
    raise ParseError(file_name, f"'{key}' has a non-numeric directive number '{raw_line}'")


def _directive(value: Any, where: str, file_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ParseError(file_name, f"directive '{where}' must be a non-empty string")
    return value


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
