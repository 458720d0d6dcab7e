"""Reserved keys, sentinel choices and separators shared across scriptree."""

from __future__ import annotations

from enum import Enum
from typing import Final

KEY_SEPARATOR: Final[str] = "."
SIMPLE_SCRIPT_OPTION_SEPARATOR: Final[str] = ":"
WHITESPACE_REPLACEMENT: Final[str] = "-"

BACK_COMMAND: Final[str] = "back"
QUIT_COMMAND: Final[str] = "quit"
ADD_COMMAND: Final[str] = "add-command"

SENTINEL_CHOICES: Final[frozenset[str]] = frozenset({BACK_COMMAND, QUIT_COMMAND, ADD_COMMAND})

SENTINEL_TITLES: Final[dict[str, str]] = {
    BACK_COMMAND: "back",
    QUIT_COMMAND: "quit",
    ADD_COMMAND: "add a command",
}


class ScriptKeys(str, Enum):
    """Reserved keys of the advanced dialect."""

    MESSAGE = "message"
    OPTIONS = "options"
    COMMAND = "command"
    EXIT_COMMAND = "exit-command"
    DIRECTORY = "directory"
    VARIABLES = "variables"


class ScriptType(str, Enum):
    SIMPLE = "simple"
    ADVANCED = "advanced"


class Modification(str, Enum):
    ADD_COMMAND = "add-command"


YAML_SUFFIXES: Final[tuple[str, ...]] = (".yml", ".yaml")
JSON_SUFFIXES: Final[tuple[str, ...]] = (".json",)
SIMPLE_SCRIPT_MARKER: Final[str] = ".simple"
NPM_PACKAGE_FILE: Final[str] = "package.json"
NPM_SCRIPTS_KEY: Final[str] = "scripts"
