"""Canonical in-memory model of a script tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from ..constants import KEY_SEPARATOR, SENTINEL_CHOICES, ScriptType
from ..exceptions import StructureError

DEFAULT_OPTION_TYPE = "list"


def _expect(value: Any, cls: type, caller: str) -> None:
    if not isinstance(value, cls):
        raise TypeError(
            f"{caller} expects a {cls.__name__} instance but received a "
            f"{type(value).__name__} instance"
        )


def join_key(*segments: str) -> str:
    """Join key segments with the hierarchical separator."""

    return KEY_SEPARATOR.join(segment for segment in segments if segment)


def leaf_name(key: str) -> str:
    """Return the last segment of a hierarchical key."""

    return key.rsplit(KEY_SEPARATOR, 1)[-1]


def parent_key(key: str) -> str | None:
    if KEY_SEPARATOR not in key:
        return None
    return key.rsplit(KEY_SEPARATOR, 1)[0]


@dataclass
class Option:
    """A question node: a prompt message plus an ordered list of choices."""

    name: str = ""
    message: str = ""
    choices: list[str] = field(default_factory=list)
    type: str = DEFAULT_OPTION_TYPE

    @classmethod
    def copy(cls, option: Option) -> Option:
        _expect(option, Option, "Option.copy")
        return cls(
            name=option.name,
            message=option.message,
            choices=list(option.choices),
            type=option.type,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "message": self.message, "choices": list(self.choices)}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Option:
        return cls(
            name=str(raw.get("name", "")),
            message=str(raw.get("message") or ""),
            choices=[str(choice) for choice in raw.get("choices", [])],
        )


@dataclass
class Command:
    """A leaf node: one or more shell directives executed in sequence."""

    directives: list[str] = field(default_factory=list)
    message: str | None = None
    variables: dict[str, str] = field(default_factory=dict)
    exit: bool = False

    @classmethod
    def copy(cls, command: Command) -> Command:
        _expect(command, Command, "Command.copy")
        return cls(
            directives=list(command.directives),
            message=command.message,
            variables=dict(command.variables),
            exit=command.exit,
        )

    def to_dict(self) -> dict[str, Any]:
        raw: dict[str, Any] = {"directives": list(self.directives)}
        if self.message:
            raw["message"] = self.message
        if self.variables:
            raw["variables"] = dict(self.variables)
        if self.exit:
            raw["exit"] = True
        return raw

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Command:
        return cls(
            directives=[str(directive) for directive in raw.get("directives", [])],
            message=raw.get("message") or None,
            variables={str(k): str(v) for k, v in (raw.get("variables") or {}).items()},
            exit=bool(raw.get("exit", False)),
        )


@dataclass
class Directory:
    """Working-directory override for a single command."""

    path: str

    @classmethod
    def copy(cls, directory: Directory) -> Directory:
        _expect(directory, Directory, "Directory.copy")
        return cls(path=directory.path)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | str) -> Directory:
        if isinstance(raw, str):
            return cls(path=raw)
        return cls(path=str(raw["path"]))


@dataclass
class Script:
    """A named tree of options and commands keyed by hierarchical keys.

    The script name doubles as the root key. Every mutation replaces the
    whole value stored under a key; nested values are never edited in place
    through this API.
    """

    name: str
    options: dict[str, Option] = field(default_factory=dict)
    commands: dict[str, Command] = field(default_factory=dict)
    directories: dict[str, Directory] = field(default_factory=dict)
    script_type: str = ScriptType.ADVANCED.value
    source: str | None = None

    @classmethod
    def copy(cls, script: Script) -> Script:
        _expect(script, Script, "Script.copy")
        return cls(
            name=script.name,
            options={key: Option.copy(option) for key, option in script.options.items()},
            commands={key: Command.copy(command) for key, command in script.commands.items()},
            directories={
                key: Directory.copy(directory) for key, directory in script.directories.items()
            },
            script_type=script.script_type,
            source=script.source,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def get_name(self) -> str:
        return self.name

    def add_option(self, key: str, option: Option) -> None:
        self.update_option(key, option)

    def update_option(self, key: str, option: Option) -> None:
        _expect(option, Option, "Script.update_option")
        self.options[key] = option

    def add_command(self, key: str, command: Command) -> None:
        self.update_command(key, command)

    def update_command(self, key: str, command: Command) -> None:
        _expect(command, Command, "Script.update_command")
        self.commands[key] = command

    def update_directory(self, key: str, directory: Directory) -> None:
        _expect(directory, Directory, "Script.update_directory")
        self.directories[key] = directory

    def get_option(self, key: str) -> Option | None:
        return self.options.get(key)

    def get_command(self, key: str) -> Command | None:
        return self.commands.get(key)

    def get_directory(self, key: str) -> Directory | None:
        return self.directories.get(key)

    def has_option(self, key: str) -> bool:
        return key in self.options

    def has_command(self, key: str) -> bool:
        return key in self.commands

    def get_options(self) -> dict[str, Option]:
        return self.options

    def get_commands(self) -> dict[str, Command]:
        return self.commands

    def get_directories(self) -> dict[str, Directory]:
        return self.directories

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """Raise :class:`StructureError` at the first dangling or ambiguous key."""

        if self.name not in self.options and self.name not in self.commands:
            raise StructureError(self.name, "root key is neither an option nor a command")
        for key in self.options:
            if key in self.commands:
                raise StructureError(key, "key is both an option and a command")
        for key, option in self.options.items():
            seen: set[str] = set()
            for choice in option.choices:
                if choice in seen:
                    raise StructureError(key, f"duplicate choice '{choice}'")
                seen.add(choice)
                if choice in SENTINEL_CHOICES:
                    continue
                child = join_key(key, choice)
                if child not in self.options and child not in self.commands:
                    raise StructureError(child, "choice does not resolve to an option or command")
        for key in self.directories:
            if key not in self.commands:
                raise StructureError(key, "directory is not attached to a command")

    def walk(self) -> Iterator[tuple[str, int, Option | Command]]:
        """Yield ``(key, depth, node)`` depth-first in choice order."""

        def visit(key: str, depth: int) -> Iterator[tuple[str, int, Option | Command]]:
            command = self.commands.get(key)
            if command is not None:
                yield key, depth, command
                return
            option = self.options.get(key)
            if option is None:
                return
            yield key, depth, option
            for choice in option.choices:
                if choice not in SENTINEL_CHOICES:
                    yield from visit(join_key(key, choice), depth + 1)

        yield from visit(self.name, 0)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.script_type,
            "source": self.source,
            "options": {key: option.to_dict() for key, option in self.options.items()},
            "commands": {key: command.to_dict() for key, command in self.commands.items()},
            "directories": {key: directory.to_dict() for key, directory in self.directories.items()},
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Script:
        return cls(
            name=str(raw["name"]),
            options={
                str(key): Option.from_dict(value)
                for key, value in (raw.get("options") or {}).items()
            },
            commands={
                str(key): Command.from_dict(value)
                for key, value in (raw.get("commands") or {}).items()
            },
            directories={
                str(key): Directory.from_dict(value)
                for key, value in (raw.get("directories") or {}).items()
            },
            script_type=str(raw.get("type") or ScriptType.ADVANCED.value),
            source=raw.get("source"),
        )
