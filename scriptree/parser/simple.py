"""Builder for the simple (flat ``a:b:c``) script dialect.

The option tree is inferred from the colon-delimited keys: the distinct first
segments become the root choices, and every intermediate prefix becomes an
option whose choices are the next segments seen under it. Parsing against an
existing script of the same name unions new choices into its options.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from ..constants import (
    BACK_COMMAND,
    KEY_SEPARATOR,
    QUIT_COMMAND,
    SENTINEL_CHOICES,
    SIMPLE_SCRIPT_OPTION_SEPARATOR,
    ScriptType,
)
from ..exceptions import ParseError, StructureError
from ..interfaces.script import Command, Option, Script, join_key, leaf_name

logger = logging.getLogger(__name__)

SegmentPath = tuple[str, ...]


def parse_simple_script(
    data: Any,
    name: str,
    file_name: str,
    *,
    base: Script | None = None,
    source: str | None = None,
) -> Script:
    """Build a :class:`Script` from a bare directive or a flat path mapping.

    ``base`` is a previously saved script of the same name. It is copied, never
    mutated; choices already present on its options are kept and new ones are
    appended ahead of the ``back``/``quit`` sentinels.
    """

    if isinstance(data, str):
        script = Script(name=name, script_type=ScriptType.SIMPLE.value, source=source)
        script.add_command(name, Command(directives=[_directive(data, name, file_name)]))
        return script

    if not isinstance(data, Mapping) or not data:
        raise ParseError(file_name, f"'{name}' must be a directive or a non-empty mapping")

    paths = {str(key): _split_path(key, file_name) for key in data}
    prefixes = {path[:depth] for path in paths.values() for depth in range(1, len(path))}

    script = Script.copy(base) if base is not None else Script(name=name)
    script.script_type = ScriptType.SIMPLE.value
    script.source = source or script.source

    _merge_option(script, name, [*_next_segments(paths.values(), ()), QUIT_COMMAND], file_name)

    for raw_key, path in paths.items():
        directive = _directive(data[raw_key], raw_key, file_name)
        if path in prefixes:
            logger.warning(
                "'%s' in %s also groups other entries; its directive is not reachable",
                raw_key,
                file_name,
            )
        else:
            command_key = join_key(name, *path)
            if script.has_option(command_key):
                raise ParseError(file_name, f"'{raw_key}' conflicts with an existing option group")
            script.add_command(command_key, Command(directives=[directive]))

        for depth in range(1, len(path)):
            prefix = path[:depth]
            choices = [*_next_segments(paths.values(), prefix), BACK_COMMAND, QUIT_COMMAND]
            _merge_option(script, join_key(name, *prefix), choices, file_name)

    try:
        script.validate()
    except StructureError as exc:
        raise ParseError(file_name, str(exc)) from exc
    logger.debug(
        "Parsed simple script '%s': %d option(s), %d command(s)",
        name,
        len(script.options),
        len(script.commands),
    )
    return script


def get_undocumented_choices(choices: Iterable[str]) -> list[str]:
    """Return ``choices`` without the injected ``back``/``quit`` sentinels."""

    return [choice for choice in choices if choice not in (BACK_COMMAND, QUIT_COMMAND)]


def _merge_option(script: Script, key: str, choices: list[str], file_name: str) -> None:
    if script.has_command(key):
        raise ParseError(file_name, f"'{key}' is an existing command and cannot become a group")

    existing = script.get_option(key)
    if existing is None:
        script.add_option(key, Option(name=leaf_name(key), choices=choices))
        return

    merged = get_undocumented_choices(existing.choices)
    merged.extend(choice for choice in choices if choice not in merged)
    script.update_option(
        key,
        Option(name=existing.name or leaf_name(key), message=existing.message, choices=merged),
    )


def _next_segments(paths: Iterable[SegmentPath], prefix: SegmentPath) -> list[str]:
    segments: list[str] = []
    depth = len(prefix)
    for path in paths:
        if len(path) > depth and path[:depth] == prefix and path[depth] not in segments:
            segments.append(path[depth])
    return segments


def _split_path(key: Any, file_name: str) -> SegmentPath:
    if not isinstance(key, str):
        raise ParseError(file_name, f"key '{key}' must be a string")
    segments = tuple(segment.strip() for segment in key.split(SIMPLE_SCRIPT_OPTION_SEPARATOR))
    for segment in segments:
        if not segment:
            raise ParseError(file_name, f"key '{key}' has an empty path segment")
        if KEY_SEPARATOR in segment:
            raise ParseError(file_name, f"key '{key}' may not contain '{KEY_SEPARATOR}'")
        if any(character.isspace() for character in segment):
            raise ParseError(file_name, f"key '{key}' may not contain whitespace inside a segment")
        if segment in SENTINEL_CHOICES:
            raise ParseError(file_name, f"key '{key}' uses the reserved name '{segment}'")
    return segments


def _directive(value: Any, key: str, file_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ParseError(file_name, f"'{key}' must map to a non-empty directive string")
    return value
