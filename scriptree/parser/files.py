"""Loading script files and dispatching them to the right dialect."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from ..constants import (
    JSON_SUFFIXES,
    KEY_SEPARATOR,
    NPM_PACKAGE_FILE,
    NPM_SCRIPTS_KEY,
    SIMPLE_SCRIPT_MARKER,
    SIMPLE_SCRIPT_OPTION_SEPARATOR,
    YAML_SUFFIXES,
    ScriptType,
)
from ..exceptions import ParseError
from ..interfaces.script import Script
from .advanced import parse_advanced_script
from .simple import parse_simple_script

logger = logging.getLogger(__name__)

BaseLookup = Callable[[str], "Script | None"]


def is_valid_yaml_file_name(file_name: str | Path) -> bool:
    return Path(file_name).suffix.lower() in YAML_SUFFIXES


def is_valid_json_file_name(file_name: str | Path) -> bool:
    return Path(file_name).suffix.lower() in JSON_SUFFIXES


def detect_script_type(
    file_name: str | Path,
    explicit: str | None = None,
    default: str = ScriptType.ADVANCED.value,
) -> ScriptType:
    """Pick the dialect for ``file_name``.

    An explicit type wins. Otherwise ``*.simple.<ext>`` files and npm
    ``package.json`` files are simple and everything else uses ``default``.
    """

    if explicit:
        return ScriptType(explicit)
    path = Path(file_name)
    if path.name == NPM_PACKAGE_FILE:
        return ScriptType.SIMPLE
    if Path(path.stem).suffix.lower() == SIMPLE_SCRIPT_MARKER:
        return ScriptType.SIMPLE
    return ScriptType(default)


def load_script_file(file_name: str | Path) -> Any:
    """Read a YAML or JSON document from disk."""

    path = Path(file_name)
    if not (is_valid_yaml_file_name(path) or is_valid_json_file_name(path)):
        raise ParseError(str(path), "invalid file name, expected a .yml, .yaml or .json file")
    if not path.is_file():
        raise ParseError(str(path), "file does not exist")

    try:
        text = path.read_text(encoding="utf-8")
        if is_valid_yaml_file_name(path):
            return yaml.safe_load(text)
        return json.loads(text)
    except UnicodeDecodeError as exc:
        raise ParseError(str(path), f"file is not valid UTF-8 text ({exc.reason})") from exc
    except OSError as exc:
        raise ParseError(str(path), f"file could not be read ({exc.strerror or exc})") from exc
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ParseError(str(path), f"malformed document ({exc})") from exc


def get_script_from_file(
    file_name: str | Path,
    *,
    script_type: str | None = None,
    starting_key: str | None = None,
    default_type: str = ScriptType.ADVANCED.value,
    base_lookup: BaseLookup | None = None,
) -> Script:
    """Load ``file_name`` and parse it into a :class:`Script`.

    Args:
        file_name: Path to a ``.yml``, ``.yaml`` or ``.json`` file.
        script_type: Force ``simple`` or ``advanced`` instead of detecting it.
        starting_key: Top-level key holding the script. Defaults to the first
            key of the document, or ``scripts`` for an npm ``package.json``.
        default_type: Dialect used when detection finds no marker.
        base_lookup: Returns a saved script by name; simple scripts are merged
            into it instead of replacing it.

    Returns:
        The parsed script with its ``source`` set to the resolved file path.
    """

    path = Path(file_name)
    kind = detect_script_type(path, script_type, default_type)
    document = load_script_file(path)
    if not isinstance(document, Mapping) or not document:
        raise ParseError(str(path), "document must be a non-empty mapping")

    if starting_key is None and path.name == NPM_PACKAGE_FILE:
        starting_key = NPM_SCRIPTS_KEY
    name = starting_key or _first_key(document, str(path))
    if name not in document:
        raise ParseError(str(path), f"top-level key '{name}' not found")
    if KEY_SEPARATOR in name or SIMPLE_SCRIPT_OPTION_SEPARATOR in name:
        raise ParseError(str(path), f"script name '{name}' may not contain '.' or ':'")

    source = str(path.expanduser().resolve())
    logger.debug("Parsing %s as a %s script named '%s'", path, kind.value, name)
    if kind is ScriptType.SIMPLE:
        base = base_lookup(name) if base_lookup else None
        return parse_simple_script(document[name], name, str(path), base=base, source=source)
    return parse_advanced_script(document[name], name, str(path), source=source)


def _first_key(document: Mapping[str, Any], file_name: str) -> str:
    key = next(iter(document))
    if not isinstance(key, str) or not key.strip():
        raise ParseError(file_name, "the first top-level key must be the script name")
    return key
