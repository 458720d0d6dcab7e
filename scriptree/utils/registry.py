"""YAML-backed registry of saved scripts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import yaml

from ..exceptions import ParseError
from ..interfaces.script import Script

logger = logging.getLogger(__name__)


class ScriptRegistry:
    """Loads, stores and removes saved scripts keyed by name.

    The registry is created once per CLI invocation and handed to every
    operation explicitly.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._scripts: dict[str, Script] = {}
        self._names: list[str] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load(self) -> ScriptRegistry:
        self._scripts = {}
        self._names = []
        if not self.path.exists():
            logger.debug("Registry %s does not exist yet", self.path)
            return self

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                raw = yaml.safe_load(handle) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise ParseError(str(self.path), f"registry is not valid YAML ({exc})") from exc
        if not isinstance(raw, Mapping):
            raise ParseError(str(self.path), "registry must be a mapping with 'names' and 'scripts'")

        entries = raw.get("scripts") or {}
        if not isinstance(entries, Mapping):
            raise ParseError(str(self.path), "registry 'scripts' must be a mapping of name to script")
        for name, entry in entries.items():
            if not isinstance(entry, Mapping) or "name" not in entry:
                raise ParseError(str(self.path), f"saved script '{name}' has no 'name' field")
            self._scripts[str(name)] = Script.from_dict(entry)
        names = [str(name) for name in raw.get("names") or []]
        self._names = [name for name in names if name in self._scripts]
        for name in self._scripts:
            if name not in self._names:
                self._names.append(name)
        logger.debug("Loaded %d script(s) from %s", len(self._scripts), self.path)
        return self

    def save(self) -> Path:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "names": list(self._names),
            "scripts": {name: script.to_dict() for name, script in self._scripts.items()},
        }
        with self.path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(payload, handle, sort_keys=False)
        logger.debug("Saved %d script(s) to %s", len(self._scripts), self.path)
        return self.path

    def get_scripts(self) -> dict[str, Script]:
        return dict(self._scripts)

    def get_script(self, name: str) -> Script | None:
        return self._scripts.get(name)

    def add_script(self, script: Script) -> None:
        self._scripts[script.name] = script
        if script.name not in self._names:
            self._names.append(script.name)

    def remove_script(self, name: str) -> None:
        self._scripts.pop(name, None)

    def remove_script_name(self, name: str) -> None:
        if name in self._names:
            self._names.remove(name)

    def script_names(self) -> list[str]:
        return [name for name in self._names if name in self._scripts]

    def __len__(self) -> int:
        return len(self._scripts)
