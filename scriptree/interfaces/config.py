"""Configuration interfaces and data structures."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class AppConfig:
    """Runtime configuration for the scriptree CLI."""

    version: str
    home: Path
    registry_file: str = "scripts.yml"
    default_script_type: str = "advanced"
    show_banner: bool = True

    @property
    def registry_path(self) -> Path:
        return self.home / self.registry_file

    @property
    def config_path(self) -> Path:
        return self.home / "config.yml"

    @classmethod
    def settable_keys(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls) if f.name not in {"version", "home"})

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, key) for key in self.settable_keys()}
