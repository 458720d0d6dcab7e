"""Prompt descriptors exchanged between the menu engine and the terminal."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class PromptRequest:
    """A single question the core needs answered before it can advance.

    ``type`` is one of ``list``, ``input`` or ``confirm``. For ``list`` prompts
    ``choices`` holds ``(title, value)`` pairs in display order.
    """

    type: str
    name: str
    message: str
    choices: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    default: Any = None
    required: bool = False


class Prompter(Protocol):
    def ask(self, request: PromptRequest) -> Any:  # pragma: no cover - protocol
        ...
