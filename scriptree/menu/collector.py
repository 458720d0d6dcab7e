"""Sequential questionnaire that gathers the fields of a new command."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from typing import Any

from ..constants import (
    KEY_SEPARATOR,
    SENTINEL_CHOICES,
    SIMPLE_SCRIPT_OPTION_SEPARATOR,
    WHITESPACE_REPLACEMENT,
)
from ..interfaces.prompts import PromptRequest
from ..interfaces.script import Command, Directory, join_key

_WHITESPACE = re.compile(r"\s+")

NAME = PromptRequest(type="input", name="name", message="Name of the command", required=True)
DIRECTIVE = PromptRequest(
    type="input", name="directive", message="Shell directive to run", required=True
)
ANOTHER_DIRECTIVE = PromptRequest(
    type="confirm", name="another", message="Add another directive after this one?", default=False
)
MESSAGE = PromptRequest(type="input", name="message", message="Message to print first (optional)")
DIRECTORY = PromptRequest(
    type="input", name="path", message="Directory to run it in (optional)"
)


def replace_whitespace(value: str, replacement: str = WHITESPACE_REPLACEMENT) -> str:
    return _WHITESPACE.sub(replacement, value.strip())


@dataclass(frozen=True)
class CollectedCommand:
    name: str
    leaf: str
    command: Command
    directory: Directory | None = None

    def command_key(self, option_key: str) -> str:
        return join_key(option_key, self.leaf)


class CommandCollector:
    """Asks for name, directive(s), message and directory one question at a time.

    ``next_question`` returns the pending question, or ``None`` once every
    field has been collected. ``next_answer`` records a value against the
    pending question; a blank or invalid answer to a required question leaves
    it pending so it is asked again. The collector does not know about the
    script it will be added to.
    """

    def __init__(self) -> None:
        self.answers: dict[str, Any] = {}
        self.directives: list[str] = []
        self.last_error: str | None = None
        self._queue: deque[PromptRequest] = deque(
            [NAME, DIRECTIVE, ANOTHER_DIRECTIVE, MESSAGE, DIRECTORY]
        )
        self._pending: PromptRequest | None = None

    @property
    def complete(self) -> bool:
        return self._pending is None and not self._queue

    def next_question(self) -> PromptRequest | None:
        if self._pending is None and self._queue:
            self._pending = self._queue.popleft()
        return self._pending

    def next_answer(self, value: Any) -> None:
        question = self._pending
        if question is None:
            raise RuntimeError("no question is waiting for an answer")
        self.last_error = None

        if question.type == "confirm":
            if value:
                self._queue.extendleft([ANOTHER_DIRECTIVE, DIRECTIVE])
            self._pending = None
            return

        text = "" if value is None else str(value).strip()
        if question.required and not text:
            self.last_error = f"A {question.name} is required."
            return
        if question is NAME:
            error = _name_error(text)
            if error:
                self.last_error = error
                return
        if question is DIRECTIVE:
            self.directives.append(text)
        self.answers[question.name] = text
        self._pending = None

    def build(self) -> CollectedCommand:
        if not self.complete:
            raise RuntimeError("command collection is not finished")
        name = self.answers["name"]
        path = self.answers.get("path") or None
        return CollectedCommand(
            name=name,
            leaf=replace_whitespace(name),
            command=Command(
                directives=list(self.directives),
                message=self.answers.get("message") or None,
            ),
            directory=Directory(path) if path else None,
        )


def _name_error(name: str) -> str | None:
    leaf = replace_whitespace(name)
    if KEY_SEPARATOR in leaf or SIMPLE_SCRIPT_OPTION_SEPARATOR in leaf:
        return f"Names cannot contain '{KEY_SEPARATOR}' or '{SIMPLE_SCRIPT_OPTION_SEPARATOR}'."
    if leaf in SENTINEL_CHOICES:
        return f"'{leaf}' is reserved."
    return None
