"""
Shared test fixtures for the scriptree test suite.
"""

from __future__ import annotations

import logging
import subprocess
from collections import deque
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import pytest
import yaml
from rich.console import Console

from scriptree.cli.chat import ScriptChat
from scriptree.cli.commands import CliContext
from scriptree.interfaces.config import AppConfig
from scriptree.interfaces.prompts import PromptRequest
from scriptree.parser.advanced import parse_advanced_script
from scriptree.utils.registry import ScriptRegistry

STARSHIP = {
    "message": "Which ship?",
    "options": {
        "millennium-falcon": {
            "message": "Which weapon?",
            "options": {
                "missiles": {"command": "echo missiles"},
                "lasers": {
                    "message": "Charging lasers",
                    "command": {1: "echo charge", 2: "echo fire"},
                },
                "hyperdrive": {
                    "message": "Which jump?",
                    "options": {
                        "kessel": {"exit-command": "echo jump", "directory": "/tmp"},
                    },
                },
            },
        },
        "x-wing": {"command": "echo x-wing", "variables": {"PILOT": "luke"}},
    },
}


class ScriptedPrompter:
    """Answers prompts from a fixed queue and records every request."""

    def __init__(self, answers: Iterable[Any] = ()) -> None:
        self.answers: deque[Any] = deque(answers)
        self.requests: list[PromptRequest] = []

    def ask(self, request: PromptRequest) -> Any:
        self.requests.append(request)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {request.message}")
        return self.answers.popleft()


class RecordingRunner:
    """Collects executed commands instead of spawning a shell."""

    def __init__(self, fail_on: Iterable[str] = ()) -> None:
        self.calls: list[tuple[list[str], str | None, dict[str, str]]] = []
        self.fail_on = set(fail_on)

    def run(
        self,
        directives: Sequence[str],
        cwd: str | None = None,
        variables: Mapping[str, str] | None = None,
    ) -> None:
        self.calls.append((list(directives), cwd, dict(variables or {})))
        for directive in directives:
            if directive in self.fail_on:
                raise subprocess.CalledProcessError(1, directive)


class RecordingChannel:
    def __init__(self) -> None:
        self.messages: list[str] = []
        self.errors: list[Exception] = []

    def say(self, message: str) -> None:
        self.messages.append(message)

    def wrap_error(self, error: Exception) -> None:
        self.errors.append(error)


@pytest.fixture
def starship_script():
    return parse_advanced_script(STARSHIP, "tie-fighter", "starship.yml")


@pytest.fixture
def prompter():
    return ScriptedPrompter()


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "home"
    monkeypatch.setenv("SCRIPTREE_HOME", str(path))
    return path


@pytest.fixture
def cli_context(home: Path, prompter: ScriptedPrompter, runner: RecordingRunner) -> CliContext:
    config = AppConfig(version="test", home=home)
    return CliContext(
        config=config,
        registry=ScriptRegistry(config.registry_path).load(),
        chat=ScriptChat(console=Console(record=True, width=120)),
        prompter=prompter,
        runner=runner,
    )


def write_yaml(path: Path, data: Any) -> Path:
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_scriptree_logger():
    yield
    logger = logging.getLogger("scriptree")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
