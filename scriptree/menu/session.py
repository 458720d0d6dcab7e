"""Driver that performs the effects emitted by :class:`~scriptree.menu.engine.Menu`."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from ..constants import Modification
from ..interfaces.prompts import Prompter
from ..interfaces.script import Script
from .engine import Display, Execute, Menu, Terminate, Yielded

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(
        self,
        directives: Sequence[str],
        cwd: str | None = None,
        variables: Mapping[str, str] | None = None,
    ) -> None:  # pragma: no cover - protocol
        ...


class SessionChannel(Protocol):
    def say(self, message: str) -> None:  # pragma: no cover - simple logging interface
        ...

    def wrap_error(self, error: Exception) -> None:  # pragma: no cover - simple logging interface
        ...


@dataclass(frozen=True)
class MenuOutcome:
    modification: Modification | None = None
    option_key: str | None = None
    executed: tuple[str, ...] = ()


class MenuSession:
    """Runs a :class:`Menu` against a prompter and a command runner until it stops."""

    def __init__(
        self,
        script: Script,
        prompter: Prompter,
        runner: CommandRunner,
        channel: SessionChannel,
        *,
        modify: bool = False,
    ) -> None:
        self.menu = Menu(script, modify=modify)
        self.prompter = prompter
        self.runner = runner
        self.channel = channel

    def run(self) -> MenuOutcome:
        executed: list[str] = []
        state, effect = self.menu.start()
        while True:
            if isinstance(effect, Display):
                answer = self.prompter.ask(effect.prompt)
                state, effect = self.menu.answer(state, answer)
            elif isinstance(effect, Execute):
                self._execute(effect)
                executed.append(effect.key)
                state, effect = self.menu.after_execute(state, effect)
            elif isinstance(effect, Yielded):
                return MenuOutcome(effect.modification, effect.option_key, tuple(executed))
            elif isinstance(effect, Terminate):
                return MenuOutcome(executed=tuple(executed))
            else:  # pragma: no cover - exhaustive over Effect
                raise TypeError(f"Unknown menu effect: {effect!r}")

    def _execute(self, effect: Execute) -> None:
        command = effect.command
        if command.message:
            self.channel.say(command.message)
        cwd = effect.directory.path if effect.directory else None
        try:
            self.runner.run(command.directives, cwd=cwd, variables=command.variables)
        except (subprocess.CalledProcessError, OSError) as error:
            # The failure belongs to this command only; the menu carries on.
            logger.debug("Command '%s' failed: %s", effect.key, error)
            self.channel.wrap_error(error)
