"""Pure state machine that walks a script's option tree.

``Menu`` never touches the terminal or the shell. Each call takes the current
:class:`MenuState` plus an answer and returns the next state together with the
effect the caller must perform: show a prompt, execute a command, hand control
back for a modification, or stop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from ..constants import (
    ADD_COMMAND,
    BACK_COMMAND,
    QUIT_COMMAND,
    SENTINEL_TITLES,
    Modification,
)
from ..exceptions import StructureError
from ..interfaces.prompts import PromptRequest
from ..interfaces.script import Command, Directory, Option, Script, join_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuState:
    current: str
    stack: tuple[str, ...] = ()
    terminated: bool = False


@dataclass(frozen=True)
class Display:
    prompt: PromptRequest


@dataclass(frozen=True)
class Execute:
    key: str
    command: Command
    directory: Directory | None = None


@dataclass(frozen=True)
class Yielded:
    modification: Modification
    option_key: str


@dataclass(frozen=True)
class Terminate:
    pass


Effect = Union[Display, Execute, Yielded, Terminate]
Transition = tuple[MenuState, Effect]


class Menu:
    """Interactive walk over ``script`` starting at its root key.

    With ``modify=True`` the ``add-command`` sentinel is honoured: selecting it
    yields ``(Modification.ADD_COMMAND, current key)`` instead of navigating.
    """

    def __init__(self, script: Script, *, modify: bool = False) -> None:
        self.script = script
        self.modify = modify

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start(self) -> Transition:
        root = self.script.name
        state = MenuState(current=root)
        if self.script.has_option(root):
            return state, self.display(root)
        command = self.script.get_command(root)
        if command is None:
            raise StructureError(root, "root key is neither an option nor a command")
        return state, self._execute(root, command)

    def answer(self, state: MenuState, choice: str | None) -> Transition:
        if state.terminated:
            raise RuntimeError("menu session has already terminated")
        if choice is None:
            return self._terminate(state)

        option = self._option(state.current)
        if choice not in option.choices:
            raise StructureError(state.current, f"'{choice}' is not one of its choices")

        if choice == QUIT_COMMAND:
            return self._terminate(state)

        if choice == BACK_COMMAND:
            if not state.stack:
                raise StructureError(state.current, "cannot go back from the root option")
            parent = state.stack[-1]
            return MenuState(current=parent, stack=state.stack[:-1]), self.display(parent)

        if choice == ADD_COMMAND and self.modify:
            logger.debug("Add-command selected at '%s'", state.current)
            return state, Yielded(Modification.ADD_COMMAND, state.current)

        child = join_key(state.current, choice)
        if self.script.has_option(child):
            return MenuState(current=child, stack=(*state.stack, state.current)), self.display(child)
        command = self.script.get_command(child)
        if command is not None:
            return state, self._execute(child, command)
        raise StructureError(child, "choice resolves to neither an option nor a command")

    def after_execute(self, state: MenuState, executed: Execute) -> Transition:
        """Return to the same option, or stop after an exit command."""

        if executed.command.exit or not self.script.has_option(state.current):
            return self._terminate(state)
        return state, self.display(state.current)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def display(self, key: str) -> Display:
        option = self._option(key)
        choices = tuple((SENTINEL_TITLES.get(choice, choice), choice) for choice in option.choices)
        return Display(
            PromptRequest(
                type=option.type,
                name=key,
                message=option.message or option.name or key,
                choices=choices,
            )
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _option(self, key: str) -> Option:
        option = self.script.get_option(key)
        if option is None:
            raise StructureError(key, "no option is defined for this key")
        return option

    def _execute(self, key: str, command: Command) -> Execute:
        return Execute(key=key, command=command, directory=self.script.get_directory(key))

    @staticmethod
    def _terminate(state: MenuState) -> Transition:
        return MenuState(current=state.current, stack=state.stack, terminated=True), Terminate()
