"""Questionary-backed prompter for interactive sessions."""

from __future__ import annotations

from typing import Any

import questionary

from ..interfaces.prompts import PromptRequest


class QuestionaryPrompter:
    """Answers :class:`PromptRequest` descriptors through questionary widgets.

    A cancelled ``list`` prompt answers ``None`` (the menu treats it as quit);
    cancelling a text or confirm prompt raises ``KeyboardInterrupt``.
    """

    def ask(self, request: PromptRequest) -> Any:
        if request.type == "list":
            return questionary.select(
                request.message,
                choices=[questionary.Choice(title=title, value=value) for title, value in request.choices],
                default=request.default,
            ).ask()

        if request.type == "confirm":
            response = questionary.confirm(request.message, default=bool(request.default)).ask()
        elif request.type == "input":
            default = "" if request.default is None else str(request.default)
            response = questionary.text(request.message, default=default).ask()
        else:
            raise ValueError(f"Unsupported prompt type: {request.type}")

        if response is None:
            raise KeyboardInterrupt
        return response
