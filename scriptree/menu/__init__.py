"""Traversal engine, modify-mode overlay and command collection.

===================================================================================
OVERVIEW
===================================================================================
Walks a Script's option tree as a state machine driven by one answer at a time:

    start() ──► Display(root) ──answer──► Display(child)   (push)
                     ▲   │                 │
                     │   ├──"back"────────►  Display(parent) (pop)
                     │   ├──"quit"────────►  Terminate
                     │   └──command key──►  Execute ──► Display(same option)
                     │                                 └─► Terminate (exit command)
                     └───────────────────────────────────┘

In modify mode the walk runs over a derived copy whose options hide command
choices and offer "add a command"; selecting it yields
``(Modification.ADD_COMMAND, option_key)`` to the caller.

===================================================================================
SUBMODULE STRUCTURE
===================================================================================

engine.py:
    Menu.start() / answer(state, choice) / after_execute(state, effect)
    Effects: Display, Execute, Yielded, Terminate

session.py:
    MenuSession(script, prompter, runner, channel).run() → MenuOutcome

modify.py:
    derive_modify_script(script) → Script
    apply_new_command(script, option_key, collected) → command key

collector.py:
    CommandCollector.next_question() / next_answer(value) / build()

===================================================================================
"""

from .collector import CollectedCommand, CommandCollector
from .engine import Display, Execute, Menu, MenuState, Terminate, Yielded
from .modify import apply_new_command, derive_modify_script, insert_choice
from .session import MenuOutcome, MenuSession

__all__ = [
    "CollectedCommand",
    "CommandCollector",
    "Display",
    "Execute",
    "Menu",
    "MenuState",
    "Terminate",
    "Yielded",
    "apply_new_command",
    "derive_modify_script",
    "insert_choice",
    "MenuOutcome",
    "MenuSession",
]
