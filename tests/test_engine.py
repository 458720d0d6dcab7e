"""
Tests for the menu state machine and the session driving it.

Focus Areas:
1. Navigation: descend, back to the immediate parent, quit
2. Command execution returns to the same option unless it is an exit command
3. Runner failures are reported without ending the session
"""

import pytest

from conftest import RecordingRunner, ScriptedPrompter
from scriptree.constants import Modification
from scriptree.exceptions import StructureError
from scriptree.interfaces.script import Directory
from scriptree.menu.engine import Display, Execute, Menu, MenuState, Terminate
from scriptree.menu.session import MenuSession
from scriptree.parser.advanced import parse_advanced_script

FALCON = "tie-fighter.millennium-falcon"


class TestMenu:
    def test_start_displays_root(self, starship_script):
        state, effect = Menu(starship_script).start()

        assert state == MenuState(current="tie-fighter")
        assert isinstance(effect, Display)
        assert effect.prompt.message == "Which ship?"
        assert effect.prompt.choices == (
            ("millennium-falcon", "millennium-falcon"),
            ("x-wing", "x-wing"),
            ("quit", "quit"),
        )

    def test_descend_then_back_returns_to_parent(self, starship_script):
        menu = Menu(starship_script)
        state, _ = menu.start()
        state, _ = menu.answer(state, "millennium-falcon")
        state, effect = menu.answer(state, "hyperdrive")

        assert state.stack == ("tie-fighter", FALCON)

        state, effect = menu.answer(state, "back")
        assert state.current == FALCON
        assert effect.prompt.name == FALCON

    def test_back_at_root_is_an_error(self, starship_script):
        menu = Menu(starship_script)
        state, _ = menu.start()
        starship_script.get_option("tie-fighter").choices.append("back")

        with pytest.raises(StructureError, match="cannot go back"):
            menu.answer(state, "back")

    @pytest.mark.parametrize("choice", ["quit", None])
    def test_quit_and_cancel_terminate(self, starship_script, choice):
        menu = Menu(starship_script)
        state, _ = menu.start()
        state, effect = menu.answer(state, choice)

        assert state.terminated
        assert isinstance(effect, Terminate)
        with pytest.raises(RuntimeError):
            menu.answer(state, "x-wing")

    def test_command_executes_and_redisplays_same_option(self, starship_script):
        menu = Menu(starship_script)
        state, _ = menu.start()
        state, effect = menu.answer(state, "x-wing")

        assert isinstance(effect, Execute)
        assert effect.key == "tie-fighter.x-wing"
        assert state.current == "tie-fighter"

        state, effect = menu.after_execute(state, effect)
        assert isinstance(effect, Display)
        assert effect.prompt.name == "tie-fighter"

    def test_exit_command_terminates(self, starship_script):
        menu = Menu(starship_script)
        state, _ = menu.start()
        for choice in ("millennium-falcon", "hyperdrive"):
            state, _ = menu.answer(state, choice)
        state, effect = menu.answer(state, "kessel")

        assert effect.directory == Directory("/tmp")
        state, effect = menu.after_execute(state, effect)
        assert isinstance(effect, Terminate)

    def test_unknown_choice_is_rejected(self, starship_script):
        menu = Menu(starship_script)
        state, _ = menu.start()

        with pytest.raises(StructureError, match="not one of its choices"):
            menu.answer(state, "y-wing")

    def test_quit_must_be_offered_to_terminate(self, starship_script):
        starship_script.get_option("tie-fighter").choices.remove("quit")
        menu = Menu(starship_script)
        state, _ = menu.start()

        with pytest.raises(StructureError, match="not one of its choices"):
            menu.answer(state, "quit")
        state, effect = menu.answer(state, None)
        assert isinstance(effect, Terminate)
        assert state.terminated

    def test_unresolvable_choice_is_rejected(self, starship_script):
        starship_script.get_option("tie-fighter").choices.insert(0, "ghost")
        menu = Menu(starship_script)
        state, _ = menu.start()

        with pytest.raises(StructureError) as exc_info:
            menu.answer(state, "ghost")
        assert exc_info.value.key == "tie-fighter.ghost"

    def test_add_command_is_ignored_outside_modify_mode(self, starship_script):
        starship_script.get_option("tie-fighter").choices.insert(0, "add-command")
        menu = Menu(starship_script)
        state, _ = menu.start()

        with pytest.raises(StructureError):
            menu.answer(state, "add-command")

    def test_root_command_executes_then_terminates(self):
        script = parse_advanced_script({"command": "make"}, "build", "build.yml")
        menu = Menu(script)

        state, effect = menu.start()
        assert isinstance(effect, Execute)
        _, effect = menu.after_execute(state, effect)
        assert isinstance(effect, Terminate)


class TestMenuSession:
    def test_runs_commands_until_quit(self, starship_script, channel):
        prompter = ScriptedPrompter(["x-wing", "millennium-falcon", "lasers", "back", "quit"])
        runner = RecordingRunner()

        outcome = MenuSession(starship_script, prompter, runner, channel).run()

        assert outcome.executed == ("tie-fighter.x-wing", f"{FALCON}.lasers")
        assert outcome.modification is None
        assert runner.calls == [
            (["echo x-wing"], None, {"PILOT": "luke"}),
            (["echo charge", "echo fire"], None, {}),
        ]
        assert channel.messages == ["Charging lasers"]
        assert [request.name for request in prompter.requests] == [
            "tie-fighter",
            "tie-fighter",
            FALCON,
            FALCON,
            "tie-fighter",
        ]

    def test_exit_command_ends_session(self, starship_script, channel, runner):
        prompter = ScriptedPrompter(["millennium-falcon", "hyperdrive", "kessel"])

        outcome = MenuSession(starship_script, prompter, runner, channel).run()

        assert outcome.executed == (f"{FALCON}.hyperdrive.kessel",)
        assert runner.calls == [(["echo jump"], "/tmp", {})]

    def test_failed_command_is_reported_and_menu_continues(self, starship_script, channel):
        prompter = ScriptedPrompter(["x-wing", "quit"])
        runner = RecordingRunner(fail_on=["echo x-wing"])

        outcome = MenuSession(starship_script, prompter, runner, channel).run()

        assert outcome.executed == ("tie-fighter.x-wing",)
        assert len(channel.errors) == 1
        assert len(prompter.requests) == 2

    def test_modify_mode_yields_option_key(self, starship_script, channel, runner):
        starship_script.get_option(FALCON).choices.insert(3, "add-command")
        prompter = ScriptedPrompter(["millennium-falcon", "add-command"])

        outcome = MenuSession(starship_script, prompter, runner, channel, modify=True).run()

        assert outcome.modification is Modification.ADD_COMMAND
        assert outcome.option_key == FALCON
        assert runner.calls == []
