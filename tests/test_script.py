"""
Tests for the Script entity model.

Focus Areas:
1. Deep copies are independent of their source
2. Structural validation of choice references
3. Persistence round trip through to_dict/from_dict
"""

import pytest

from scriptree.exceptions import StructureError
from scriptree.interfaces.script import Command, Directory, Option, Script


def _small_script() -> Script:
    script = Script(name="deploy")
    script.add_option("deploy", Option(name="deploy", message="Where?", choices=["web", "quit"]))
    script.add_command("deploy.web", Command(directives=["make web"], variables={"ENV": "prod"}))
    script.update_directory("deploy.web", Directory("~/src"))
    return script


class TestCopy:
    def test_copy_is_equal_but_independent(self, starship_script):
        clone = Script.copy(starship_script)

        assert clone == starship_script
        clone.get_option("tie-fighter").choices.append("extra")
        clone.get_command("tie-fighter.x-wing").variables["PILOT"] = "wedge"

        assert "extra" not in starship_script.get_option("tie-fighter").choices
        assert starship_script.get_command("tie-fighter.x-wing").variables["PILOT"] == "luke"

    def test_copy_does_not_share_mappings(self, starship_script):
        clone = Script.copy(starship_script)
        clone.update_option("tie-fighter.new", Option(name="new"))

        assert not starship_script.has_option("tie-fighter.new")
        assert clone.options is not starship_script.options
        assert clone.directories is not starship_script.directories

    @pytest.mark.parametrize(
        "copier, value",
        [
            (Script.copy, Option()),
            (Option.copy, Command()),
            (Command.copy, "echo"),
            (Directory.copy, None),
        ],
    )
    def test_copy_rejects_wrong_instances(self, copier, value):
        with pytest.raises(TypeError, match="expects a"):
            copier(value)


class TestAccessors:
    def test_update_replaces_whole_value(self):
        script = _small_script()
        script.update_command("deploy.web", Command(directives=["make all"]))

        assert script.get_command("deploy.web").directives == ["make all"]
        assert script.get_command("deploy.web").variables == {}

    def test_missing_lookups_return_none(self):
        script = _small_script()

        assert script.get_option("deploy.nope") is None
        assert script.get_command("deploy.nope") is None
        assert script.get_directory("deploy") is None
        assert script.has_option("deploy")
        assert not script.has_option("deploy.web")

    def test_update_rejects_wrong_types(self):
        script = _small_script()
        with pytest.raises(TypeError):
            script.update_option("deploy", Command())


class TestValidate:
    def test_parsed_script_is_valid(self, starship_script):
        starship_script.validate()

    def test_dangling_choice_is_reported(self):
        script = _small_script()
        script.update_option("deploy", Option(name="deploy", choices=["web", "db", "quit"]))

        with pytest.raises(StructureError) as exc_info:
            script.validate()
        assert exc_info.value.key == "deploy.db"

    def test_key_cannot_be_option_and_command(self):
        script = _small_script()
        script.add_option("deploy.web", Option(name="web", choices=["back", "quit"]))

        with pytest.raises(StructureError, match="both an option and a command"):
            script.validate()

    def test_duplicate_choices_are_reported(self):
        script = _small_script()
        script.update_option("deploy", Option(name="deploy", choices=["web", "web", "quit"]))

        with pytest.raises(StructureError, match="duplicate"):
            script.validate()


class TestSerialization:
    def test_round_trip(self, starship_script):
        restored = Script.from_dict(starship_script.to_dict())

        assert restored == starship_script

    def test_exit_flag_and_directory_survive(self):
        script = _small_script()
        script.update_command("deploy.web", Command(directives=["make web"], exit=True))
        restored = Script.from_dict(script.to_dict())

        assert restored.get_command("deploy.web").exit is True
        assert restored.get_directory("deploy.web") == Directory("~/src")


def test_walk_follows_choice_order(starship_script):
    keys = [key for key, _depth, _node in starship_script.walk()]

    assert keys == [
        "tie-fighter",
        "tie-fighter.millennium-falcon",
        "tie-fighter.millennium-falcon.missiles",
        "tie-fighter.millennium-falcon.lasers",
        "tie-fighter.millennium-falcon.hyperdrive",
        "tie-fighter.millennium-falcon.hyperdrive.kessel",
        "tie-fighter.x-wing",
    ]
