"""
Tests for loading script files from disk.
"""

import json

import pytest

from conftest import STARSHIP, write_yaml
from scriptree.constants import ScriptType
from scriptree.exceptions import ParseError
from scriptree.parser.files import (
    detect_script_type,
    get_script_from_file,
    is_valid_json_file_name,
    is_valid_yaml_file_name,
    load_script_file,
)


@pytest.mark.parametrize(
    "file_name, explicit, expected",
    [
        ("ships.yml", None, ScriptType.ADVANCED),
        ("ships.simple.yaml", None, ScriptType.SIMPLE),
        ("ships.SIMPLE.json", None, ScriptType.SIMPLE),
        ("nested/package.json", None, ScriptType.SIMPLE),
        ("ships.simple.yml", "advanced", ScriptType.ADVANCED),
    ],
)
def test_detect_script_type(file_name, explicit, expected):
    assert detect_script_type(file_name, explicit) is expected


def test_default_type_applies_without_marker():
    assert detect_script_type("ships.yml", None, "simple") is ScriptType.SIMPLE


def test_file_name_predicates():
    assert is_valid_yaml_file_name("a.YML")
    assert is_valid_yaml_file_name("a.yaml")
    assert not is_valid_yaml_file_name("a.json")
    assert is_valid_json_file_name("a.json")
    assert not is_valid_json_file_name("a.txt")


class TestLoadScriptFile:
    def test_bad_extension(self, tmp_path):
        path = tmp_path / "ships.txt"
        path.write_text("x: 1")

        with pytest.raises(ParseError, match="invalid file name"):
            load_script_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError, match="does not exist"):
            load_script_file(tmp_path / "ghost.yml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "broken.yml"
        path.write_text("ships: [unclosed\n")

        with pytest.raises(ParseError, match="malformed"):
            load_script_file(path)

    def test_undecodable_bytes(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_bytes(b"\xff\xfe ships: 1\n")

        with pytest.raises(ParseError) as exc_info:
            get_script_from_file(path)
        assert exc_info.value.file_name == str(path)
        assert "not valid UTF-8" in exc_info.value.reason


class TestGetScriptFromFile:
    def test_advanced_yaml(self, tmp_path):
        path = write_yaml(tmp_path / "ships.yml", {"tie-fighter": STARSHIP})

        script = get_script_from_file(path)

        assert script.name == "tie-fighter"
        assert script.script_type == "advanced"
        assert script.source == str(path.resolve())
        assert script.get_option("tie-fighter").choices == ["millennium-falcon", "x-wing", "quit"]

    def test_simple_json(self, tmp_path):
        path = tmp_path / "tasks.simple.json"
        path.write_text(json.dumps({"tasks": {"build": "make", "test:unit": "pytest"}}))

        script = get_script_from_file(path)

        assert script.script_type == "simple"
        assert script.get_option("tasks.test").choices == ["unit", "back", "quit"]

    def test_package_json_reads_scripts(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text(
            json.dumps({"name": "web", "version": "1.0.0", "scripts": {"start": "node .", "lint:fix": "eslint --fix"}})
        )

        script = get_script_from_file(path)

        assert script.name == "scripts"
        assert script.get_option("scripts").choices == ["start", "lint", "quit"]

    def test_explicit_starting_key(self, tmp_path):
        path = write_yaml(tmp_path / "ships.yml", {"meta": {"author": "me"}, "fleet": STARSHIP})

        script = get_script_from_file(path, starting_key="fleet")

        assert script.name == "fleet"

    def test_missing_starting_key(self, tmp_path):
        path = write_yaml(tmp_path / "ships.yml", {"fleet": STARSHIP})

        with pytest.raises(ParseError, match="'armada' not found"):
            get_script_from_file(path, starting_key="armada")

    def test_script_name_cannot_contain_separators(self, tmp_path):
        path = write_yaml(tmp_path / "ships.yml", {"fleet.v2": STARSHIP})

        with pytest.raises(ParseError, match="may not contain"):
            get_script_from_file(path)

    def test_empty_document(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")

        with pytest.raises(ParseError, match="non-empty mapping"):
            get_script_from_file(path)

    def test_simple_base_lookup_is_used(self, tmp_path):
        first = get_script_from_file(write_yaml(tmp_path / "a.simple.yml", {"tasks": {"build": "make"}}))
        second = get_script_from_file(
            write_yaml(tmp_path / "b.simple.yml", {"tasks": {"lint": "ruff ."}}),
            base_lookup=lambda name: first if name == "tasks" else None,
        )

        assert second.get_option("tasks").choices == ["build", "lint", "quit"]
