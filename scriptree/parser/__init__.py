"""Schema parsing for scriptree script files.

===================================================================================
OVERVIEW
===================================================================================
Turns a declarative YAML/JSON file into a :class:`~scriptree.interfaces.script.Script`.
Two dialects converge on the same Script shape:

  advanced - nested nodes tagged with message/options/command/exit-command/directory
  simple   - a bare directive, or a flat mapping of ``a:b:c`` paths to directives

===================================================================================
SUBMODULE STRUCTURE
===================================================================================

nodes.py:
    decode_node(raw, key, file) → CommandNode | OptionNode
    decode_directives(value, key, file) → ordered directives (1..n, no gaps)

advanced.py:
    parse_advanced_script(data, name, file) → Script
    Depth-first; children exist before the parent's choices are assembled

simple.py:
    parse_simple_script(data, name, file, base=None) → Script
    Infers options from path prefixes; unions into ``base`` when given

files.py:
    load_script_file(file) → raw document
    detect_script_type(file, explicit, default) → ScriptType
    get_script_from_file(file, ...) → Script

===================================================================================
ERROR HANDLING
===================================================================================

ParseError (ValueError):
    - unsupported file extension or malformed YAML/JSON
    - node declaring both or neither of command/options
    - non-contiguous numbered directives, e.g. {1: "a", 3: "b"}
    - variables that are not a flat mapping of text values

===================================================================================
"""

from .advanced import parse_advanced_script
from .files import (
    detect_script_type,
    get_script_from_file,
    is_valid_json_file_name,
    is_valid_yaml_file_name,
    load_script_file,
)
from .simple import parse_simple_script

__all__ = [
    "parse_advanced_script",
    "parse_simple_script",
    "detect_script_type",
    "get_script_from_file",
    "is_valid_json_file_name",
    "is_valid_yaml_file_name",
    "load_script_file",
]
