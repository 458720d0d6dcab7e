"""Shared utilities for paths, configuration, persistence and execution.

===================================================================================
SUBMODULE STRUCTURE
===================================================================================

paths.py:
    home_dir() → $SCRIPTREE_HOME or ~/.scriptree

config.py:
    load_config(path=None) → AppConfig from YAML (defaults when missing)
    save_config(config) → path written
    set_config_value(config, key, raw) → new AppConfig

registry.py:
    ScriptRegistry - load/save/get_scripts/get_script/add_script/
    remove_script/remove_script_name

shell.py:
    ShellRunner.run(directives, cwd, variables) - sequential, stops at first failure

log.py:
    configure_logging(verbose) - RichHandler on the "scriptree" logger

===================================================================================
"""

from .config import load_config, save_config, set_config_value
from .paths import home_dir
from .registry import ScriptRegistry
from .shell import ShellRunner

__all__ = [
    "home_dir",
    "load_config",
    "save_config",
    "set_config_value",
    "ScriptRegistry",
    "ShellRunner",
]
