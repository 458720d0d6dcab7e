"""Shared interfaces for scriptree.

===================================================================================
OVERVIEW
===================================================================================
This package defines the contract between the parser, the menu engine and the
CLI via:
  - Dataclasses for the script tree and configuration
  - Protocols for the prompt collaborator
  - Type hints for consistency

===================================================================================
SUBMODULE STRUCTURE
===================================================================================

script.py:
    Option    - name, message, ordered choices
    Command   - directives, message, variables, exit flag
    Directory - working-directory override for one command
    Script    - options/commands/directories keyed by hierarchical key
      - copy(script) → independent deep copy
      - validate() → StructureError on dangling choices
      - to_dict()/from_dict() for persistence

config.py:
    AppConfig - Immutable configuration dataclass
    Fields:
      - version: str
      - home: Path
      - registry_file: str
      - default_script_type: str
      - show_banner: bool

prompts.py:
    PromptRequest - type, name, message, choices, default
    Prompter (Protocol) - ask(request) → answer

===================================================================================
DATA STRUCTURES DIAGRAM
===================================================================================

    Script "deploy"
        │
        ├─ options["deploy"]            Option(choices=[staging, prod, quit])
        │     │
        │     ├─ commands["deploy.staging"]   Command(directives=[...])
        │     └─ options["deploy.prod"]       Option(choices=[web, back, quit])
        │             │
        │             └─ commands["deploy.prod.web"]
        │
        └─ directories["deploy.staging"]      Directory(path="~/infra")

===================================================================================
"""

from .config import AppConfig
from .prompts import PromptRequest, Prompter
from .script import Command, Directory, Option, Script

__all__ = [
    "AppConfig",
    "PromptRequest",
    "Prompter",
    "Command",
    "Directory",
    "Option",
    "Script",
]
