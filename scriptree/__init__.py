"""scriptree: interactive menus of shell commands from declarative files.

===================================================================================
OVERVIEW
===================================================================================
scriptree reads a YAML or JSON file describing a tree of questions whose leaves
are shell command sequences, saves it under a name, and replays it later as a
guided menu. A "modify" mode walks the same tree to append new commands without
hand-editing the source file.

===================================================================================
ARCHITECTURE
===================================================================================

    scriptree/
    ├── interfaces/       Script/Option/Command/Directory, AppConfig, prompts
    ├── parser/           advanced + simple dialects → Script
    ├── menu/             traversal engine, modify overlay, command collector
    ├── utils/            paths, config, registry, shell runner, logging
    └── cli/              argparse surface, Rich presenter, questionary prompts

===================================================================================
SYSTEM FLOW DIAGRAM
===================================================================================

    file.yml ──► parser.get_script_from_file() ──► Script
                                                     │
                              ScriptRegistry.add_script() / save()
                                                     │
           ┌─────────────────────────────────────────┴──────────────┐
           ▼                                                        ▼
    MenuSession(script).run()                  MenuSession(derive_modify_script(script),
      Display → answer → Execute …                          modify=True).run()
                                                            │
                                                 (ADD_COMMAND, option_key)
                                                            │
                                               CommandCollector → apply_new_command()
                                                            │
                                                   ScriptRegistry.save()

===================================================================================
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
