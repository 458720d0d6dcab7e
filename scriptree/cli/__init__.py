"""Command-line interface using Rich and Questionary.

===================================================================================
OVERVIEW
===================================================================================
Implements the scriptree command line:
  - argparse subcommands (save, list, run, delete, update, print, modify, config)
  - Questionary prompts answering the menu engine's PromptRequests
  - Rich panels, tables and trees for output
  - Error wrapping: ScriptreeError → red panel + exit status 1

Entry point: scriptree

===================================================================================
SUBMODULE STRUCTURE
===================================================================================

main.py:
    main(argv) → exit status
    build_context(home) → CliContext(config, registry, chat, prompter, runner)

commands.py:
    run_save / run_list / run_run / run_delete / run_update / run_print /
    run_modify / run_config, one per operation

chat.py:
    ScriptChat - say(), warn(), success(), wrap_error(), print_scripts(),
    print_tree(), print_config()

prompts.py:
    QuestionaryPrompter - PromptRequest → questionary.select/text/confirm

===================================================================================
CONSTRAINTS
===================================================================================

1. Questionary prompts require a TTY (no piping stdin)
2. Rich formatting requires a color-capable terminal (auto-detection)
3. Declining a confirmation is not an error; the process exits with status 0

===================================================================================
"""
