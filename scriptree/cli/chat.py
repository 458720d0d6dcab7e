"""Conversation-style helpers powered by Rich for the scriptree CLI."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from ..constants import SENTINEL_CHOICES
from ..interfaces.config import AppConfig
from ..interfaces.script import Command, Script, leaf_name, parent_key


@dataclass
class ScriptChat:
    console: Console = field(default_factory=Console)

    def say(self, message: str, style: str = "cyan") -> None:
        self.console.print(f"[bold {style}]→[/] {escape(message)}")

    def warn(self, message: str) -> None:
        self.say(message, style="yellow")

    def success(self, message: str) -> None:
        self.console.print(Panel(escape(message), title="✨ Success", style="green"))

    def wrap_error(self, error: Exception) -> None:
        self.console.print(
            Panel(
                f"[bold red]{error.__class__.__name__} happened:[/]\n{escape(str(error))}",
                title="Oops",
                style="bright_red",
            )
        )

    def print_scripts(self, scripts: list[Script]) -> None:
        table = Table(title="Saved scripts")
        table.add_column("Name", style="bold cyan")
        table.add_column("Type")
        table.add_column("Options", justify="right")
        table.add_column("Commands", justify="right")
        table.add_column("Source", style="dim")
        for script in scripts:
            table.add_row(
                escape(script.name),
                script.script_type,
                str(len(script.options)),
                str(len(script.commands)),
                escape(script.source or "-"),
            )
        self.console.print(table)

    def print_tree(self, script: Script) -> None:
        branches: dict[str, Tree] = {}
        root: Tree | None = None
        for key, depth, node in script.walk():
            label = self._node_label(key, node, script)
            if depth == 0:
                root = Tree(label)
                branches[key] = root
                continue
            parent = branches[parent_key(key) or script.name]
            branches[key] = parent.add(label)
        if root is not None:
            self.console.print(root)

    def print_config(self, config: AppConfig) -> None:
        table = Table(title=f"Configuration ({escape(str(config.config_path))})")
        table.add_column("Key", style="bold cyan")
        table.add_column("Value")
        table.add_row("version", config.version)
        table.add_row("home", escape(str(config.home)))
        for key, value in config.to_dict().items():
            table.add_row(key, escape(str(value)))
        self.console.print(table)

    @staticmethod
    def _node_label(key: str, node: object, script: Script) -> str:
        name = escape(leaf_name(key))
        if isinstance(node, Command):
            label = f"[green]{name}[/] [dim]{escape(' && '.join(node.directives))}[/]"
            directory = script.get_directory(key)
            if directory is not None:
                label += f" [blue](in {escape(directory.path)})[/]"
            if node.exit:
                label += " [red](exits)[/]"
            return label
        message = getattr(node, "message", "")
        choices = [c for c in getattr(node, "choices", []) if c not in SENTINEL_CHOICES]
        label = f"[bold cyan]{name}[/]"
        if message:
            label += f" [italic]{escape(message)}[/]"
        if not choices:
            label += " [dim](empty)[/]"
        return label
