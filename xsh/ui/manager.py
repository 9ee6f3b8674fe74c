#!/usr/bin/env python3
import os
from typing import Iterable, List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.styles import Style, merge_styles
from prompt_toolkit.styles.defaults import default_ui_style
from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..config import Config
from .theme import PanelTheme


class UIManager:
    def __init__(self, console: Console, error_console: Optional[Console] = None) -> None:
        self.console = console
        self.error_console = error_console or console

    def get_prompt_text(self) -> FormattedText:
        fragments: List[Tuple[str, str]] = []

        if Config.SHOW_PROMPT_PATH:
            try:
                path_display = self._format_path_for_prompt(os.getcwd())
            except OSError:
                path_display = "?"
            fragments.append(("class:path", path_display))
            fragments.append(("class:separator", " "))

        fragments.append(("class:prompt_symbol", Config.get_prompt_symbol()))
        return FormattedText(fragments)

    def get_style(self) -> Style:
        combined_styles = {
            **Config.PROMPT_STYLES,
            **Config.COMPLETION_STYLES,
        }
        return merge_styles([default_ui_style(), Style.from_dict(combined_styles)])

    def _format_path_for_prompt(self, path: str) -> str:
        home_dir = os.path.expanduser("~")

        if path == home_dir:
            return "~"

        if path.startswith(home_dir + os.sep):
            return "~" + path[len(home_dir) :]

        return path

    def show_welcome(self) -> None:
        if not Config.SHOW_STARTUP_BANNER:
            return

        welcome_parts = [
            Config.WELCOME_MESSAGE,
            "",
            "[dim]Built-ins:[/dim] " + ", ".join(Config.BUILTIN_COMMANDS),
            "[dim]Press Alt+H for help, Ctrl+D to leave.[/dim]",
        ]
        self.console.print(
            PanelTheme.build("\n".join(welcome_parts), style="info", fit=True)
        )
        self.console.print()

    def show_help(self) -> None:
        lines = ["[bold]Built-in Commands[/bold]"]
        for name, description in Config.BUILTIN_COMMANDS.items():
            lines.append(f"  • [cyan]{name}[/cyan] – {description}")

        lines.append("\n[bold]Operators[/bold]")
        lines.extend(
            [
                "  • [cyan]< file[/cyan] – Read standard input from file",
                "  • [cyan]> file[/cyan] – Write standard output to file",
                "  • [cyan]&[/cyan] – Run in the background",
                "  • [cyan]$name[/cyan] – Insert the value of a variable",
            ]
        )

        lines.append("\n[bold]Keybindings[/bold]")
        for keybind, description in Config.HELP_KEYBINDS:
            lines.append(f"  • [cyan]{keybind}[/cyan] – {description}")

        self.console.print()
        self.console.print(
            PanelTheme.build("\n".join(lines), title="Help", style="info", fit=True)
        )
        self.console.print()

    def display_output(self, text: str) -> None:
        self.console.print(Text(text), highlight=False, soft_wrap=True)

    def display_variables(self, variables: Iterable[Tuple[str, str]]) -> None:
        table = Table(title="Shell Variables", show_header=True)
        table.add_column("Name", style="cyan")
        table.add_column("Value", style="green")

        rows = 0
        for name, value in variables:
            table.add_row(Text(name), Text(value))
            rows += 1

        if not rows:
            self.console.print("[dim]No variables set[/dim]")
            return

        self.console.print(table)

    def display_error(self, command: str, error_msg: str) -> None:
        self.error_console.print(
            PanelTheme.build(
                Text(error_msg, style="red"),
                title=Text(f" xsh: {command}"),
                style="error",
                fit=True,
            )
        )

    def display_command_not_found(
        self,
        command: str,
        base_command: str,
        error_text: str,
        suggestions: List[str],
    ) -> None:
        tree = Tree("[bold red]Command Not Found[/bold red]")
        tree.add(Text.assemble(("Input: ", "cyan"), command))
        tree.add(Text(error_text.strip() or "command not found", style="red"))

        tips_node = tree.add("[green]Tips[/green]")
        tips_node.add(
            Text.assemble(
                "• Ensure '",
                (base_command or command, "bold"),
                "' exists on your system or is available in PATH",
            )
        )

        if suggestions:
            suggestion_node = tree.add("[cyan]Possible similar commands[/cyan]")
            for suggestion in suggestions:
                suggestion_node.add(Text(f"- {suggestion}"))

        self.error_console.print(
            PanelTheme.build(
                tree,
                title=Text(f" xsh: {command}"),
                style="error",
                fit=True,
            )
        )

    def display_background_start(self, pid: int, command: str) -> None:
        self.console.print(
            Text.assemble((f"[{pid}]", "green"), " ", (command, "dim")),
            highlight=False,
        )

    def display_interrupt(self, message: str = "^C - Command interrupted") -> None:
        self.error_console.print(
            PanelTheme.build(
                f"[yellow]{message}[/yellow]",
                title=" xsh",
                style="warning",
                fit=True,
            )
        )

    def display_goodbye(self) -> None:
        self.console.print("[yellow]Goodbye![/yellow]")
