#!/usr/bin/env python3
import logging
import sys
from typing import IO, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.history import FileHistory, History, InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from rich.console import Console

from ..commands import CommandExecutor, ProcessLauncher
from ..commands.executor import EXIT
from ..completion import create_completion_manager
from ..config import Config
from ..ui import UIManager
from ..ui.highlighter import create_console, create_error_console
from ..variables import VariableStore

logger = logging.getLogger(__name__)


class Shell:
    def __init__(
        self,
        console: Optional[Console] = None,
        error_console: Optional[Console] = None,
        input_stream: Optional[IO[str]] = None,
        interactive: Optional[bool] = None,
    ) -> None:
        self.console = console or create_console()
        self.error_console = error_console or create_error_console()
        self.input_stream = input_stream or sys.stdin

        if interactive is None:
            interactive = self._stream_is_terminal(self.input_stream)
        self.interactive = interactive

        self.ui = UIManager(self.console, self.error_console)
        self.variables = VariableStore()
        self.completion_manager = create_completion_manager(self.variables)
        self.launcher = ProcessLauncher()
        self.command_executor = CommandExecutor(
            console=self.console,
            ui=self.ui,
            variables=self.variables,
            launcher=self.launcher,
            completion_manager=self.completion_manager,
        )

        self._session: Optional[PromptSession] = None
        self._setup_keybindings()

    @staticmethod
    def _stream_is_terminal(stream: IO[str]) -> bool:
        try:
            return stream.isatty()
        except (AttributeError, ValueError):
            return False

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            self._session = PromptSession(history=self._create_history())
        return self._session

    def _create_history(self) -> History:
        if not Config.HISTORY_ENABLED:
            return InMemoryHistory()
        try:
            Config.HISTORY_FILE.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            return InMemoryHistory()
        return FileHistory(str(Config.HISTORY_FILE))

    def _setup_keybindings(self) -> None:
        self.bindings = KeyBindings()

        @self.bindings.add("escape", "h")
        def show_help(event):
            self.ui.show_help()

        @self.bindings.add("escape", "v")
        def show_variables(event):
            self.ui.display_variables(self.variables.items())

        @self.bindings.add("escape", "r")
        def refresh_completion(event):
            self.completion_manager.clear_cache()
            self.command_executor.refresh_configuration()

    def read_line(self) -> str:
        if self.interactive:
            return self.session.prompt(
                self.ui.get_prompt_text,
                key_bindings=self.bindings,
                style=self.ui.get_style(),
                completer=self.completion_manager.get_completer(),
                complete_while_typing=Config.COMPLETION_AUTO_POPUP,
                auto_suggest=AutoSuggestFromHistory(),
            )

        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n")

    def execute_shell_command(self, command: str) -> Optional[str]:
        return self.command_executor.execute(command)

    def run(self) -> int:
        if self.interactive:
            self.ui.show_welcome()

        while True:
            self.launcher.background.sweep()

            try:
                user_input = self.read_line()
            except KeyboardInterrupt:
                continue
            except EOFError:
                if self.interactive:
                    self.ui.display_goodbye()
                break

            if self.execute_shell_command(user_input) == EXIT:
                logger.debug("exit requested")
                break

        return 0
