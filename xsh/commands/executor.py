#!/usr/bin/env python3
import difflib
import logging
import os
from typing import Callable, Dict, List, Optional

from rich.console import Console

from ..completion import scan_executables
from ..config import Config
from ..errors import LaunchError, ShellError, UsageError
from ..parsing import substitute_all, tokenize
from ..ui import UIManager
from ..variables import VariableStore
from .launcher import ProcessLauncher, parse_command

logger = logging.getLogger(__name__)

EXIT = "exit"


class CommandExecutor:
    def __init__(
        self,
        console: Console,
        ui: Optional[UIManager] = None,
        variables: Optional[VariableStore] = None,
        launcher: Optional[ProcessLauncher] = None,
        completion_manager=None,
    ) -> None:
        self.console = console
        self.ui = ui or UIManager(console)
        self.variables = variables if variables is not None else VariableStore()
        self.launcher = launcher or ProcessLauncher()
        self.completion_manager = completion_manager
        self._available_commands_cache: Optional[set[str]] = None

        self.builtins: Dict[str, Callable[[List[str]], Optional[str]]] = {
            "quit": self._handle_exit_command,
            "exit": self._handle_exit_command,
            "cd": self._handle_cd_command,
            "pwd": self._handle_pwd_command,
            "set": self._handle_set_command,
            "unset": self._handle_unset_command,
        }

    def set_completion_manager(self, completion_manager) -> None:
        self.completion_manager = completion_manager

    def refresh_configuration(self) -> None:
        self._available_commands_cache = None

    def execute(self, command: str) -> Optional[str]:
        if len(command) >= Config.MAX_INPUT_SIZE:
            command = command[: Config.MAX_INPUT_SIZE - 1]

        try:
            tokens = substitute_all(tokenize(command), self.variables)
            if not tokens:
                return None

            handler = self.builtins.get(tokens[0])
            if handler is not None:
                logger.debug("builtin %s %s", tokens[0], tokens[1:])
                return handler(tokens)

            self._handle_external_command(tokens)
        except KeyboardInterrupt:
            self.ui.display_interrupt()
        except LaunchError as error:
            logger.warning("%s", error)
            suggestions = self._suggest_command_alternatives(error.program)
            self.ui.display_command_not_found(
                command.strip(), error.program, str(error), suggestions
            )
        except (ShellError, OSError) as error:
            logger.warning("%s", error)
            self.ui.display_error(command.strip(), self._format_error(error))

        return None

    def _handle_exit_command(self, args: List[str]) -> str:
        return EXIT

    def _handle_cd_command(self, args: List[str]) -> None:
        if len(args) < 2:
            raise UsageError("cd: missing argument")

        try:
            os.chdir(args[1])
        except OSError as error:
            raise UsageError(self._describe_os_error("cd", error, args[1])) from error

        if self.completion_manager is not None:
            self.completion_manager.update_cache()

    def _handle_pwd_command(self, args: List[str]) -> None:
        try:
            cwd = os.getcwd()
        except OSError as error:
            raise UsageError(self._describe_os_error("pwd", error)) from error
        self.ui.display_output(cwd)

    def _handle_set_command(self, args: List[str]) -> None:
        if len(args) < 3:
            raise UsageError("set: missing argument")
        self.variables.set(args[1], args[2])

    def _handle_unset_command(self, args: List[str]) -> None:
        if len(args) < 2:
            raise UsageError("unset: missing argument")
        self.variables.unset(args[1])

    def _handle_external_command(self, tokens: List[str]) -> None:
        parsed = parse_command(tokens)
        process = self.launcher.launch(parsed)

        if parsed.background:
            self.ui.display_background_start(process.pid, " ".join(parsed.argv))

        if self.completion_manager is not None and parsed.stdout_path:
            self.completion_manager.update_cache()

    @staticmethod
    def _describe_os_error(
        name: str, error: OSError, target: Optional[str] = None
    ) -> str:
        reason = error.strerror or str(error)
        if target is None:
            return f"{name}: {reason}"
        return f"{name}: {reason}: {target}"

    @staticmethod
    def _format_error(error: Exception) -> str:
        if isinstance(error, OSError) and error.strerror:
            if error.filename:
                return f"{error.strerror}: {error.filename}"
            return error.strerror
        return str(error)

    def _get_available_commands(self) -> set[str]:
        if self._available_commands_cache is not None:
            return self._available_commands_cache

        commands: set[str] = set(self.builtins)
        if self.completion_manager is not None:
            commands.update(self.completion_manager.get_completer().commands)
        else:
            commands.update(scan_executables())

        self._available_commands_cache = commands
        return commands

    def _suggest_command_alternatives(self, base_command: str) -> List[str]:
        if not base_command or not Config.SUGGEST_SIMILAR_COMMANDS:
            return []

        candidates = self._get_available_commands()
        return difflib.get_close_matches(
            base_command, sorted(candidates), n=3, cutoff=0.6
        )
