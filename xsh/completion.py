#!/usr/bin/env python3
import os
from typing import Dict, List, Optional, Set

from prompt_toolkit.completion import Completer, Completion, FuzzyWordCompleter
from prompt_toolkit.document import Document

from .config import Config
from .parsing import DELIMITERS
from .variables import VariableStore


def scan_executables() -> Set[str]:
    commands: Set[str] = set()
    for directory in os.get_exec_path():
        if not directory:
            continue
        try:
            for entry in os.scandir(directory):
                try:
                    if entry.is_file() and os.access(entry.path, os.X_OK):
                        commands.add(entry.name)
                except OSError:
                    continue
        except OSError:
            continue
    return commands


class PathScanner:
    DIR_COMMANDS = {"cd"}

    def __init__(self) -> None:
        self._cache: Dict[str, Dict[str, List[str]]] = {}

    def _get_cache_key(self, path: str) -> str:
        try:
            mtime = os.path.getmtime(path) if os.path.exists(path) else 0
            return f"{path}:{mtime}"
        except OSError:
            return f"{path}:0"

    def scan_directory(self, path: str, include_hidden: bool = False) -> Dict[str, List[str]]:
        cache_key = f"{self._get_cache_key(path)}:{include_hidden}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        files = []
        directories = []

        try:
            for entry in os.scandir(path):
                if not include_hidden and entry.name.startswith("."):
                    continue
                try:
                    if entry.is_dir():
                        directories.append(entry.name)
                    else:
                        files.append(entry.name)
                except OSError:
                    continue
        except OSError:
            pass

        result = {"files": sorted(files), "directories": sorted(directories)}
        self._cache[cache_key] = result
        return result

    def get_candidates(self, command: str, path: str, include_hidden: bool = False) -> List[str]:
        scan_result = self.scan_directory(path, include_hidden)
        directories = [f"{name}/" for name in scan_result["directories"]]

        if command in self.DIR_COMMANDS:
            return directories
        return directories + scan_result["files"]

    def invalidate(self, path: Optional[str] = None) -> None:
        if path is None:
            self._cache.clear()
            return
        prefix = f"{path}:"
        for key in [key for key in self._cache if key.startswith(prefix)]:
            del self._cache[key]


class ShellCompleter(Completer):
    def __init__(self, variables: Optional[VariableStore] = None) -> None:
        self.variables = variables
        self.scanner = PathScanner()
        self._commands: Optional[List[str]] = None

    @property
    def commands(self) -> List[str]:
        if self._commands is None:
            self._commands = self._load_all_commands(list(Config.BUILTIN_COMMANDS))
        return self._commands

    def get_completions(self, document: Document, complete_event):
        text = document.text_before_cursor
        words = text.split()
        current = "" if not text or text[-1] in DELIMITERS else words[-1]

        if current.startswith("$"):
            yield from self._complete_variable(current)
            return

        if len(words) <= 1 and current:
            fuzzy_completer = FuzzyWordCompleter(
                words=self.commands, meta_dict=dict(Config.BUILTIN_COMMANDS)
            )
            yield from fuzzy_completer.get_completions(
                Document(current, len(current)), complete_event
            )
            return

        if not words:
            return

        yield from self._complete_path(words[0], current)

    def _complete_variable(self, current: str):
        if self.variables is None:
            return
        prefix = current[1:]
        for name, value in self.variables.items():
            if name.startswith(prefix):
                yield Completion(
                    f"${name}",
                    start_position=-len(current),
                    display_meta=value,
                )

    def _complete_path(self, command: str, current: str):
        dir_part, file_part = os.path.split(current)
        try:
            target = os.path.abspath(os.path.expanduser(dir_part or "."))
            if not os.path.isdir(target):
                return
        except OSError:
            return

        include_hidden = file_part.startswith(".")
        for candidate in self.scanner.get_candidates(command, target, include_hidden):
            if candidate.startswith(file_part):
                yield Completion(
                    candidate,
                    start_position=-len(file_part),
                    display=candidate,
                )

    def _load_all_commands(self, base_commands: List[str]) -> List[str]:
        return sorted(set(base_commands) | scan_executables())


class CompletionManager:
    def __init__(self, variables: Optional[VariableStore] = None) -> None:
        self.completer = ShellCompleter(variables)

    def get_completer(self) -> ShellCompleter:
        return self.completer

    def update_cache(self, path: Optional[str] = None) -> None:
        if path is None:
            try:
                path = os.getcwd()
            except OSError:
                path = None
        self.completer.scanner.invalidate(path)

    def clear_cache(self) -> None:
        self.completer.scanner.invalidate()
        self.completer._commands = None


def create_completion_manager(variables: Optional[VariableStore] = None) -> CompletionManager:
    return CompletionManager(variables)
