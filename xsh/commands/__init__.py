#!/usr/bin/env python3
from .executor import CommandExecutor
from .launcher import FireAndForget, ParsedCommand, ProcessLauncher, parse_command

__all__ = [
    "CommandExecutor",
    "FireAndForget",
    "ParsedCommand",
    "ProcessLauncher",
    "parse_command",
]
