#!/usr/bin/env python3


class ShellError(Exception):
    """Base class for failures that abort one command but not the shell."""


class UsageError(ShellError):
    pass


class RedirectionError(ShellError):
    pass


class LaunchError(ShellError):
    def __init__(self, program: str, reason: str) -> None:
        super().__init__(f"{program}: {reason}")
        self.program = program
        self.reason = reason


class CapacityError(ShellError):
    pass


class SubstitutionError(ShellError):
    pass
