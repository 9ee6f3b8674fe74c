#!/usr/bin/env python3
import logging
import subprocess
from contextlib import ExitStack
from dataclasses import dataclass, field
from typing import IO, List, Optional, Sequence

from ..errors import LaunchError, RedirectionError, UsageError

logger = logging.getLogger(__name__)

BACKGROUND_MARKER = "&"
INPUT_OPERATOR = "<"
OUTPUT_OPERATOR = ">"


@dataclass
class ParsedCommand:
    argv: List[str] = field(default_factory=list)
    stdin_path: Optional[str] = None
    stdout_path: Optional[str] = None
    background: bool = False

    @property
    def program(self) -> str:
        return self.argv[0] if self.argv else ""


def parse_command(tokens: Sequence[str]) -> ParsedCommand:
    parsed = ParsedCommand()

    index = 0
    while index < len(tokens):
        token = tokens[index]

        if token == BACKGROUND_MARKER:
            parsed.background = True
        elif token in (INPUT_OPERATOR, OUTPUT_OPERATOR):
            if index + 1 >= len(tokens):
                raise RedirectionError(f"syntax error: missing file operand after '{token}'")
            target = tokens[index + 1]
            if token == INPUT_OPERATOR:
                parsed.stdin_path = target
            else:
                parsed.stdout_path = target
            index += 1
        else:
            parsed.argv.append(token)

        index += 1

    if not parsed.argv:
        raise UsageError("missing command")

    return parsed


def _open_redirection(path: str, mode: str) -> IO[bytes]:
    try:
        return open(path, mode)
    except OSError as error:
        reason = error.strerror or str(error)
        raise RedirectionError(f"{path}: {reason}") from error


class FireAndForget:
    """Background launches: started, announced, never waited on.

    There is no job table. ``sweep`` only polls children that already
    exited so the kernel can release them; nothing is reported back.
    """

    def __init__(self) -> None:
        self._children: List[subprocess.Popen] = []

    def adopt(self, process: subprocess.Popen) -> None:
        self._children.append(process)

    def sweep(self) -> int:
        running = []
        finished = 0
        for process in self._children:
            if process.poll() is None:
                running.append(process)
            else:
                finished += 1
                logger.debug(
                    "background pid %s exited with %s", process.pid, process.returncode
                )
        self._children = running
        return finished

    def __len__(self) -> int:
        return len(self._children)


class ProcessLauncher:
    def __init__(self, background: Optional[FireAndForget] = None) -> None:
        self.background = background or FireAndForget()

    def launch(self, parsed: ParsedCommand) -> subprocess.Popen:
        with ExitStack() as streams:
            stdin = None
            stdout = None
            if parsed.stdin_path is not None:
                stdin = streams.enter_context(_open_redirection(parsed.stdin_path, "rb"))
            if parsed.stdout_path is not None:
                stdout = streams.enter_context(_open_redirection(parsed.stdout_path, "wb"))

            try:
                process = subprocess.Popen(
                    parsed.argv,
                    stdin=stdin,
                    stdout=stdout,
                )
            except FileNotFoundError as error:
                raise LaunchError(parsed.program, "command not found") from error
            except PermissionError as error:
                raise LaunchError(parsed.program, "permission denied") from error
            except OSError as error:
                raise LaunchError(parsed.program, error.strerror or str(error)) from error

        logger.info(
            "launched %s (pid %s%s)",
            parsed.program,
            process.pid,
            ", background" if parsed.background else "",
        )

        if parsed.background:
            self.background.adopt(process)
            return process

        self.wait(process)
        return process

    def wait(self, process: subprocess.Popen) -> None:
        try:
            process.wait()
        except KeyboardInterrupt:
            process.wait()
            raise
        finally:
            logger.debug("pid %s exited with %s", process.pid, process.returncode)
