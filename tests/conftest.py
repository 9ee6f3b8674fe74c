import os
import tempfile

os.environ.setdefault("XSH_CONFIG_DIR", tempfile.mkdtemp(prefix="xsh-test-"))

from io import StringIO

import pytest
from rich.console import Console

from xsh.commands import CommandExecutor, ProcessLauncher
from xsh.config import Config
from xsh.ui import UIManager
from xsh.variables import VariableStore


def _console(buffer: StringIO) -> Console:
    return Console(file=buffer, width=200, color_system=None, force_terminal=False)


class Streams:
    """Captured standard and diagnostic output of one executor."""

    def __init__(self) -> None:
        self.out_buffer = StringIO()
        self.err_buffer = StringIO()
        self.console = _console(self.out_buffer)
        self.error_console = _console(self.err_buffer)

    @property
    def out(self) -> str:
        return self.out_buffer.getvalue()

    @property
    def err(self) -> str:
        return self.err_buffer.getvalue()


@pytest.fixture
def streams() -> Streams:
    return Streams()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test inside a fresh temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path.resolve()


@pytest.fixture
def executor(streams, workdir):
    launcher = ProcessLauncher()
    executor = CommandExecutor(
        console=streams.console,
        ui=UIManager(streams.console, streams.error_console),
        variables=VariableStore(capacity=100),
        launcher=launcher,
    )
    yield executor
    for process in launcher.background._children:
        if process.poll() is None:
            process.kill()
            process.wait()


@pytest.fixture
def restore_config():
    """Snapshot the Config class attributes and put them back afterwards."""
    saved = {
        name: value
        for name, value in vars(Config).items()
        if name.isupper()
    }
    yield Config
    for name, value in saved.items():
        setattr(Config, name, value)
