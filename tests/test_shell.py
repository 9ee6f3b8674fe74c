"""Tests for the read loop driving the dispatcher."""

from io import StringIO

from xsh.core import Shell


def _shell(streams, script: str) -> Shell:
    return Shell(
        console=streams.console,
        error_console=streams.error_console,
        input_stream=StringIO(script),
        interactive=False,
    )


class TestShellLoop:
    """Verify line-by-line processing of non-interactive input."""

    def test_end_of_input_exits_cleanly(self, streams, workdir) -> None:
        """Running out of lines ends the session with status 0."""
        shell = _shell(streams, "set A 1\n")
        assert shell.run() == 0
        assert shell.variables.get("A") == "1"

    def test_exit_stops_reading(self, streams, workdir) -> None:
        """Lines after ``exit`` are never executed."""
        shell = _shell(streams, "set X 1\nset Y $X\nexit\nset Z 2\n")
        assert shell.run() == 0
        assert shell.variables.get("Y") == "1"
        assert "Z" not in shell.variables

    def test_errors_do_not_stop_the_loop(self, streams, workdir) -> None:
        """A failing line is reported and the next one still runs."""
        shell = _shell(streams, "set\ncd nowhere-at-all\n\n   \nset OK yes\n")
        assert shell.run() == 0
        assert "set: missing argument" in streams.err
        assert "cd:" in streams.err
        assert shell.variables.get("OK") == "yes"

    def test_last_line_without_newline(self, streams, workdir) -> None:
        """A final unterminated line is still executed."""
        shell = _shell(streams, "set A 1\nset B 2")
        shell.run()
        assert shell.variables.get("B") == "2"

    def test_no_banner_without_terminal(self, streams, workdir) -> None:
        """Piped input gets no welcome panel or goodbye."""
        _shell(streams, "").run()
        assert streams.out == ""

    def test_pwd_output(self, streams, workdir) -> None:
        """Built-in output goes to the standard console."""
        _shell(streams, "pwd\n").run()
        assert streams.out.strip() == str(workdir)

    def test_detects_non_terminal_input(self, streams) -> None:
        """A StringIO is never treated as an interactive terminal."""
        shell = Shell(
            console=streams.console,
            error_console=streams.error_console,
            input_stream=StringIO(""),
        )
        assert shell.interactive is False

    def test_shares_store_with_completion(self, streams) -> None:
        """The completer sees the same variables as the dispatcher."""
        shell = _shell(streams, "")
        assert shell.completion_manager.get_completer().variables is shell.variables
        assert shell.command_executor.variables is shell.variables
