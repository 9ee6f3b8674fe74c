"""Tests for configuration loading."""

import json
import logging

from xsh.config import Config


class TestConfig:
    """Verify JSON and environment overrides."""

    def test_defaults(self) -> None:
        """The built-in defaults match the classic limits."""
        assert Config.MAX_ARGS == 64
        assert Config.MAX_INPUT_SIZE == 1024
        assert set(Config.BUILTIN_COMMANDS) == {"quit", "exit", "cd", "pwd", "set", "unset"}

    def test_ensure_directories_writes_default(self, tmp_path, restore_config) -> None:
        """A default config.json is created on first start."""
        restore_config.CONFIG_DIR = tmp_path / "conf"
        restore_config.CONFIG_JSON_FILE = tmp_path / "conf" / "config.json"
        Config.ensure_directories()
        data = json.loads(Config.CONFIG_JSON_FILE.read_text(encoding="utf-8"))
        assert data["shell"]["max_args"] == Config.MAX_ARGS
        assert data["ui"]["prompt_symbol"] == Config.PROMPT_SYMBOL

    def test_json_overrides(self, tmp_path, restore_config) -> None:
        """Values from config.json replace the defaults."""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps(
                {
                    "shell": {"max_variables": 3, "max_args": 8},
                    "ui": {"prompt_symbol": "$ ", "panel_styles": {"error": {"border_style": "red"}}},
                }
            ),
            encoding="utf-8",
        )
        restore_config.CONFIG_JSON_FILE = config_file
        assert Config._load_external_config() is True
        assert Config.MAX_VARIABLES == 3
        assert Config.MAX_ARGS == 8
        assert Config.PROMPT_SYMBOL == "$ "
        assert Config.PANEL_STYLES["error"]["border_style"] == "red"
        assert "info" in Config.PANEL_STYLES

    def test_broken_json_is_ignored(self, tmp_path, restore_config) -> None:
        """A malformed file leaves the defaults in place."""
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json", encoding="utf-8")
        restore_config.CONFIG_JSON_FILE = config_file
        before = Config.MAX_ARGS
        assert Config._load_external_config() is False
        assert Config.MAX_ARGS == before

    def test_missing_file(self, tmp_path, restore_config) -> None:
        """No file means nothing to load."""
        restore_config.CONFIG_JSON_FILE = tmp_path / "absent.json"
        assert Config._load_external_config() is False

    def test_reload(self, tmp_path, restore_config) -> None:
        """Reload creates the directory and reads the file back."""
        restore_config.CONFIG_DIR = tmp_path / "fresh"
        restore_config.CONFIG_JSON_FILE = tmp_path / "fresh" / "config.json"
        assert Config.reload() is True
        assert Config.CONFIG_JSON_FILE.exists()

    def test_log_level_from_environment(self, monkeypatch) -> None:
        """``XSH_LOG_LEVEL`` selects the log level."""
        monkeypatch.setenv("XSH_LOG_LEVEL", "debug")
        assert Config.get_log_level() == logging.DEBUG

    def test_unknown_log_level(self, monkeypatch) -> None:
        """Unknown names fall back to INFO."""
        monkeypatch.setenv("XSH_LOG_LEVEL", "chatty")
        assert Config.get_log_level() == logging.INFO

    def test_highlighter_toggle(self, monkeypatch) -> None:
        """The highlighter can be switched via the environment."""
        monkeypatch.setenv("XSH_HIGHLIGHTER", "off")
        assert Config.is_highlighter_enabled() is False
        monkeypatch.setenv("XSH_HIGHLIGHTER", "yes")
        assert Config.is_highlighter_enabled() is True

    def test_invalid_limits_keep_defaults(self, tmp_path, restore_config) -> None:
        """Limits that are not non-negative integers are ignored."""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps(
                {
                    "shell": {
                        "max_input_size": None,
                        "max_args": "64",
                        "max_variables": -1,
                        "max_substitutions": True,
                    }
                }
            ),
            encoding="utf-8",
        )
        restore_config.CONFIG_JSON_FILE = config_file
        names = ("MAX_INPUT_SIZE", "MAX_ARGS", "MAX_VARIABLES", "MAX_SUBSTITUTIONS")
        defaults = [getattr(Config, name) for name in names]
        assert Config._load_external_config() is True
        assert [getattr(Config, name) for name in names] == defaults

    def test_zero_variable_limit_is_accepted(self, tmp_path, restore_config) -> None:
        """Zero is a valid cap for variables and expansions."""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps({"shell": {"max_variables": 0, "max_substitutions": 0}}),
            encoding="utf-8",
        )
        restore_config.CONFIG_JSON_FILE = config_file
        Config._load_external_config()
        assert Config.MAX_VARIABLES == 0
        assert Config.MAX_SUBSTITUTIONS == 0

    def test_invalid_limit_does_not_break_commands(
        self, tmp_path, restore_config, executor
    ) -> None:
        """A bad value in config.json leaves substitution working."""
        config_file = tmp_path / "config.json"
        config_file.write_text(
            json.dumps({"shell": {"max_substitutions": None}}), encoding="utf-8"
        )
        restore_config.CONFIG_JSON_FILE = config_file
        Config._load_external_config()
        executor.execute("set Y 2")
        executor.execute("set X $Y")
        assert executor.variables.get("X") == "2"
