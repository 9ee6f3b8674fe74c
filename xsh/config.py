#!/usr/bin/env python3
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class Config:
    # Input limits
    MAX_INPUT_SIZE = 1024
    MAX_ARGS = 64

    # Variable store; 0 disables the cap
    MAX_VARIABLES = 100

    # Expansions allowed per token before substitution gives up
    MAX_SUBSTITUTIONS = 100

    BUILTIN_COMMANDS = {
        "quit": "Exit the shell",
        "exit": "Exit the shell",
        "cd": "Change the working directory",
        "pwd": "Print the working directory",
        "set": "Set a shell variable",
        "unset": "Remove a shell variable",
    }

    PROMPT_SYMBOL = "xsh# "
    SHOW_PROMPT_PATH = True
    WELCOME_MESSAGE = "Welcome to xsh"
    SHOW_STARTUP_BANNER = True
    HISTORY_ENABLED = True
    COMPLETION_AUTO_POPUP = False
    SUGGEST_SIMILAR_COMMANDS = True

    LOG_LEVEL = "INFO"

    CONFIG_DIR = Path(os.getenv("XSH_CONFIG_DIR") or Path.home() / ".xsh").expanduser()
    CONFIG_JSON_FILE = CONFIG_DIR / "config.json"
    LOG_FILE = CONFIG_DIR / "shell.log"
    HISTORY_FILE = CONFIG_DIR / "history"

    HELP_KEYBINDS = [
        ("Alt+H", "Show this help"),
        ("Alt+V", "Show shell variables"),
        ("Alt+R", "Refresh completion cache"),
        ("Ctrl+D", "Exit the shell"),
    ]

    PROMPT_STYLES = {
        "path": "#b5cef8 bold",
        "prompt_symbol": "#f2d5cf bold",
        "separator": "#737994",
    }

    COMPLETION_STYLES = {
        "completion-menu.completion": "bg:#0a0a0a fg:#aaaaaa bold",
        "completion-menu.completion.current": "bg:#888888 fg:#0a0a0a",
        "completion-menu.meta.completion": "bg:#0a0a0a fg:#aaaaaa",
        "completion-menu.meta.completion.current": "bg:#888888",
    }

    PANEL_STYLES = {
        "default": {
            "border_style": "#888888",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "info": {
            "border_style": "#8caaee",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "success": {
            "border_style": "#a6d189",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "error": {
            "border_style": "#e78284",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
        "warning": {
            "border_style": "#e5c890",
            "padding": (0, 1),
            "title_align": "left",
            "expand": False,
        },
    }

    HIGHLIGHTER_ENABLED = True
    HIGHLIGHTER_RULES = [
        {
            "name": "variable",
            "pattern": r"(?P<variable>\$[^\s$]+)",
            "style": "highlight.variable",
        },
        {
            "name": "number",
            "pattern": r"(?P<number>\b\d+(?:\.\d+)?\b)",
            "style": "highlight.number",
        },
    ]
    HIGHLIGHTER_STYLES = {
        "highlight.variable": "bold magenta",
        "highlight.number": "bold cyan",
    }

    @classmethod
    def ensure_directories(cls) -> None:
        cls.CONFIG_DIR.mkdir(parents=True, exist_ok=True)

        if not cls.CONFIG_JSON_FILE.exists():
            cls._write_default_json_config()

    @classmethod
    def get_prompt_symbol(cls) -> str:
        env_value = os.getenv("XSH_PROMPT")
        if env_value:
            return env_value
        return cls.PROMPT_SYMBOL

    @classmethod
    def is_highlighter_enabled(cls) -> bool:
        env_value = os.getenv("XSH_HIGHLIGHTER")
        if env_value is not None:
            normalized = env_value.strip().lower()
            if normalized in {"0", "false", "no", "off"}:
                return False
            if normalized in {"1", "true", "yes", "on"}:
                return True
        return cls.HIGHLIGHTER_ENABLED

    @classmethod
    def get_log_level(cls) -> int:
        name = os.getenv("XSH_LOG_LEVEL") or cls.LOG_LEVEL
        level = logging.getLevelName(str(name).strip().upper())
        if isinstance(level, int):
            return level
        return logging.INFO

    # ------------------------------------------------------------------
    # External configuration support (config.json)
    # ------------------------------------------------------------------

    @classmethod
    def _load_external_config(cls) -> bool:
        if not cls.CONFIG_JSON_FILE.exists():
            return False

        try:
            with cls.CONFIG_JSON_FILE.open("r", encoding="utf-8") as f:
                config_data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return False

        def get_nested(data, *keys, default=None):
            current = data
            for key in keys:
                if isinstance(current, dict) and key in current:
                    current = current[key]
                else:
                    return default
            return current

        cls.WELCOME_MESSAGE = get_nested(
            config_data, "general", "welcome_message", default=cls.WELCOME_MESSAGE
        )
        cls.SHOW_STARTUP_BANNER = get_nested(
            config_data,
            "general",
            "show_startup_banner",
            default=cls.SHOW_STARTUP_BANNER,
        )
        cls.LOG_LEVEL = get_nested(
            config_data, "general", "log_level", default=cls.LOG_LEVEL
        )

        def get_limit(key, default, minimum=0):
            value = get_nested(config_data, "shell", key, default=default)
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                logger.warning("ignoring invalid shell.%s: %r", key, value)
                return default
            return value

        cls.MAX_INPUT_SIZE = get_limit("max_input_size", cls.MAX_INPUT_SIZE, minimum=2)
        cls.MAX_ARGS = get_limit("max_args", cls.MAX_ARGS, minimum=2)
        cls.MAX_VARIABLES = get_limit("max_variables", cls.MAX_VARIABLES)
        cls.MAX_SUBSTITUTIONS = get_limit("max_substitutions", cls.MAX_SUBSTITUTIONS)
        cls.HISTORY_ENABLED = get_nested(
            config_data, "shell", "history_enabled", default=cls.HISTORY_ENABLED
        )
        cls.SUGGEST_SIMILAR_COMMANDS = get_nested(
            config_data,
            "shell",
            "suggest_similar_commands",
            default=cls.SUGGEST_SIMILAR_COMMANDS,
        )

        cls.PROMPT_SYMBOL = get_nested(
            config_data, "ui", "prompt_symbol", default=cls.PROMPT_SYMBOL
        )
        cls.SHOW_PROMPT_PATH = get_nested(
            config_data, "ui", "show_prompt_path", default=cls.SHOW_PROMPT_PATH
        )
        cls.COMPLETION_AUTO_POPUP = get_nested(
            config_data,
            "ui",
            "completion_auto_popup",
            default=cls.COMPLETION_AUTO_POPUP,
        )
        cls.PROMPT_STYLES = {
            **cls.PROMPT_STYLES,
            **get_nested(config_data, "ui", "prompt_styles", default={}),
        }
        cls.COMPLETION_STYLES = {
            **cls.COMPLETION_STYLES,
            **get_nested(config_data, "ui", "completion_styles", default={}),
        }
        cls.PANEL_STYLES = {
            **cls.PANEL_STYLES,
            **get_nested(config_data, "ui", "panel_styles", default={}),
        }
        cls.HIGHLIGHTER_ENABLED = get_nested(
            config_data, "ui", "highlighter_enabled", default=cls.HIGHLIGHTER_ENABLED
        )
        cls.HIGHLIGHTER_RULES = get_nested(
            config_data, "ui", "highlighter_rules", default=cls.HIGHLIGHTER_RULES
        )
        cls.HIGHLIGHTER_STYLES = {
            **cls.HIGHLIGHTER_STYLES,
            **get_nested(config_data, "ui", "highlighter_styles", default={}),
        }

        return True

    @classmethod
    def _write_default_json_config(cls) -> None:
        config_data = {
            "general": {
                "welcome_message": cls.WELCOME_MESSAGE,
                "show_startup_banner": cls.SHOW_STARTUP_BANNER,
                "log_level": cls.LOG_LEVEL,
            },
            "shell": {
                "max_input_size": cls.MAX_INPUT_SIZE,
                "max_args": cls.MAX_ARGS,
                "max_variables": cls.MAX_VARIABLES,
                "max_substitutions": cls.MAX_SUBSTITUTIONS,
                "history_enabled": cls.HISTORY_ENABLED,
                "suggest_similar_commands": cls.SUGGEST_SIMILAR_COMMANDS,
            },
            "ui": {
                "prompt_symbol": cls.PROMPT_SYMBOL,
                "show_prompt_path": cls.SHOW_PROMPT_PATH,
                "completion_auto_popup": cls.COMPLETION_AUTO_POPUP,
                "prompt_styles": cls.PROMPT_STYLES,
                "completion_styles": cls.COMPLETION_STYLES,
                "panel_styles": cls.PANEL_STYLES,
                "highlighter_enabled": cls.HIGHLIGHTER_ENABLED,
                "highlighter_rules": cls.HIGHLIGHTER_RULES,
                "highlighter_styles": cls.HIGHLIGHTER_STYLES,
            },
        }

        try:
            with cls.CONFIG_JSON_FILE.open("w", encoding="utf-8") as f:
                json.dump(config_data, f, indent=2, ensure_ascii=False)
        except OSError:
            pass

    @classmethod
    def reload(cls) -> bool:
        try:
            cls.ensure_directories()
            return cls._load_external_config()
        except OSError:
            return False


Config._load_external_config()
