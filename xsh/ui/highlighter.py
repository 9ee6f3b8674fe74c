#!/usr/bin/env python3
import re
from typing import Iterable, List, Mapping, Tuple

from rich.console import Console
from rich.highlighter import Highlighter
from rich.text import Text

from ..config import Config

CompiledRule = Tuple[re.Pattern[str], str]


def compile_rules(
    rules: Iterable[Mapping[str, object]], styles: Mapping[str, str]
) -> List[CompiledRule]:
    compiled: List[CompiledRule] = []

    for rule in rules or []:
        pattern = rule.get("pattern")
        style = rule.get("style")
        if not pattern or not style:
            continue

        flags = re.IGNORECASE if rule.get("ignore_case") else 0
        try:
            regex = re.compile(str(pattern), flags)
        except re.error:
            continue

        compiled.append((regex, styles.get(str(style), str(style))))

    return compiled


class ConfigurableHighlighter(Highlighter):
    def __init__(self, rules: Iterable[Mapping[str, object]]) -> None:
        super().__init__()
        self._patterns = compile_rules(rules, Config.HIGHLIGHTER_STYLES)

    def highlight(self, text: Text) -> None:
        plain = text.plain
        for regex, style in self._patterns:
            for match in regex.finditer(plain):
                if match.end() > match.start():
                    text.stylize(style, *match.span())


def create_console(stderr: bool = False) -> Console:
    if not Config.is_highlighter_enabled() or not Config.HIGHLIGHTER_RULES:
        return Console(stderr=stderr)

    return Console(
        stderr=stderr,
        highlighter=ConfigurableHighlighter(Config.HIGHLIGHTER_RULES),
    )


def create_error_console() -> Console:
    return create_console(stderr=True)
