#!/usr/bin/env python3
import logging
import re
from typing import Iterable, Iterator, List, Optional

from .config import Config
from .errors import SubstitutionError
from .variables import VariableStore

logger = logging.getLogger(__name__)

DELIMITERS = " \t\r\n"

_TOKEN_PATTERN = re.compile(r"[^ \t\r\n]+")
_NAME_END_PATTERN = re.compile(r"[ \t\r\n]")


def tokenize(line: str, limit: Optional[int] = None) -> Iterator[str]:
    """Yield the whitespace-delimited words of ``line``.

    At most ``limit`` words are produced (``Config.MAX_ARGS - 1`` by
    default, leaving room for the argument vector terminator); the rest
    of the line is dropped.
    """
    if limit is None:
        limit = Config.MAX_ARGS - 1

    count = 0
    for match in _TOKEN_PATTERN.finditer(line):
        if count >= limit:
            logger.warning("too many arguments, dropping input after %d tokens", limit)
            return
        count += 1
        yield match.group()


def substitute(token: str, store: VariableStore, limit: Optional[int] = None) -> str:
    """Expand every ``$name`` reference in ``token``.

    The name runs from the character after ``$`` to the next delimiter or
    the end of the token. Unknown names expand to nothing. After each
    replacement the scan restarts at the beginning of the rewritten token,
    so a stored value that itself contains ``$`` is expanded again.
    """
    if limit is None:
        limit = Config.MAX_SUBSTITUTIONS

    expansions = 0
    position = token.find("$")
    while position != -1:
        if expansions >= limit:
            raise SubstitutionError(
                f"{token}: too many nested variable expansions (limit {limit})"
            )

        end_match = _NAME_END_PATTERN.search(token, position + 1)
        end = end_match.start() if end_match else len(token)
        name = token[position + 1 : end]

        value = store.get(name)
        if value is None:
            value = ""
        token = token[:position] + value + token[end:]
        expansions += 1

        position = token.find("$")

    return token


def substitute_all(tokens: Iterable[str], store: VariableStore) -> List[str]:
    return [substitute(token, store) for token in tokens]
