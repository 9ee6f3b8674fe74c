#!/usr/bin/env python3
import logging
from typing import Dict, Iterator, Optional, Tuple

from .config import Config
from .errors import CapacityError

logger = logging.getLogger(__name__)


class VariableStore:
    """Session variables used by ``$name`` substitution.

    The store is private to the interpreter: it is never copied into
    ``os.environ`` and children only ever see expanded argument text.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        self.capacity = Config.MAX_VARIABLES if capacity is None else capacity
        self._values: Dict[str, str] = {}

    def get(self, name: str) -> Optional[str]:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        if name not in self._values and self.is_full():
            raise CapacityError(
                f"set: too many variables (limit {self.capacity})"
            )
        self._values[name] = value
        logger.debug("set %s=%r", name, value)

    def unset(self, name: str) -> bool:
        if name not in self._values:
            return False
        del self._values[name]
        logger.debug("unset %s", name)
        return True

    def is_full(self) -> bool:
        return bool(self.capacity) and len(self._values) >= self.capacity

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._values.items()))

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))
