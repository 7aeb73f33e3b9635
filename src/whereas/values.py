"""
Runtime values and the evaluation environment.

A value is one of:
    - Integer: a signed 64-bit integer
    - String: text
    - Error: a runtime failure, carried as a value so evaluation can
      short-circuit without raising

Every value renders itself for publication with inspect().
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from whereas.numerals import render_integer


class ValueType(Enum):
    INTEGER = "INTEGER"
    STRING = "STRING"
    ERROR = "ERROR"


class Value(ABC):
    """Base class for runtime values."""

    type: ValueType

    @abstractmethod
    def inspect(self) -> str:
        """Return the published rendering of this value."""


@dataclass(frozen=True)
class Integer(Value):
    value: int
    type = ValueType.INTEGER

    def inspect(self) -> str:
        return render_integer(self.value)


@dataclass(frozen=True)
class String(Value):
    value: str
    type = ValueType.STRING

    def inspect(self) -> str:
        return self.value


@dataclass(frozen=True)
class Error(Value):
    message: str
    type = ValueType.ERROR

    def inspect(self) -> str:
        return self.message


def is_error(value: Optional[Value]) -> bool:
    return value is not None and value.type == ValueType.ERROR


class Environment:
    """
    Name -> Value bindings for one program run.

    There are no nested scopes: a Resolution has a single flat namespace.
    """

    def __init__(self):
        self._store: Dict[str, Value] = {}

    def get(self, name: str) -> Optional[Value]:
        """Return the value bound to name, or None if it is unbound."""
        return self._store.get(name)

    def set(self, name: str, value: Value) -> None:
        self._store[name] = value

    def names(self) -> List[str]:
        return list(self._store)

    def __contains__(self, name: str) -> bool:
        return name in self._store

    def __len__(self) -> int:
        return len(self._store)
