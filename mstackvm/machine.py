"""Multi-stack virtual machine core: named stacks, a workbench and a word registry."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable

MAIN_STACK = "main"


class VMError(Exception):
    """Raised when a word cannot complete its work."""


@dataclass(frozen=True)
class NoData:
    """Marker value meaning "no data"; it stops multi-operand words."""

    def __str__(self) -> str:
        return ""


@dataclass
class TextBuffer:
    """A growable piece of text that accepts any value appended to it."""

    text: str = ""

    def __len__(self) -> int:
        return len(self.text)

    def __add__(self, other: Any) -> TextBuffer:
        return TextBuffer(self.text + to_text(other))

    def __str__(self) -> str:
        return self.text


Word = Callable[["Machine"], Any]


class Machine:
    """A virtual machine holding named stacks, a workbench and inline words."""

    def __init__(self) -> None:
        self._stacks: dict[str, list[Any]] = {MAIN_STACK: []}
        self._names: list[str] = [MAIN_STACK]
        self._workbench: list[Any] = []
        self._inlines: dict[str, Word] = {}

    def __len__(self) -> int:
        """Number of stacks that exist."""
        return len(self._stacks)

    @property
    def _current(self) -> list[Any]:
        return self._stacks[self._names[-1]]

    def push(self, value: Any) -> None:
        self._current.append(value)

    def pull(self) -> Any:
        """Remove and return the top of the current stack, or None if it is empty."""
        current = self._current
        return current.pop() if current else None

    def peek(self) -> Any:
        current = self._current
        return current[-1] if current else None

    def push_to_workbench(self, value: Any) -> None:
        self._workbench.append(value)

    def pull_from_workbench(self) -> Any:
        return self._workbench.pop() if self._workbench else None

    def push_to_stack(self, name: str, value: Any) -> None:
        self._stacks.setdefault(name, []).append(value)

    def to_stack(self, name: str) -> None:
        """Make the named stack current, creating it when needed."""
        self._stacks.setdefault(name, [])
        self._names.append(name)

    def peek_stacks(self) -> str:
        return self._names[-1]

    def pop_stacks(self) -> str | None:
        """Return to the previously current stack; the main stack is never left."""
        if len(self._names) > 1:
            return self._names.pop()
        return None

    def clear_stacks(self) -> None:
        """Forget the history of current stacks and return to the main one."""
        self._names = [MAIN_STACK]

    def current_stack_len(self) -> int:
        return len(self._current)

    def workbench_len(self) -> int:
        return len(self._workbench)

    def register_inline(self, name: str, func: Word) -> None:
        self._inlines[name] = func

    def is_inline(self, name: str) -> bool:
        return name in self._inlines

    def call(self, name: str) -> None:
        try:
            func = self._inlines[name]
        except KeyError:
            raise VMError(f"Unknown inline word: {name}") from None
        func(self)


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(value)


def to_text(value: Any) -> str:
    """Convert a machine value to its textual form."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, complex):
        sign = "-" if value.imag < 0 else "+"
        return f"{_float_text(value.real)}{sign}{_float_text(abs(value.imag))}i"
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_text(item) for item in value) + "]"
    if isinstance(value, dict):
        items = ", ".join(f"{to_text(k)}: {to_text(v)}" for k, v in value.items())
        return "{" + items + "}"
    if value is None:
        raise VMError("Can not convert an empty value to string")
    return str(value)


def to_float(value: Any) -> float:
    """Convert a machine value to a float."""
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, (str, TextBuffer)):
        text = str(value).strip()
        try:
            return float(text)
        except ValueError:
            raise VMError(f"Can not convert {text!r} to float") from None
    raise VMError(f"Can not convert {type(value).__name__} to float")


def to_int(value: Any) -> int:
    """Convert a machine value to an integer, truncating floats."""
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise VMError(f"Can not convert {_float_text(value)} to int")
        return int(value)
    if isinstance(value, (str, TextBuffer)):
        text = str(value).strip()
        try:
            return int(text)
        except ValueError:
            return to_int(to_float(text))
    raise VMError(f"Can not convert {type(value).__name__} to int")


def word_clear_stacks(vm: Machine) -> None:
    vm.clear_stacks()


def word_drop_stacks(vm: Machine) -> None:
    vm.pop_stacks()


def register(vm: Machine) -> None:
    vm.register_inline("clear_stacks", word_clear_stacks)
    vm.register_inline("drop_stacks", word_drop_stacks)