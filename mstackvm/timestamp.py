"""Time words: the current moment and timestamps built from integers."""

from __future__ import annotations

import time
from dataclasses import dataclass

from mstackvm.machine import Machine, VMError, to_int


@dataclass(frozen=True, order=True)
class Timestamp:
    """A moment in time, in nanoseconds since the Unix epoch."""

    stamp: int

    def __int__(self) -> int:
        return self.stamp

    def __str__(self) -> str:
        return str(self.stamp)


def now(vm: Machine) -> None:
    """Push the current time."""
    vm.push(Timestamp(time.time_ns()))


def make_timestamp(vm: Machine) -> None:
    """Replace the integer on top of the stack with a timestamp."""
    if vm.current_stack_len() < 1:
        raise VMError("Stack is too shallow for inline time.timestamp")
    value = vm.pull()
    if value is None:
        raise VMError("TIME.TIMESTAMP returns: NO DATA #1")
    try:
        stamp = to_int(value)
    except VMError as err:
        raise VMError(f"TIME.TIMESTAMP return error: {err}") from err
    if stamp < 0:
        raise VMError("TIME.TIMESTAMP return error: timestamp can not be negative")
    vm.push(Timestamp(stamp))


def register(vm: Machine) -> None:
    vm.register_inline("time.now", now)
    vm.register_inline("time.timestamp", make_timestamp)