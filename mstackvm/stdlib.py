"""Registration of the standard word library."""

from __future__ import annotations

from mstackvm import arith, floatmath, machine, printing, strings, timestamp, values
from mstackvm.machine import Machine

_MODULES = (printing, machine, arith, floatmath, strings, timestamp, values)


def init_stdlib(vm: Machine) -> None:
    """Register every standard word on the machine."""
    for module in _MODULES:
        module.register(vm)


def new_vm() -> Machine:
    """Create a machine with the standard library loaded."""
    vm = Machine()
    init_stdlib(vm)
    return vm