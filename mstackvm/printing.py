"""Words that print values to standard output."""

from __future__ import annotations

import sys

from mstackvm.machine import Machine, VMError, to_text


def _emit(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _print_base(vm: Machine, newline: bool, from_workbench: bool, prefix: str) -> None:
    if vm.current_stack_len() < 1:
        raise VMError(f"Stack is too shallow for inline {prefix}")
    value = vm.pull_from_workbench() if from_workbench else vm.pull()
    if value is None:
        raise VMError(f"{prefix} returns: NO DATA")
    try:
        text = to_text(value)
    except VMError as err:
        raise VMError(f"{prefix} returns: {err}") from err
    _emit(text + "\n" if newline else text)


def print_value(vm: Machine) -> None:
    _print_base(vm, False, False, "PRINT")


def print_workbench(vm: Machine) -> None:
    _print_base(vm, False, True, "PRINT.")


def println_value(vm: Machine) -> None:
    _print_base(vm, True, False, "PRINTLN")


def println_workbench(vm: Machine) -> None:
    _print_base(vm, True, True, "PRINTLN.")


def space(vm: Machine) -> Machine:
    """Write a single space to standard output."""
    _emit(" ")
    return vm


def newline(vm: Machine) -> Machine:
    """Write a line break to standard output."""
    _emit("\n")
    return vm


def register(vm: Machine) -> None:
    vm.register_inline("print", print_value)
    vm.register_inline("print.", print_workbench)
    vm.register_inline("println", println_value)
    vm.register_inline("println.", println_workbench)
    vm.register_inline("space", space)
    vm.register_inline("nl", newline)