"""Arithmetic words operating on the stack and the workbench."""

from __future__ import annotations

import math
from enum import Enum
from functools import partial
from numbers import Number
from typing import Any

from mstackvm.machine import Machine, NoData, VMError


class MathOp(Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"


class Source(Enum):
    STACK = "stack"
    WORKBENCH = "workbench"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, complex)) and not isinstance(value, bool)


def _divide(a: Number, b: Number) -> Number:
    if isinstance(a, int) and isinstance(b, int):
        if b == 0:
            raise VMError("division by zero")
        quotient = abs(a) // abs(b)
        return quotient if (a < 0) == (b < 0) else -quotient
    if isinstance(a, complex) or isinstance(b, complex):
        if b == 0:
            raise VMError("division by zero")
        return a / b
    a, b = float(a), float(b)
    if b == 0:
        if math.isnan(a) or a == 0:
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def numeric_op(op: MathOp, value1: Any, value2: Any) -> Any:
    """Apply op to value1 (the top operand) and value2 (the one below it)."""
    if isinstance(value1, list) or isinstance(value2, list):
        if op is not MathOp.ADD:
            raise VMError(f"operation {op.name} is not supported for lists")
        left = value1 if isinstance(value1, list) else [value1]
        right = value2 if isinstance(value2, list) else [value2]
        return left + right
    if isinstance(value1, str) and isinstance(value2, str):
        if op is not MathOp.ADD:
            raise VMError(f"operation {op.name} is not supported for strings")
        return value1 + value2
    if not (_is_number(value1) and _is_number(value2)):
        raise VMError(
            f"operation {op.name} is not supported for "
            f"{type(value1).__name__} and {type(value2).__name__}"
        )
    if op is MathOp.ADD:
        return value1 + value2
    if op is MathOp.SUB:
        return value1 - value2
    if op is MathOp.MUL:
        return value1 * value2
    return _divide(value1, value2)


def _check_depth(vm: Machine, depth: int, source: Source, prefix: str) -> None:
    if vm.current_stack_len() < depth:
        raise VMError(f"Stack is too shallow for inline {prefix}()")
    if source is Source.WORKBENCH and vm.workbench_len() < 1:
        raise VMError(f"Stack is too shallow for inline {prefix}()")


def _take(vm: Machine, source: Source) -> Any:
    return vm.pull() if source is Source.STACK else vm.pull_from_workbench()


def _put(vm: Machine, source: Source, value: Any) -> None:
    if source is Source.STACK:
        vm.push(value)
    else:
        vm.push_to_workbench(value)


def _apply(op: MathOp, value1: Any, value2: Any, prefix: str) -> Any:
    try:
        return numeric_op(op, value1, value2)
    except VMError as err:
        raise VMError(f"{prefix} returns error: {err}") from err


def math_op(vm: Machine, depth: int, source: Source, op: MathOp, prefix: str) -> None:
    """Combine one operand from source with one from the stack."""
    _check_depth(vm, depth, source, prefix)
    value1 = _take(vm, source)
    if value1 is None:
        raise VMError(f"{prefix} returns: NO DATA #1")
    value2 = vm.pull()
    if value2 is None:
        raise VMError(f"{prefix} returns: NO DATA #2")
    _put(vm, source, _apply(op, value1, value2, prefix))


def math_op_multiple(vm: Machine, depth: int, source: Source, op: MathOp, prefix: str) -> None:
    """Fold the stack into one result until it is empty or a NoData marker is met."""
    _check_depth(vm, depth, source, prefix)
    while True:
        value1 = _take(vm, source)
        if value1 is None:
            raise VMError(f"{prefix} can not get X")
        value2 = vm.pull()
        if value2 is None or isinstance(value2, NoData):
            _put(vm, source, value1)
            break
        _put(vm, source, _apply(op, value1, value2, prefix))


_WORDS = (
    ("+", MathOp.ADD, "ADD"),
    ("-", MathOp.SUB, "SUB"),
    ("*", MathOp.MUL, "MUL"),
    ("/", MathOp.DIV, "DIV"),
)


def register(vm: Machine) -> None:
    for symbol, op, name in _WORDS:
        vm.register_inline(
            symbol, partial(math_op, depth=2, source=Source.STACK, op=op, prefix=name)
        )
        vm.register_inline(
            symbol + ".",
            partial(math_op, depth=1, source=Source.WORKBENCH, op=op, prefix=name + "."),
        )
        vm.register_inline(
            "*" + symbol,
            partial(math_op_multiple, depth=2, source=Source.STACK, op=op, prefix="*" + name),
        )
        vm.register_inline(
            "*" + symbol + ".",
            partial(
                math_op_multiple,
                depth=1,
                source=Source.WORKBENCH,
                op=op,
                prefix="*" + name + ".",
            ),
        )