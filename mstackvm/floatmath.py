"""Floating point functions and constants."""

from __future__ import annotations

import math
from enum import Enum
from functools import partial
from typing import Callable

from mstackvm.machine import Machine, VMError, to_float


class FloatOp(Enum):
    FLOOR = "floor"
    ABS = "abs"
    SIGNUM = "signum"
    ACOS = "acos"
    ATAN = "atan"
    ASIN = "asin"
    CBRT = "cbrt"
    CEIL = "ceil"
    ROUND = "round"
    FRACT = "fract"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    SQRT = "sqrt"


def _keep_zero_sign(result: float, x: float) -> float:
    return math.copysign(result, x) if result == 0 else result


def _floor(x: float) -> float:
    if not math.isfinite(x):
        return x
    return _keep_zero_sign(float(math.floor(x)), x)


def _ceil(x: float) -> float:
    if not math.isfinite(x):
        return x
    return _keep_zero_sign(float(math.ceil(x)), x)


def _round(x: float) -> float:
    """Round half away from zero."""
    if not math.isfinite(x):
        return x
    whole = float(math.trunc(x))
    if abs(x - whole) >= 0.5:
        whole += math.copysign(1.0, x)
    return math.copysign(whole, x)


def _fract(x: float) -> float:
    if math.isinf(x):
        return math.nan
    if math.isnan(x):
        return x
    return x - math.trunc(x)


def _signum(x: float) -> float:
    if math.isnan(x):
        return x
    return math.copysign(1.0, x)


def _cbrt(x: float) -> float:
    if not math.isfinite(x) or x == 0:
        return x
    magnitude = abs(x)
    root = magnitude ** (1.0 / 3.0)
    root -= (root * root * root - magnitude) / (3.0 * root * root)
    return math.copysign(root, x)


def _sqrt(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    return math.sqrt(x)


def _sinh(x: float) -> float:
    try:
        return math.sinh(x)
    except OverflowError:
        return math.copysign(math.inf, x)


def _cosh(x: float) -> float:
    try:
        return math.cosh(x)
    except OverflowError:
        return math.inf


_FUNCTIONS: dict[FloatOp, Callable[[float], float]] = {
    FloatOp.FLOOR: _floor,
    FloatOp.ABS: abs,
    FloatOp.SIGNUM: _signum,
    FloatOp.ACOS: math.acos,
    FloatOp.ATAN: math.atan,
    FloatOp.ASIN: math.asin,
    FloatOp.CBRT: _cbrt,
    FloatOp.CEIL: _ceil,
    FloatOp.ROUND: _round,
    FloatOp.FRACT: _fract,
    FloatOp.SIN: math.sin,
    FloatOp.COS: math.cos,
    FloatOp.TAN: math.tan,
    FloatOp.SINH: _sinh,
    FloatOp.COSH: _cosh,
    FloatOp.TANH: math.tanh,
    FloatOp.SQRT: _sqrt,
}


def _evaluate(op: FloatOp, x: float) -> float:
    try:
        return float(_FUNCTIONS[op](x))
    except ValueError:
        # Out of the function's domain: the result is not a number.
        return math.nan


def float_op(vm: Machine, op: FloatOp) -> None:
    """Replace the top of the stack with op applied to it as a float."""
    if vm.current_stack_len() < 1:
        raise VMError("Stack is too shallow for inline float_op")
    value = vm.pull()
    if value is None:
        raise VMError("FLOAT_OP returns: NO DATA #1")
    try:
        x = to_float(value)
    except VMError as err:
        raise VMError(f"FLOAT_OP returns error: {err}") from err
    vm.push(_evaluate(op, x))


def push_constant(vm: Machine, value: float) -> None:
    vm.push(value)


_CONSTANTS = (
    ("float.NaN", math.nan),
    ("float.+Inf", math.inf),
    ("float.-Inf", -math.inf),
    ("float.Pi", math.pi),
    ("float.E", math.e),
)


def register(vm: Machine) -> None:
    for op in FloatOp:
        vm.register_inline(f"math.{op.value}", partial(float_op, op=op))
    for name, value in _CONSTANTS:
        vm.register_inline(name, partial(push_constant, value=value))