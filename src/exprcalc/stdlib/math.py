"""
Built-in math functions and constants.

Every function checks its own arity and argument types and raises
PARAMETER_ERROR when they do not fit. Arguments outside a function's domain
(sqrt(-1), sin(inf)) give NaN instead of an error.
"""

from __future__ import annotations

import math
import random as _random
from collections.abc import Callable, Sequence

from exprcalc.core.errors import parameter_error
from exprcalc.core.ir.values import (
    Function,
    FunctionValue,
    NumberValue,
    Value,
    builtin,
    numeric_arguments,
)


def _unary(function_id: str, op: Callable[[float], float]) -> Function:
    def closure(arguments: Sequence[Value]) -> Value:
        (x,) = numeric_arguments(arguments, arity=1)
        try:
            return NumberValue(value=op(x))
        except ValueError:
            # Domain errors give NaN, as in libm
            return NumberValue(value=math.nan)

    return Function(function_id, closure)


sin = _unary("sin", math.sin)
cos = _unary("cos", math.cos)
tan = _unary("tan", math.tan)
sqrt = _unary("sqrt", math.sqrt)
abs_ = _unary("abs", abs)


@builtin("random")
def random(arguments: Sequence[Value]) -> Value:
    """Uniform number in [0, 1]; takes no arguments."""
    if arguments:
        raise parameter_error(f"random() takes no arguments, got {len(arguments)}")
    return NumberValue(value=_random.random())


FUNCTIONS: tuple[Function, ...] = (sin, cos, tan, sqrt, abs_, random)

CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}


def math_environment() -> dict[str, Value]:
    """All math functions and constants, keyed by name."""
    env: dict[str, Value] = {f.id: FunctionValue(function=f) for f in FUNCTIONS}
    env.update({name: NumberValue(value=number) for name, number in CONSTANTS.items()})
    return env
