"""Shared pytest fixtures for exprcalc tests."""

import math
from collections.abc import Sequence

import pytest

from exprcalc.core.ir import Function, FunctionValue, NumberValue, Value, numeric_arguments


def _sine(arguments: Sequence[Value]) -> Value:
    (x,) = numeric_arguments(arguments, arity=1)
    return NumberValue(value=math.sin(x))


@pytest.fixture
def sine() -> Function:
    """A unary sine function."""
    return Function("sin", _sine)


@pytest.fixture
def trig_env(sine: Function) -> dict[str, Value]:
    """Environment with pi and sin, as used in the README example."""
    return {
        "pi": NumberValue(value=math.pi),
        "sin": FunctionValue(function=sine),
    }
