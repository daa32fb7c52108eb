"""
Runtime values for the exprcalc evaluator.

Values are a closed tagged union:
- NumberValue: a double-precision float, the only operand arithmetic accepts
- IntegerValue, StringValue: carried through environments and functions
- VariableValue: a late-bound name, resolved against the environment
- FunctionValue: a callable Function

Every variant is a frozen pydantic model, so equality is variant-wise:
NumberValue(value=1.0) is never equal to IntegerValue(value=1).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from exprcalc.core.errors import parameter_error


class NumberValue(BaseModel):
    """A floating point number."""

    value: float = Field(description="IEEE-754 double")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class IntegerValue(BaseModel):
    """An integer."""

    value: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class StringValue(BaseModel):
    """A piece of text."""

    value: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f'"{self.value}"'


class VariableValue(BaseModel):
    """A reference to a name, looked up in the environment at evaluation time."""

    name: str = Field(description="Identifier as written in the source")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class Function:
    """
    A named callable usable as a value.

    The closure receives the ordered, already-resolved argument values and
    returns a value, raising ExecutionError (normally PARAMETER_ERROR) when the
    arguments are unacceptable.

    Equality and hashing use ``id`` alone. Two functions sharing an id compare
    equal even when their closures behave differently.
    """

    __slots__ = ("id", "_closure")

    def __init__(self, function_id: str, closure: Callable[[Sequence[Value]], Value]) -> None:
        self.id = function_id
        self._closure = closure

    def __call__(self, arguments: Sequence[Value]) -> Value:
        return self._closure(arguments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Function):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Function({self.id!r})"


class FunctionValue(BaseModel):
    """A function bound as a value."""

    function: Function

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __str__(self) -> str:
        return f"<function {self.function.id}>"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Value = NumberValue | IntegerValue | StringValue | VariableValue | FunctionValue

VALUE_TYPES = (NumberValue, IntegerValue, StringValue, VariableValue, FunctionValue)


def builtin(function_id: str) -> Callable[[Callable[[Sequence[Value]], Value]], Function]:
    """Decorator turning a plain closure into a Function with the given id."""

    def decorator(closure: Callable[[Sequence[Value]], Value]) -> Function:
        return Function(function_id, closure)

    return decorator


def numeric_arguments(arguments: Sequence[Any], arity: int | None = None) -> list[float]:
    """Unwrap function arguments that must all be numbers.

    Args:
        arguments: Resolved argument values.
        arity: Required argument count, or None for any count.

    Returns:
        The float payloads, in order.

    Raises:
        ExecutionError: PARAMETER_ERROR on a count mismatch or a non-number.
    """
    if arity is not None and len(arguments) != arity:
        raise parameter_error(f"Expected {arity} argument(s), got {len(arguments)}")
    numbers: list[float] = []
    for argument in arguments:
        if not isinstance(argument, NumberValue):
            raise parameter_error(f"Expected a number, got {argument}")
        numbers.append(argument.value)
    return numbers
