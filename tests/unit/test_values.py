"""Tests for exprcalc runtime values and Function."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from exprcalc.core.errors import ExecutionError, ExecutionErrorKind
from exprcalc.core.ir import (
    Function,
    FunctionValue,
    IntegerValue,
    NumberValue,
    StringValue,
    VariableValue,
    builtin,
    numeric_arguments,
)


def _one(arguments):
    return NumberValue(value=1)


def _two(arguments):
    return NumberValue(value=2)


class TestValueEquality:
    """Equality is variant-wise."""

    def test_same_variant_same_payload(self) -> None:
        assert NumberValue(value=1.5) == NumberValue(value=1.5)
        assert VariableValue(name="x") == VariableValue(name="x")
        assert StringValue(value="a") == StringValue(value="a")

    def test_int_payload_coerced_to_float(self) -> None:
        assert NumberValue(value=2) == NumberValue(value=2.0)
        assert isinstance(NumberValue(value=2).value, float)

    def test_different_variants_never_equal(self) -> None:
        assert NumberValue(value=1.0) != IntegerValue(value=1)
        assert StringValue(value="x") != VariableValue(name="x")

    def test_values_are_frozen(self) -> None:
        value = NumberValue(value=1.0)
        with pytest.raises(ValidationError):
            value.value = 2.0  # type: ignore[misc]

    def test_values_are_hashable(self) -> None:
        assert len({NumberValue(value=1.0), NumberValue(value=1.0), IntegerValue(value=1)}) == 2


class TestFunction:
    """Functions compare by id only."""

    def test_call_passes_arguments(self) -> None:
        seen = []
        f = Function("record", lambda args: seen.append(list(args)) or NumberValue(value=0))
        f([NumberValue(value=1), NumberValue(value=2)])
        assert seen == [[NumberValue(value=1), NumberValue(value=2)]]

    def test_equality_by_id(self) -> None:
        assert Function("f", _one) == Function("f", _one)
        assert Function("f", _one) != Function("g", _one)

    def test_same_id_different_behaviour_still_equal(self) -> None:
        first, second = Function("f", _one), Function("f", _two)
        assert first == second
        assert first([]) != second([])

    def test_function_value_equality(self) -> None:
        assert FunctionValue(function=Function("f", _one)) == FunctionValue(
            function=Function("f", _two)
        )
        assert hash(FunctionValue(function=Function("f", _one))) == hash(
            FunctionValue(function=Function("f", _two))
        )

    def test_function_value_rejects_non_function(self) -> None:
        with pytest.raises(ValidationError):
            FunctionValue(function=_one)  # type: ignore[arg-type]

    def test_builtin_decorator(self) -> None:
        @builtin("answer")
        def answer(arguments):
            return NumberValue(value=42)

        assert isinstance(answer, Function)
        assert answer.id == "answer"
        assert answer([]) == NumberValue(value=42)


class TestNumericArguments:
    def test_unwraps_numbers(self) -> None:
        assert numeric_arguments([NumberValue(value=1), NumberValue(value=2.5)]) == [1.0, 2.5]

    def test_arity_mismatch(self) -> None:
        with pytest.raises(ExecutionError) as exc_info:
            numeric_arguments([NumberValue(value=1), NumberValue(value=2)], arity=1)
        assert exc_info.value.kind == ExecutionErrorKind.PARAMETER_ERROR

    def test_non_number(self) -> None:
        with pytest.raises(ExecutionError) as exc_info:
            numeric_arguments([IntegerValue(value=1)])
        assert exc_info.value.kind == ExecutionErrorKind.PARAMETER_ERROR


class TestStr:
    def test_rendering(self) -> None:
        assert str(NumberValue(value=2.5)) == "2.5"
        assert str(IntegerValue(value=3)) == "3"
        assert str(StringValue(value="hi")) == '"hi"'
        assert str(VariableValue(name="x")) == "x"
        assert str(FunctionValue(function=Function("sin", _one))) == "<function sin>"
