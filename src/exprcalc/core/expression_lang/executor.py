"""
Executor for compiled exprcalc programs.

Tree-walks a CompiledProgram against a read-only environment. Every node is
first evaluated to a value, which may still be a VariableValue, and then
resolved: variables are chased through the environment until a grounded
value is reached. Operands, callees and arguments are each resolved before
use, so the environment may bind names to other names.

Only NumberValue takes part in arithmetic. Division follows IEEE-754:
dividing by zero gives an infinity or NaN rather than an error.
"""

from __future__ import annotations

import logging
import math
import operator
from collections.abc import Callable, Mapping
from types import MappingProxyType

from exprcalc.core.config import DEFAULT_MAX_DEPTH, CalcConfig
from exprcalc.core.errors import (
    ExecutionError,
    ExecutionErrorKind,
    type_mismatch,
    unknown_variable,
)
from exprcalc.core.ir.nodes import (
    BinaryAtom,
    Call,
    CompiledProgram,
    Divide,
    Minus,
    Negate,
    Node,
    Plus,
    Times,
    ValueAtom,
)
from exprcalc.core.ir.values import (
    VALUE_TYPES,
    FunctionValue,
    NumberValue,
    Value,
    VariableValue,
)

logger = logging.getLogger(__name__)


def _divide(left: float, right: float) -> float:
    """IEEE-754 division; Python raises where the standard gives inf or NaN."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


_ARITHMETIC: dict[type[BinaryAtom], Callable[[float, float], float]] = {
    Plus: operator.add,
    Minus: operator.sub,
    Times: operator.mul,
    Divide: _divide,
}


class Executor:
    """Evaluates compiled programs against one environment."""

    def __init__(
        self,
        variables: Mapping[str, Value] | None = None,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.variables: Mapping[str, Value] = MappingProxyType(dict(variables or {}))
        self.max_depth = max_depth

    def execute(self, program: CompiledProgram) -> Value:
        """Evaluate the whole program to a grounded value.

        Raises:
            ExecutionError: If evaluation fails anywhere in the tree.
        """
        try:
            result = self.resolve(self.evaluate(program.root))
        except RecursionError as e:
            # Interpreter stack ran out before max_depth was reached
            raise ExecutionError(
                ExecutionErrorKind.NESTING_TOO_DEEP,
                "Expression nesting exceeds the interpreter recursion limit",
            ) from e
        logger.debug("Executed %r -> %s", program.source, result)
        return result

    def evaluate(self, node: Node, depth: int = 0) -> Value:
        """Reduce one node to a value, which may be an unresolved variable."""
        if depth > self.max_depth:
            raise ExecutionError(
                ExecutionErrorKind.NESTING_TOO_DEEP,
                f"Expression nesting exceeds the limit of {self.max_depth}",
            )

        atom = node.atom
        if isinstance(atom, ValueAtom):
            return atom.value

        if isinstance(atom, BinaryAtom):
            left = self._number(atom.left, depth, atom.label)
            right = self._number(atom.right, depth, atom.label)
            return NumberValue(value=_ARITHMETIC[type(atom)](left, right))

        if isinstance(atom, Negate):
            return NumberValue(value=-self._number(atom.operand, depth, atom.label))

        if isinstance(atom, Call):
            return self._call(atom, depth)

        raise ExecutionError(
            ExecutionErrorKind.UNKNOWN_ERROR, f"Unknown atom type: {type(atom).__name__}"
        )

    def resolve(self, value: Value) -> Value:
        """Follow variable references until a grounded value is reached.

        Raises:
            ExecutionError: UNKNOWN_VARIABLE for an unbound name,
                CYCLIC_REFERENCE when names refer back to each other.
        """
        seen: set[str] = set()
        while isinstance(value, VariableValue):
            name = value.name
            if name in seen:
                raise ExecutionError(
                    ExecutionErrorKind.CYCLIC_REFERENCE,
                    f"Variable {name} refers back to itself",
                    name=name,
                )
            seen.add(name)
            if name not in self.variables:
                raise unknown_variable(name)
            value = self.variables[name]
        return value

    def _number(self, node: Node, depth: int, label: str) -> float:
        value = self.resolve(self.evaluate(node, depth + 1))
        if not isinstance(value, NumberValue):
            raise type_mismatch(f"{label} requires numbers, got {value}")
        return value.value

    def _call(self, atom: Call, depth: int) -> Value:
        callee = self.resolve(self.evaluate(atom.callee, depth + 1))
        if not isinstance(callee, FunctionValue):
            raise type_mismatch(f"{callee} is not a function")

        arguments = [self.resolve(self.evaluate(arg, depth + 1)) for arg in atom.arguments]
        function = callee.function
        logger.debug("Calling %s with %d argument(s)", function.id, len(arguments))
        try:
            result = function(arguments)
        except (ExecutionError, RecursionError):
            raise
        except Exception as e:
            raise ExecutionError(
                ExecutionErrorKind.UNKNOWN_ERROR, f"{function.id}() failed: {e}"
            ) from e

        if not isinstance(result, VALUE_TYPES):
            raise type_mismatch(f"{function.id}() returned a non-value: {result!r}")
        return result


def execute(
    program: CompiledProgram,
    variables: Mapping[str, Value] | None = None,
    config: CalcConfig | None = None,
) -> Value:
    """Evaluate a compiled program against an environment.

    Args:
        program: Output of compile_program().
        variables: Name -> Value bindings, including functions.
        config: Supplies the nesting limit; defaults apply when omitted.

    Returns:
        The grounded result value.

    Raises:
        ExecutionError: If evaluation fails.
    """
    max_depth = config.max_depth if config else DEFAULT_MAX_DEPTH
    return Executor(variables, max_depth=max_depth).execute(program)
