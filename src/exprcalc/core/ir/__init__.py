"""
Intermediate representation for exprcalc: runtime values and the compiled
expression tree.
"""

from exprcalc.core.ir.nodes import (
    Atom,
    BinaryAtom,
    Call,
    CompiledProgram,
    Divide,
    Location,
    Minus,
    Negate,
    Node,
    Plus,
    Times,
    ValueAtom,
    iter_nodes,
)
from exprcalc.core.ir.values import (
    Function,
    FunctionValue,
    IntegerValue,
    NumberValue,
    StringValue,
    Value,
    VariableValue,
    builtin,
    numeric_arguments,
)

__all__ = [
    # Values
    "Value",
    "NumberValue",
    "IntegerValue",
    "StringValue",
    "VariableValue",
    "FunctionValue",
    "Function",
    "builtin",
    "numeric_arguments",
    # Tree
    "Atom",
    "ValueAtom",
    "BinaryAtom",
    "Plus",
    "Minus",
    "Times",
    "Divide",
    "Negate",
    "Call",
    "Node",
    "Location",
    "CompiledProgram",
    "iter_nodes",
]
