"""
exprcalc - compile and evaluate arithmetic expressions with late-bound
variables and functions.

    from exprcalc import compile_program, execute, default_environment

    program = compile_program("sin(1) * 10 * pi")
    execute(program, default_environment())
"""

from __future__ import annotations

from ._version import get_version
from .core.config import CalcConfig, load_config
from .core.errors import (
    CalcError,
    ExecutionError,
    ExecutionErrorKind,
    ParseError,
    SyntaxErrorKind,
)
from .core.expression_lang import Compiler, Executor, compile_program, execute
from .core.ir import (
    CompiledProgram,
    Function,
    FunctionValue,
    IntegerValue,
    Node,
    NumberValue,
    StringValue,
    Value,
    VariableValue,
)
from .stdlib import default_environment

__version__ = get_version()

__all__ = [
    "__version__",
    "CalcConfig",
    "load_config",
    "CalcError",
    "ParseError",
    "SyntaxErrorKind",
    "ExecutionError",
    "ExecutionErrorKind",
    "Compiler",
    "Executor",
    "compile_program",
    "execute",
    "CompiledProgram",
    "Node",
    "Value",
    "NumberValue",
    "IntegerValue",
    "StringValue",
    "VariableValue",
    "FunctionValue",
    "Function",
    "default_environment",
]
