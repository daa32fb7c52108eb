"""
exprcalc expression language.

Compiler (lark parse tree -> owned AST) and executor (tree-walking
evaluation with late-bound names).

Usage:
    from exprcalc.core.expression_lang import compile_program, execute

    program = compile_program("box1 + box2")
    result = execute(program, {"box1": NumberValue(value=100), "box2": NumberValue(value=50)})
    # result == NumberValue(value=150.0)
"""

from exprcalc.core.expression_lang.compiler import Compiler, compile_program
from exprcalc.core.expression_lang.executor import Executor, execute

__all__ = ["Compiler", "Executor", "compile_program", "execute"]
