"""
Compiler for exprcalc expressions.

Runs the lark parser over the source once, then lowers ("atomizes") the lark
tree into owned Node/Atom models. Identifiers are kept as VariableValue
references and resolved only at execution time.

Lark exceptions never escape: they are translated into ParseError with a
SyntaxErrorKind, chained as __cause__.
"""

from __future__ import annotations

import logging

from lark import Token, Tree
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
)

from exprcalc.core.config import CalcConfig
from exprcalc.core.errors import ParseError, SyntaxErrorKind, make_parse_error
from exprcalc.core.expression_lang.grammar import parse_tree
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
)
from exprcalc.core.ir.values import NumberValue, VariableValue

logger = logging.getLogger(__name__)

_BINARY: dict[str, type[BinaryAtom]] = {
    "add": Plus,
    "subtract": Minus,
    "multiply": Times,
    "divide": Divide,
}


class Compiler:
    """Compiles source strings into CompiledPrograms."""

    def __init__(self, config: CalcConfig | None = None) -> None:
        self.config = config or CalcConfig()

    def compile(self, source: str | bytes) -> CompiledProgram:
        """Compile one expression.

        Raises:
            ParseError: If the source is not a well-formed expression.
        """
        text = _decode(source)
        try:
            tree = parse_tree(text)
        except UnexpectedInput as e:
            raise _translate_error(e, text) from e

        try:
            root = _Atomizer(text, self.config.max_depth).atomize(tree)
        except RecursionError as e:
            # Interpreter stack ran out before max_depth was reached
            raise make_parse_error(
                SyntaxErrorKind.NESTING_TOO_DEEP,
                "Expression nesting exceeds the interpreter recursion limit",
                text,
                0,
            ) from e
        logger.debug("Compiled %r into %s", text, root)
        return CompiledProgram(source=text, root=root)


class _Atomizer:
    """Lowers one lark tree into Nodes; holds no reference to it afterwards."""

    def __init__(self, source: str, max_depth: int) -> None:
        self.source = source
        self.max_depth = max_depth

    def atomize(self, tree: Tree, depth: int = 0) -> Node:
        if depth > self.max_depth:
            raise make_parse_error(
                SyntaxErrorKind.NESTING_TOO_DEEP,
                f"Expression nesting exceeds the limit of {self.max_depth}",
                self.source,
                tree.meta.start_pos,
            )

        kind = tree.data
        atom: Atom
        if kind == "number":
            atom = ValueAtom(value=NumberValue(value=float(_token(tree))))
        elif kind == "variable":
            atom = ValueAtom(value=VariableValue(name=str(_token(tree))))
        elif kind in _BINARY:
            left, right = tree.children
            atom = _BINARY[kind](
                left=self.atomize(left, depth + 1),
                right=self.atomize(right, depth + 1),
            )
        elif kind == "negate":
            atom = Negate(operand=self.atomize(tree.children[0], depth + 1))
        elif kind == "parens":
            # The inner atom takes the place of the parentheses
            atom = self.atomize(tree.children[0], depth + 1).atom
        elif kind == "call":
            callee, arguments = tree.children
            atom = Call(
                callee=self.atomize(callee, depth + 1),
                arguments=tuple(
                    self.atomize(argument, depth + 1)
                    for argument in (arguments.children if arguments is not None else [])
                ),
            )
        else:
            raise make_parse_error(
                SyntaxErrorKind.UNEXPECTED_TOKEN,
                f"Unsupported production: {kind}",
                self.source,
                tree.meta.start_pos,
            )

        location = Location(source=self.source, start=tree.meta.start_pos, end=tree.meta.end_pos)
        return Node(atom=atom, location=location)


def _token(tree: Tree) -> Token:
    token = tree.children[0]
    if not isinstance(token, Token):
        raise make_parse_error(
            SyntaxErrorKind.UNEXPECTED_TOKEN,
            f"Expected a token in {tree.data}, got {type(token).__name__}",
        )
    return token


def _decode(source: str | bytes) -> str:
    """Return the source as text, rejecting anything that is not valid UTF-8."""
    if isinstance(source, bytes):
        try:
            return source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise make_parse_error(
                SyntaxErrorKind.INVALID_ENCODING, f"Source is not valid UTF-8: {e.reason}"
            ) from e
    try:
        source.encode("utf-8")
    except UnicodeEncodeError as e:
        raise make_parse_error(
            SyntaxErrorKind.INVALID_ENCODING,
            f"Source is not encodable as UTF-8: {e.reason}",
            source,
            e.start,
        ) from e
    return source


def _translate_error(error: UnexpectedInput, source: str) -> ParseError:
    """Map a lark syntax error onto SyntaxErrorKind."""
    if isinstance(error, UnexpectedCharacters):
        char = source[error.pos_in_stream] if error.pos_in_stream < len(source) else ""
        return make_parse_error(
            SyntaxErrorKind.INVALID_TOKEN,
            f"Invalid token: {char!r}",
            source,
            error.pos_in_stream,
        )
    if isinstance(error, UnexpectedToken):
        if error.token.type == "$END":
            return make_parse_error(
                SyntaxErrorKind.INCOMPLETE_INPUT,
                "Expression ended unexpectedly",
                source,
                len(source),
            )
        return make_parse_error(
            SyntaxErrorKind.UNEXPECTED_TOKEN,
            f"Unexpected token: {str(error.token)!r}",
            source,
            error.token.start_pos,
        )
    if isinstance(error, UnexpectedEOF):
        return make_parse_error(
            SyntaxErrorKind.INCOMPLETE_INPUT, "Expression ended unexpectedly", source, len(source)
        )
    return make_parse_error(
        SyntaxErrorKind.UNEXPECTED_TOKEN,
        f"Unexpected input: {error}",
        source,
        getattr(error, "pos_in_stream", None),
    )


def compile_program(source: str | bytes, config: CalcConfig | None = None) -> CompiledProgram:
    """Compile an expression string into a program.

    Args:
        source: Expression text (e.g., "sin(1) * 10 * pi"), str or UTF-8 bytes

    Returns:
        The compiled program.

    Raises:
        ParseError: If the expression is invalid.
    """
    return Compiler(config).compile(source)
