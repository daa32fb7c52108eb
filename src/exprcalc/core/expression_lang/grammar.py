"""
Lark grammar for exprcalc expressions.

Grammar (precedence low to high):
    sum      → product (("+" | "-") product)*
    product  → unary (("*" | "/") unary)*
    unary    → "-" unary | postfix
    postfix  → atom ("(" arguments? ")")*
    atom     → NUMBER | NAME | "(" sum ")"

Each production of interest carries an alias naming it in the parse tree:
number, variable, add, subtract, multiply, divide, negate, parens, call.
Positions are propagated so every tree exposes meta.start_pos/end_pos.
"""

from __future__ import annotations

from functools import lru_cache

from lark import Lark, Tree

GRAMMAR = r"""
?start: sum

?sum: product
    | sum "+" product   -> add
    | sum "-" product   -> subtract

?product: unary
    | product "*" unary -> multiply
    | product "/" unary -> divide

?unary: postfix
    | "-" unary         -> negate

?postfix: atom
    | postfix "(" [arguments] ")" -> call

arguments: sum ("," sum)*

?atom: NUMBER           -> number
    | NAME              -> variable
    | "(" sum ")"       -> parens

%import common.NUMBER
%import common.CNAME -> NAME
%import common.WS
%ignore WS
"""


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    """Build the LALR parser once; lark parsers are safe to share."""
    return Lark(
        GRAMMAR,
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=True,
    )


def parse_tree(source: str) -> Tree:
    """Parse source into a lark tree.

    Raises:
        lark.exceptions.UnexpectedInput: On any syntax error.
    """
    return get_parser().parse(source)
