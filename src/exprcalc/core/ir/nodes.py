"""
Compiled expression tree for exprcalc.

A CompiledProgram owns a tree of Nodes. Each Node pairs one Atom (the
expression form) with an optional Location in the source text:

- ValueAtom: a literal number or an identifier (as a VariableValue)
- Plus, Minus, Times, Divide: binary arithmetic
- Negate: unary minus
- Call: callee(arguments...), where the callee is any expression

Parentheses never appear in the tree; a parenthesized expression compiles to
its inner atom.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from exprcalc.core.ir.values import Value


class Location(BaseModel):
    """
    Half-open range [start, end) of character offsets into the source.

    Only used for diagnostics and presentation; evaluation never reads it.
    """

    source: str = Field(description="Complete source text the range points into")
    start: int = Field(ge=0)
    end: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_range(self) -> Location:
        if self.start > self.end or self.end > len(self.source):
            raise ValueError(
                f"Range {self.start}..{self.end} is outside a source of length {len(self.source)}"
            )
        return self

    @property
    def text(self) -> str:
        """The source text covered by this location."""
        return self.source[self.start : self.end]

    @property
    def byte_range(self) -> tuple[int, int]:
        """The same range as UTF-8 byte offsets."""
        start = len(self.source[: self.start].encode("utf-8"))
        return start, start + len(self.text.encode("utf-8"))

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


class Node(BaseModel):
    """An atom plus where it came from."""

    atom: Atom
    location: Location | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def text(self) -> str | None:
        """Source text this node was compiled from, if known."""
        return self.location.text if self.location else None

    def __str__(self) -> str:
        return str(self.atom)


# ---------------------------------------------------------------------------
# Atom variants
# ---------------------------------------------------------------------------


class ValueAtom(BaseModel):
    """A literal or identifier."""

    value: Value

    model_config = ConfigDict(frozen=True)

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    @property
    def label(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return str(self.value)


class BinaryAtom(BaseModel):
    """Shared shape of the binary arithmetic atoms."""

    symbol: ClassVar[str]

    left: Node
    right: Node

    model_config = ConfigDict(frozen=True)

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.left, self.right)

    @property
    def label(self) -> str:
        return f"operator {self.symbol}"

    def __str__(self) -> str:
        return f"({self.left} {self.symbol} {self.right})"


class Plus(BinaryAtom):
    """left + right"""

    symbol: ClassVar[str] = "+"


class Minus(BinaryAtom):
    """left - right"""

    symbol: ClassVar[str] = "-"


class Times(BinaryAtom):
    """left * right"""

    symbol: ClassVar[str] = "*"


class Divide(BinaryAtom):
    """left / right"""

    symbol: ClassVar[str] = "/"


class Negate(BaseModel):
    """Unary minus."""

    operand: Node

    model_config = ConfigDict(frozen=True)

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.operand,)

    @property
    def label(self) -> str:
        return "operator unary -"

    def __str__(self) -> str:
        return f"-{self.operand}"


class Call(BaseModel):
    """
    Function call: callee(arg1, arg2, ...).

    The callee is an arbitrary expression, usually a bare identifier.
    Arguments keep source order, which is the order they are passed in.
    """

    callee: Node
    arguments: tuple[Node, ...] = ()

    model_config = ConfigDict(frozen=True)

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.callee, *self.arguments)

    @property
    def label(self) -> str:
        return "function"

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.arguments)
        return f"{self.callee}({args_str})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Atom = ValueAtom | Plus | Minus | Times | Negate | Divide | Call

# Rebuild models for recursive forward references
Node.model_rebuild()
BinaryAtom.model_rebuild()
Plus.model_rebuild()
Minus.model_rebuild()
Times.model_rebuild()
Divide.model_rebuild()
Negate.model_rebuild()
Call.model_rebuild()


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node of the tree, breadth first, starting with root."""
    queue = deque([root])
    while queue:
        node = queue.popleft()
        yield node
        queue.extend(node.atom.children)


class CompiledProgram(BaseModel):
    """The source text and the tree compiled from it."""

    source: str
    root: Node

    model_config = ConfigDict(frozen=True)

    def iter_nodes(self) -> Iterator[Node]:
        return iter_nodes(self.root)

    def dump(self) -> str:
        """Indented one-node-per-line rendering of the tree."""
        lines: list[str] = []

        def visit(node: Node, depth: int) -> None:
            span = f" [{node.location}]" if node.location else ""
            lines.append(f"{'  ' * depth}{node.atom.label}{span}")
            for child in node.atom.children:
                visit(child, depth + 1)

        visit(self.root, 0)
        return "\n".join(lines)

    def __str__(self) -> str:
        return str(self.root)
