"""
Error types for exprcalc compilation and execution.

Two disjoint taxonomies:
- ParseError: the source could not be compiled (SyntaxErrorKind)
- ExecutionError: a compiled program could not be evaluated (ExecutionErrorKind)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class SyntaxErrorKind(StrEnum):
    """Why a source string failed to compile."""

    INVALID_ENCODING = "invalid_encoding"
    INVALID_TOKEN = "invalid_token"
    UNEXPECTED_TOKEN = "unexpected_token"
    INCOMPLETE_INPUT = "incomplete_input"
    NESTING_TOO_DEEP = "nesting_too_deep"


class ExecutionErrorKind(StrEnum):
    """Why a compiled program failed to evaluate."""

    UNKNOWN_ERROR = "unknown_error"
    UNKNOWN_VARIABLE = "unknown_variable"
    PARAMETER_ERROR = "parameter_error"
    TYPE_MISMATCH = "type_mismatch"
    CYCLIC_REFERENCE = "cyclic_reference"
    NESTING_TOO_DEEP = "nesting_too_deep"


class CalcError(Exception):
    """Base exception for all exprcalc errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(CalcError):
    """
    Raised when an expression cannot be compiled.

    Examples:
    - Undecodable input bytes
    - A character no token starts with
    - A token where the grammar expects something else
    - Input that ends in the middle of an expression
    """

    def __init__(
        self,
        kind: SyntaxErrorKind,
        message: str,
        context: ErrorContext | None = None,
    ):
        self.kind = kind
        super().__init__(message, context)


class ExecutionError(CalcError):
    """
    Raised when a compiled expression cannot be evaluated.

    Examples:
    - A name missing from the environment
    - A function called with the wrong number of arguments
    - Arithmetic on a non-numeric value
    """

    def __init__(
        self,
        kind: ExecutionErrorKind,
        message: str,
        name: str | None = None,
    ):
        self.kind = kind
        self.name = name
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Position of an error inside the expression source.

    Attributes:
        source: The full expression text
        offset: Character offset of the error (0-indexed)
    """

    source: str
    offset: int

    @property
    def line(self) -> int:
        """Line number of the error (1-indexed)."""
        return self.source.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        """Column number of the error (1-indexed)."""
        line_start = self.source.rfind("\n", 0, self.offset) + 1
        return self.offset - line_start + 1

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like "1:5" followed by the source line and a caret
        """
        lines = self.source.split("\n")
        source_line = lines[self.line - 1] if self.line <= len(lines) else ""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{self.line}:{self.column}\n{prefix}{source_line}\n{marker}"


def make_parse_error(
    kind: SyntaxErrorKind,
    message: str,
    source: str | None = None,
    offset: int | None = None,
) -> ParseError:
    """
    Helper to create a ParseError with optional context.

    Args:
        kind: Syntax error category
        message: Error description
        source: Optional expression text
        offset: Optional character offset into source

    Returns:
        ParseError with context if a position is known
    """
    if source is not None and offset is not None:
        offset = max(0, min(offset, len(source)))
        return ParseError(kind, message, ErrorContext(source=source, offset=offset))
    return ParseError(kind, message)


def unknown_variable(name: str) -> ExecutionError:
    """Helper for a name that no environment binding resolves."""
    return ExecutionError(
        ExecutionErrorKind.UNKNOWN_VARIABLE, f"Unknown variable: {name}", name=name
    )


def parameter_error(message: str) -> ExecutionError:
    """Helper for a function invoked with unacceptable arguments."""
    return ExecutionError(ExecutionErrorKind.PARAMETER_ERROR, message)


def type_mismatch(message: str) -> ExecutionError:
    """Helper for an operand or callee of the wrong type."""
    return ExecutionError(ExecutionErrorKind.TYPE_MISMATCH, message)
