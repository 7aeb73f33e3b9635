"""
Error types for Resolution lexing, parsing, and evaluation.

Taxonomy:
    - Lexical:      UnterminatedStringError
    - Structural:   NoTitleError, EarlyResolvedError, LateWhereasError,
                    NoResolvedError, NoWhereasError, UnrecognizedExpressionError
    - Literal:      InvalidCardinalError, InvalidNumeralError,
                    InvalidIntegerError, DisagreementError
    - Identifier:   RedeclaredError, UndeclaredError, UnusedError
    - Runtime:      EvaluationError (wraps an evaluator Error value)

Lexical, structural and literal errors abort parsing immediately.
Identifier errors are collected and raised together as a ParseErrorList.
"""

from typing import List, Optional


class WhereasError(Exception):
    """Base exception for all Resolution errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LexError(WhereasError):
    """Raised when source text cannot be tokenized."""

    pass


class UnterminatedStringError(LexError):
    """
    Raised when a string literal reaches end of input without a closing quote.

    The text scanned so far is kept on `literal` so callers can report it
    alongside the error.
    """

    def __init__(self, literal: str):
        self.literal = literal
        super().__init__("no closing quotation mark")


class ParseError(WhereasError):
    """Raised when a Resolution cannot be parsed."""

    pass


class NoTitleError(ParseError):
    def __init__(self):
        super().__init__("no title")


class EarlyResolvedError(ParseError):
    def __init__(self):
        super().__init__("no Whereas clause before Resolved clause")


class LateWhereasError(ParseError):
    def __init__(self):
        super().__init__("Whereas clause after Resolved clause")


class NoResolvedError(ParseError):
    def __init__(self):
        super().__init__("no Resolved clause")


class NoWhereasError(ParseError):
    def __init__(self):
        super().__init__("no Whereas clause")


class UnrecognizedExpressionError(ParseError):
    """Raised when an expression is expected but a clause boundary is found."""

    def __init__(self, literal: str = ""):
        self.literal = literal
        if literal:
            super().__init__(f"unrecognized expression at {literal!r}")
        else:
            super().__init__("unrecognized expression")


class IntegerLiteralError(ParseError):
    """
    Base class for integer literal failures.

    An integer literal is a cardinal followed by a parenthesized numeral,
    e.g. "ninety-nine (99)".
    """

    pass


class InvalidCardinalError(IntegerLiteralError):
    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"invalid cardinal: {detail}" if detail else "invalid cardinal")


class InvalidNumeralError(IntegerLiteralError):
    def __init__(self, numeral: str = ""):
        self.numeral = numeral
        super().__init__(f"invalid numeral {numeral!r}" if numeral else "invalid numeral")


class InvalidIntegerError(IntegerLiteralError):
    """Raised when a cardinal is not followed by exactly one parenthesized numeral."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"invalid integer: {detail}" if detail else "invalid integer")


class DisagreementError(IntegerLiteralError):
    """
    Raised when a cardinal and its numeral are both valid but differ.

    This is NOT a syntax error: "three hundred sixty-five (366)" is
    well-formed on both sides.
    """

    def __init__(self, cardinal: int, numeral: int):
        self.cardinal = cardinal
        self.numeral = numeral
        super().__init__(f"cardinal and numeral disagree: {cardinal} != {numeral}")


class IdentifierError(ParseError):
    """Base class for identifier discipline violations."""

    reason = "identifier error"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{self.reason}: {name}")

    def __eq__(self, other):
        return type(self) is type(other) and self.name == other.name

    def __hash__(self):
        return hash((type(self).__name__, self.name))


class RedeclaredError(IdentifierError):
    reason = "redeclared identifier"


class UndeclaredError(IdentifierError):
    reason = "undeclared identifier"


class UnusedError(IdentifierError):
    reason = "unused identifier"


class ParseErrorList(ParseError):
    """
    Raised after a structurally complete parse that found identifier errors.

    Properties:
        errors: Every IdentifierError, in the order found
        resolution: The Resolution that was built despite the errors
    """

    def __init__(self, errors: List[ParseError], resolution: Optional[object] = None):
        self.errors = list(errors)
        self.resolution = resolution
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.errors:
            return "no errors"
        if len(self.errors) == 1:
            return self.errors[0].message
        return f"{self.errors[0].message} (and {len(self.errors) - 1} more errors)"


class EvaluationError(WhereasError):
    """Raised at the run() boundary when evaluation produced an Error value."""

    def __init__(self, error):
        self.error = error
        super().__init__(error.message)
