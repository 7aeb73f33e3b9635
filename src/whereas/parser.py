"""
Parser for Resolutions (tokens -> AST).

A Resolution is prose. The parser does not try to understand the prose; it
scans forward through filler tokens looking for the few keywords that
matter and parses statements and expressions from there:

    title  WHEREAS ... hereinafter Name ... <expr>        -> DeclStmt
           RESOLVED ... publish <expr>                    -> PublishStmt
           RESOLVED ... Name assume <expr>                -> AssumeStmt
           RESOLVED ... if <expr> equals|exceeds <expr> <resolved body>
                                                          -> IfStmt

Expressions are parsed by precedence climbing (Pratt) over four tiers:
    LOWEST < INFIX ("less") < PREFIX ("twice", "sum", ...) < POSTFIX ("squared")

Error policy:
    - Lexical, structural and integer literal errors are raised at once
    - Identifier discipline errors (redeclared, undeclared, unused) are
      collected and raised together as ParseErrorList after the parse
"""

import logging
from enum import Enum, IntEnum
from typing import Dict, List, Optional

from whereas.errors import (
    DisagreementError,
    EarlyResolvedError,
    IdentifierError,
    InvalidCardinalError,
    InvalidIntegerError,
    LateWhereasError,
    NoResolvedError,
    NoTitleError,
    NoWhereasError,
    ParseErrorList,
    RedeclaredError,
    UndeclaredError,
    UnrecognizedExpressionError,
    UnusedError,
)
from whereas.expressions import (
    BinaryOperator,
    BinaryPrefixExpr,
    Expression,
    Identifier,
    InfixExpr,
    InfixOperator,
    IntegerLiteral,
    PostfixExpr,
    PostfixOperator,
    StringLiteral,
    UnaryOperator,
    UnaryPrefixExpr,
)
from whereas.lexer import Lexer, TokenStream
from whereas.model import (
    AssumeStmt,
    DeclStmt,
    IfStmt,
    PublishStmt,
    Relation,
    Resolution,
    ResolvedStmt,
)
from whereas.numerals import parse_numeral, read_cardinal
from whereas.tokens import CARDINAL_TYPES, Token, TokenType


logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    LOWEST = 1
    INFIX = 2
    PREFIX = 3
    POSTFIX = 4


class IdentifierState(Enum):
    """Usage state of a declared name."""

    DECLARED = "declared"
    USED = "used"


# Tokens that end a clause body. Scans for keywords never cross them.
_BOUNDARY_TYPES = frozenset({TokenType.WHEREAS, TokenType.RESOLVED, TokenType.EOF})

_UNARY_OPERATORS = {
    TokenType.TWICE: UnaryOperator.DOUBLE,
    TokenType.THRICE: UnaryOperator.TRIPLE,
}

_BINARY_OPERATORS = {
    TokenType.SUM: BinaryOperator.SUM,
    TokenType.PRODUCT: BinaryOperator.PRODUCT,
    TokenType.QUOTIENT: BinaryOperator.QUOTIENT,
    TokenType.REMAINDER: BinaryOperator.REMAINDER,
}

_POSTFIX_OPERATORS = {
    TokenType.SQUARED: PostfixOperator.SQUARE,
    TokenType.CUBED: PostfixOperator.CUBE,
}

_RELATIONS = {
    TokenType.EQUALS: Relation.EQUALS,
    TokenType.EXCEEDS: Relation.EXCEEDS,
}

_PRECEDENCES = {
    TokenType.LESS: Precedence.INFIX,
    TokenType.SQUARED: Precedence.POSTFIX,
    TokenType.CUBED: Precedence.POSTFIX,
}

_EXPRESSION_START_TYPES = (
    CARDINAL_TYPES
    | {TokenType.NUMERAL, TokenType.STRING, TokenType.IDENT}
    | set(_UNARY_OPERATORS)
    | set(_BINARY_OPERATORS)
)


class Parser:
    """
    Parse tokens from a Lexer into a Resolution.

    Properties:
        stream: Two-token cursor over the lexer
        errors: Identifier discipline errors found so far, in order
        idents: Declared names and whether each has been used
    """

    def __init__(self, lexer: Lexer):
        self.stream = TokenStream(lexer)
        self.errors: List[IdentifierError] = []
        self.idents: Dict[str, IdentifierState] = {}

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    @property
    def cur(self) -> Token:
        return self.stream.cur

    @property
    def peek(self) -> Token:
        return self.stream.peek

    def _next(self) -> None:
        self.stream.advance()

    def _cur_is(self, token_type: TokenType) -> bool:
        return self.stream.cur_is(token_type)

    def _peek_is(self, token_type: TokenType) -> bool:
        return self.stream.peek_is(token_type)

    def _peek_at_boundary(self) -> bool:
        return self.peek.type in _BOUNDARY_TYPES

    # ------------------------------------------------------------------
    # Identifier discipline
    # ------------------------------------------------------------------

    def _declare(self, name: str) -> None:
        if name in self.idents:
            logger.debug("redeclared identifier %s", name)
            self.errors.append(RedeclaredError(name))
            return
        self.idents[name] = IdentifierState.DECLARED

    def _use(self, name: str) -> None:
        if name not in self.idents:
            logger.debug("undeclared identifier %s", name)
            self.errors.append(UndeclaredError(name))
            return
        self.idents[name] = IdentifierState.USED

    # ------------------------------------------------------------------
    # Resolution and clauses
    # ------------------------------------------------------------------

    def parse_resolution(self) -> Resolution:
        """
        Parse a complete Resolution.

        Returns:
            The Resolution

        Raises:
            NoTitleError: If the text does not begin with a title
            EarlyResolvedError: If a Resolved clause precedes every Whereas clause
            NoWhereasError: If there is no Whereas clause before a Resolved clause
            LateWhereasError: If a Whereas clause follows a Resolved clause
            NoResolvedError: If there is no Resolved clause
            ParseErrorList: If identifier discipline errors were found;
                the built Resolution is attached
        """
        if not self._cur_is(TokenType.COMMENT) and not self._cur_is(TokenType.IDENT):
            raise NoTitleError()

        whereas_stmts = []
        resolved_stmts = []
        have_whereas = False
        have_resolved = False

        while not self._cur_is(TokenType.EOF):
            if self._cur_is(TokenType.WHEREAS):
                if have_resolved:
                    raise LateWhereasError()
                have_whereas = True
                decl = self._parse_whereas_stmt()
                if decl is not None:
                    whereas_stmts.append(decl)
            elif self._cur_is(TokenType.RESOLVED):
                if not have_whereas:
                    self._reject_early_resolved()
                have_resolved = True
                stmt = self._parse_resolved_stmt()
                if stmt is not None:
                    resolved_stmts.append(stmt)
            self._next()

        if not have_resolved:
            raise NoResolvedError()

        for name, state in self.idents.items():
            if state == IdentifierState.DECLARED:
                self.errors.append(UnusedError(name))

        resolution = Resolution(
            whereas_stmts=tuple(whereas_stmts),
            resolved_stmts=tuple(resolved_stmts),
        )
        logger.debug(
            "parsed resolution: %d whereas, %d resolved, %d identifier errors",
            len(whereas_stmts), len(resolved_stmts), len(self.errors),
        )
        if self.errors:
            raise ParseErrorList(self.errors, resolution)
        return resolution

    def _reject_early_resolved(self) -> None:
        # A Whereas clause later in the text means the order is wrong;
        # none at all means it is missing.
        while not self._cur_is(TokenType.EOF):
            if self._cur_is(TokenType.WHEREAS):
                raise EarlyResolvedError()
            self._next()
        raise NoWhereasError()

    def _parse_whereas_stmt(self) -> Optional[DeclStmt]:
        while not self._peek_is(TokenType.HEREINAFTER):
            if self._peek_at_boundary():
                return None
            self._next()
        self._next()
        return self._parse_decl_stmt()

    def _parse_decl_stmt(self) -> DeclStmt:
        self._next()
        while not self._cur_is(TokenType.IDENT):
            if self.cur.type in _BOUNDARY_TYPES:
                raise UnrecognizedExpressionError(self.cur.literal)
            self._next()
        name = Identifier(self.cur.literal)
        self._next()
        value = self.parse_expression()
        self._declare(name.name)
        logger.debug("declared %s", name.name)
        return DeclStmt(name=name, value=value)

    def _parse_resolved_stmt(self) -> Optional[ResolvedStmt]:
        while True:
            if self._cur_is(TokenType.IDENT) and self._peek_is(TokenType.ASSUME):
                return self._parse_assume_stmt()
            if self._peek_is(TokenType.PUBLISH):
                self._next()
                return self._parse_publish_stmt()
            if self._peek_is(TokenType.IF):
                self._next()
                return self._parse_if_stmt()
            if self._peek_at_boundary():
                return None
            self._next()

    def _parse_assume_stmt(self) -> AssumeStmt:
        name = Identifier(self.cur.literal)
        self._use(name.name)
        self._next()
        self._next()
        return AssumeStmt(name=name, value=self.parse_expression())

    def _parse_publish_stmt(self) -> PublishStmt:
        self._next()
        return PublishStmt(value=self.parse_expression())

    def _parse_if_stmt(self) -> Optional[IfStmt]:
        # A conditional without a relation or consequence is dropped, and so
        # are the identifier uses found in its operands.
        saved_idents = dict(self.idents)
        saved_error_count = len(self.errors)

        def drop() -> None:
            self.idents = saved_idents
            del self.errors[saved_error_count:]

        self._next()
        left = self.parse_expression()

        while self.peek.type not in _RELATIONS:
            if self._peek_at_boundary():
                drop()
                return None
            self._next()
        self._next()
        relation = _RELATIONS[self.cur.type]

        self._next()
        right = self.parse_expression()

        consequence = self._parse_resolved_stmt()
        if consequence is None:
            drop()
            return None
        return IfStmt(left=left, right=right, relation=relation, consequence=consequence)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, precedence: Precedence = Precedence.LOWEST) -> Expression:
        """
        Parse an expression beginning at the current token.

        Filler before the expression is skipped. On return, the current
        token is the last token of the expression.

        Raises:
            UnrecognizedExpressionError: If a clause boundary comes first
            IntegerLiteralError: If an integer literal is malformed
        """
        left = self._parse_prefix()
        while precedence < self._peek_precedence():
            self._next()
            left = self._parse_suffix(left)
        return left

    def _peek_precedence(self) -> Precedence:
        return _PRECEDENCES.get(self.peek.type, Precedence.LOWEST)

    def _seek_expression(self) -> None:
        while self.cur.type not in _EXPRESSION_START_TYPES:
            if self.cur.type in _BOUNDARY_TYPES:
                raise UnrecognizedExpressionError(self.cur.literal)
            self._next()

    def _parse_prefix(self) -> Expression:
        self._seek_expression()
        token = self.cur

        if token.is_cardinal():
            return self._parse_integer_literal()
        if token.type == TokenType.NUMERAL:
            raise InvalidCardinalError(f"numeral {token.literal!r} without cardinal")
        if token.type == TokenType.STRING:
            return StringLiteral(token.literal)
        if token.type == TokenType.IDENT:
            self._use(token.literal)
            return Identifier(token.literal)

        if token.type in _UNARY_OPERATORS:
            self._next()
            operand = self.parse_expression(Precedence.PREFIX)
            return UnaryPrefixExpr(operator=_UNARY_OPERATORS[token.type], operand=operand)

        # Binary prefix: no separator between the operands
        self._next()
        first = self.parse_expression(Precedence.LOWEST)
        self._next()
        second = self.parse_expression(Precedence.PREFIX)
        return BinaryPrefixExpr(operator=_BINARY_OPERATORS[token.type], first=first, second=second)

    def _parse_suffix(self, left: Expression) -> Expression:
        token = self.cur
        if token.type == TokenType.LESS:
            self._next()
            right = self.parse_expression(Precedence.INFIX)
            return InfixExpr(operator=InfixOperator.SUBTRACT, left=left, right=right)
        return PostfixExpr(operator=_POSTFIX_OPERATORS[token.type], operand=left)

    def _parse_integer_literal(self) -> IntegerLiteral:
        cardinal = read_cardinal(self.stream)

        if not self._peek_is(TokenType.LPAREN):
            raise InvalidIntegerError("cardinal must be followed by a parenthesized numeral")
        self._next()

        if not self._peek_is(TokenType.NUMERAL) and not self._peek_is(TokenType.DASH):
            raise InvalidIntegerError("parentheses must contain a numeral")
        self._next()
        numeral = parse_numeral(self.cur.literal)

        if not self._peek_is(TokenType.RPAREN):
            raise InvalidIntegerError("numeral must be followed by ')'")
        self._next()

        if cardinal != numeral:
            raise DisagreementError(cardinal, numeral)
        return IntegerLiteral(cardinal)


def parse_string(source: str) -> Resolution:
    """
    Parse Resolution source text.

    Args:
        source: Resolution text

    Returns:
        Resolution

    Raises:
        WhereasError: Any lexical or parse error (see Parser.parse_resolution)
    """
    return Parser(Lexer(source)).parse_resolution()


def parse_file(filepath: str) -> Resolution:
    """
    Parse a Resolution file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        WhereasError: Any lexical or parse error
    """
    with open(filepath, "r", encoding="utf-8") as f:
        content = f.read()
    return parse_string(content)


__all__ = [
    "Parser",
    "Precedence",
    "IdentifierState",
    "parse_string",
    "parse_file",
]
