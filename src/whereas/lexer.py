"""
Lexer for Resolution source text.

Scans the source one character at a time:
    - letters      -> keyword, IDENT or COMMENT (see tokens.lookup)
    - digits       -> NUMERAL (maximal run of digits, commas and dashes)
    - "-"          -> NUMERAL when a numeral character follows, else DASH
    - ( )          -> LPAREN / RPAREN
    - "..."        -> STRING
    - anything else -> a one-character COMMENT

Whitespace (space, tab, CR, LF) is skipped between tokens.
"""

from typing import Callable, List

from whereas.errors import UnterminatedStringError
from whereas.tokens import Token, TokenType, lookup


_WHITESPACE = " \t\r\n"
_EOF_TOKEN = Token(TokenType.EOF, "")


def _is_letter(ch: str) -> bool:
    return "A" <= ch <= "Z" or "a" <= ch <= "z"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_numeral(ch: str) -> bool:
    """Digits, delimiting commas, and negative signs may appear in a numeral."""
    return _is_digit(ch) or ch == "," or ch == "-"


class Lexer:
    """Tokenize a Resolution source string."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def _current(self) -> str:
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def _scan(self, accept: Callable[[str], bool]) -> str:
        start = self.pos
        while self.pos < len(self.source) and accept(self.source[self.pos]):
            self.pos += 1
        return self.source[start:self.pos]

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self.source[self.pos] in _WHITESPACE:
            self.pos += 1

    def next_token(self) -> Token:
        """
        Return the next token and advance past it.

        Returns an EOF token forever once the source is exhausted.

        Raises:
            UnterminatedStringError: If a string literal has no closing quote
        """
        self._skip_whitespace()
        ch = self._current()

        if ch == "":
            return _EOF_TOKEN

        if ch == '"':
            self.pos += 1
            literal = self._scan(lambda c: c != '"')
            if self.pos >= len(self.source):
                raise UnterminatedStringError(literal)
            self.pos += 1
            return Token(TokenType.STRING, literal)

        if ch == "(":
            self.pos += 1
            return Token(TokenType.LPAREN, ch)

        if ch == ")":
            self.pos += 1
            return Token(TokenType.RPAREN, ch)

        if ch == "-":
            self.pos += 1
            if _is_numeral(self._current()):
                return Token(TokenType.NUMERAL, "-" + self._scan(_is_numeral))
            return Token(TokenType.DASH, ch)

        if _is_letter(ch):
            word = self._scan(_is_letter)
            return Token(lookup(word), word)

        if _is_digit(ch):
            return Token(TokenType.NUMERAL, self._scan(_is_numeral))

        self.pos += 1
        return Token(TokenType.COMMENT, ch)


def tokenize(source: str) -> List[Token]:
    """Tokenize an entire source string, including the final EOF token."""
    lexer = Lexer(source)
    tokens: List[Token] = []
    while True:
        token = lexer.next_token()
        tokens.append(token)
        if token.type == TokenType.EOF:
            return tokens


class TokenStream:
    """
    Two-token lookahead cursor over a Lexer.

    Properties:
        cur: The token being parsed
        peek: The token after cur

    Parsing routines leave `cur` on the last token they consumed.
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.cur = _EOF_TOKEN
        self.peek = _EOF_TOKEN
        self.advance()
        self.advance()

    def advance(self) -> None:
        """Consume one token: peek becomes cur, and a new peek is lexed."""
        self.cur = self.peek
        self.peek = self.lexer.next_token()

    def cur_is(self, token_type: TokenType) -> bool:
        return self.cur.type == token_type

    def peek_is(self, token_type: TokenType) -> bool:
        return self.peek.type == token_type


__all__ = ["Lexer", "TokenStream", "tokenize"]
