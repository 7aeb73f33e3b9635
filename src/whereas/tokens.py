"""
Token model for Resolution source text.

Every byte of a Resolution ends up in some token. Most English filler
("the", "is", ":") becomes COMMENT noise that the parser skips; only
keywords, capitalized identifiers, numerals, strings and a little
punctuation carry meaning.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenType(Enum):
    """Lexical token kinds."""

    # Special
    EOF = "EOF"
    COMMENT = "COMMENT"

    # Identifiers and literals
    IDENT = "IDENT"
    INTEGER = "INTEGER"
    NUMERAL = "NUMERAL"
    STRING = "STRING"

    # Cardinal words
    NEGATIVE = "NEGATIVE"
    ZERO = "ZERO"
    ONES = "ONES"
    TEENS = "TEENS"
    TENS = "TENS"
    HUNDRED = "HUNDRED"
    POWER = "POWER"

    # Unary prefix operators
    TWICE = "TWICE"
    THRICE = "THRICE"

    # Binary prefix operators
    SUM = "SUM"
    PRODUCT = "PRODUCT"
    QUOTIENT = "QUOTIENT"
    REMAINDER = "REMAINDER"

    # Infix operator
    LESS = "LESS"

    # Postfix operators
    SQUARED = "SQUARED"
    CUBED = "CUBED"

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    DASH = "-"

    # Clause keywords
    WHEREAS = "WHEREAS"
    RESOLVED = "RESOLVED"
    HEREINAFTER = "HEREINAFTER"
    PUBLISH = "PUBLISH"
    ASSUME = "ASSUME"

    # Conditional keywords
    IF = "IF"
    EQUALS = "EQUALS"
    EXCEEDS = "EXCEEDS"


@dataclass(frozen=True)
class Token:
    """
    A single lexical token.

    Properties:
        type: TokenType
        literal: The source text of the token (string contents without quotes)
    """

    type: TokenType
    literal: str

    def is_cardinal(self) -> bool:
        """Report whether this token is one of the cardinal number words."""
        return self.type in CARDINAL_TYPES


CARDINAL_TYPES = frozenset({
    TokenType.NEGATIVE,
    TokenType.ZERO,
    TokenType.ONES,
    TokenType.TEENS,
    TokenType.TENS,
    TokenType.HUNDRED,
    TokenType.POWER,
})


KEYWORDS: Dict[str, TokenType] = {
    "negative": TokenType.NEGATIVE,
    "zero": TokenType.ZERO,
    "one": TokenType.ONES,
    "two": TokenType.ONES,
    "three": TokenType.ONES,
    "four": TokenType.ONES,
    "five": TokenType.ONES,
    "six": TokenType.ONES,
    "seven": TokenType.ONES,
    "eight": TokenType.ONES,
    "nine": TokenType.ONES,
    "ten": TokenType.TEENS,
    "eleven": TokenType.TEENS,
    "twelve": TokenType.TEENS,
    "thirteen": TokenType.TEENS,
    "fourteen": TokenType.TEENS,
    "fifteen": TokenType.TEENS,
    "sixteen": TokenType.TEENS,
    "seventeen": TokenType.TEENS,
    "eighteen": TokenType.TEENS,
    "nineteen": TokenType.TEENS,
    "twenty": TokenType.TENS,
    "thirty": TokenType.TENS,
    "forty": TokenType.TENS,
    "fifty": TokenType.TENS,
    "sixty": TokenType.TENS,
    "seventy": TokenType.TENS,
    "eighty": TokenType.TENS,
    "ninety": TokenType.TENS,
    "hundred": TokenType.HUNDRED,
    "thousand": TokenType.POWER,
    "million": TokenType.POWER,
    "billion": TokenType.POWER,
    "trillion": TokenType.POWER,
    "quadrillion": TokenType.POWER,
    "quintillion": TokenType.POWER,

    "twice": TokenType.TWICE,
    "thrice": TokenType.THRICE,
    "sum": TokenType.SUM,
    "product": TokenType.PRODUCT,
    "quotient": TokenType.QUOTIENT,
    "remainder": TokenType.REMAINDER,
    "less": TokenType.LESS,
    "squared": TokenType.SQUARED,
    "cubed": TokenType.CUBED,

    "whereas": TokenType.WHEREAS,
    "resolved": TokenType.RESOLVED,
    "hereinafter": TokenType.HEREINAFTER,
    "publish": TokenType.PUBLISH,
    "assume": TokenType.ASSUME,

    "if": TokenType.IF,
    "equals": TokenType.EQUALS,
    "exceeds": TokenType.EXCEEDS,
}


def lookup(word: str) -> TokenType:
    """
    Classify a run of letters.

    Keywords match case-insensitively. Any other word is an IDENT if it
    begins with a capital letter and COMMENT otherwise.
    """
    keyword = KEYWORDS.get(word.lower())
    if keyword is not None:
        return keyword
    if "A" <= word[0] <= "Z":
        return TokenType.IDENT
    return TokenType.COMMENT


__all__ = ["TokenType", "Token", "CARDINAL_TYPES", "KEYWORDS", "lookup"]
