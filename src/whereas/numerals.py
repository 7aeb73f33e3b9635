"""
Integer literal codec: English cardinals <-> int64 <-> comma-grouped numerals.

Every integer in a Resolution is written twice, once in words and once in
digits, e.g. "ninety-nine (99)". This module parses each form on its own and
renders integers back into the combined form.

Both parsers enforce signed 64-bit range exactly:
    INT64_MIN = -9,223,372,036,854,775,808
    INT64_MAX =  9,223,372,036,854,775,807

Round trip guarantee, for every int64 v:
    parse_cardinal(render_cardinal(v)) == v
    parse_numeral(render_numeral(v)) == v
"""

from typing import Dict, List

from whereas.errors import InvalidCardinalError, InvalidNumeralError
from whereas.lexer import Lexer, TokenStream
from whereas.tokens import TokenType


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

QUINTILLION = 10 ** 18

# ─── Word Tables ─────────────────────────────────────────────────────

_ONES = ["", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
_TEENS = ["ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen",
          "sixteen", "seventeen", "eighteen", "nineteen"]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]
_POWERS = ["", "thousand", "million", "billion", "trillion", "quadrillion", "quintillion"]

WORD_VALUES: Dict[str, int] = {}
WORD_VALUES.update({word: i for i, word in enumerate(_ONES) if word})
WORD_VALUES.update({word: 10 + i for i, word in enumerate(_TEENS)})
WORD_VALUES.update({word: 10 * i for i, word in enumerate(_TENS) if word})
WORD_VALUES.update({word: 1000 ** i for i, word in enumerate(_POWERS) if word})
WORD_VALUES["hundred"] = 100

_TENS_UNIT_TYPES = frozenset({TokenType.ONES, TokenType.TEENS, TokenType.TENS})


def in_int64_range(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX


def _word_value(literal: str) -> int:
    return WORD_VALUES[literal.lower()]


# ─── Cardinal Parsing ────────────────────────────────────────────────


def read_cardinal(stream: TokenStream) -> int:
    """
    Read a cardinal starting at stream.cur.

    Grammar:
        cardinal := "zero"
                  | ["negative"] group [power] { group [power] }
        group    := ONES ["hundred" [tens_unit]] | tens_unit
        tens_unit := ONES | TEENS | TENS ["-" ONES]

    Rules:
        - Each power must be strictly smaller than the one before it
        - Only a single digit may precede "quintillion"
        - The running total must stay within int64 at every step

    Leaves stream.cur on the last word of the cardinal.

    Raises:
        InvalidCardinalError: If the words do not form a valid int64 cardinal
    """
    if stream.cur_is(TokenType.ZERO):
        return 0

    negative = False
    if stream.cur_is(TokenType.NEGATIVE):
        negative = True
        stream.advance()

    total = 0
    last_power = None
    while True:
        group = _read_three_digit_group(stream)

        power = 1
        if stream.peek_is(TokenType.POWER):
            stream.advance()
            power = _word_value(stream.cur.literal)

        if power == QUINTILLION and group > 9:
            raise InvalidCardinalError(f"{group} quintillion is out of range")
        if last_power is not None and power >= last_power:
            raise InvalidCardinalError(f"magnitude {power} follows magnitude {last_power}")
        last_power = power

        total += -group * power if negative else group * power
        if not in_int64_range(total):
            raise InvalidCardinalError("overflow")

        if power == 1 or stream.peek.type not in _TENS_UNIT_TYPES:
            return total
        stream.advance()


def _read_three_digit_group(stream: TokenStream) -> int:
    token = stream.cur
    if token.type == TokenType.ONES:
        n = _word_value(token.literal)
        if stream.peek_is(TokenType.HUNDRED):
            stream.advance()
            n *= 100
            if stream.peek.type in _TENS_UNIT_TYPES:
                stream.advance()
                n += _read_two_digit_group(stream)
        return n
    if token.type in (TokenType.TEENS, TokenType.TENS):
        return _read_two_digit_group(stream)
    raise InvalidCardinalError(f"unexpected {token.literal!r}")


def _read_two_digit_group(stream: TokenStream) -> int:
    token = stream.cur
    if token.type in (TokenType.ONES, TokenType.TEENS):
        return _word_value(token.literal)
    if token.type == TokenType.TENS:
        n = _word_value(token.literal)
        if stream.peek_is(TokenType.DASH):
            stream.advance()
            if not stream.peek_is(TokenType.ONES):
                raise InvalidCardinalError(f"{token.literal}- must be followed by a digit word")
            stream.advance()
            n += _word_value(stream.cur.literal)
        return n
    raise InvalidCardinalError(f"unexpected {token.literal!r}")


def parse_cardinal(text: str) -> int:
    """
    Parse a standalone cardinal such as "negative one hundred one".

    Raises:
        InvalidCardinalError: If text is not exactly one valid cardinal
    """
    stream = TokenStream(Lexer(text))
    value = read_cardinal(stream)
    if not stream.peek_is(TokenType.EOF):
        raise InvalidCardinalError(f"unexpected {stream.peek.literal!r}")
    return value


# ─── Numeral Parsing ─────────────────────────────────────────────────


def parse_numeral(numeral: str) -> int:
    """
    Parse a comma-grouped numeral such as "-1,000,001".

    Rules:
        - "0" is the only numeral that may begin with 0, and it has no signed form
        - A leading "-" marks a negative number
        - Commas delimit every group of three digits, counted from the right,
          and appear nowhere else
        - The value must fit in int64

    Raises:
        InvalidNumeralError: If the numeral is malformed or out of range
    """
    if numeral == "0":
        return 0

    digits = numeral
    negative = digits.startswith("-")
    if negative:
        digits = digits[1:]

    if not digits or not "1" <= digits[0] <= "9":
        raise InvalidNumeralError(numeral)

    value = 0
    comma_slot = len(digits) % 4
    for i, ch in enumerate(digits):
        if i % 4 == comma_slot:
            if ch != ",":
                raise InvalidNumeralError(numeral)
            continue
        if not "0" <= ch <= "9":
            raise InvalidNumeralError(numeral)

        digit = ord(ch) - ord("0")
        value = 10 * value - digit if negative else 10 * value + digit
        if not in_int64_range(value):
            raise InvalidNumeralError(numeral)

    return value


# ─── Rendering ───────────────────────────────────────────────────────


def _check_range(n: int) -> None:
    if not in_int64_range(n):
        raise ValueError(f"{n} is outside the int64 range")


def _three_digit_words(n: int) -> List[str]:
    words = []
    if n >= 100:
        words.append(_ONES[n // 100])
        words.append("hundred")
        n %= 100
    if n == 0:
        return words
    if n < 10:
        words.append(_ONES[n])
    elif n < 20:
        words.append(_TEENS[n - 10])
    elif n % 10 == 0:
        words.append(_TENS[n // 10])
    else:
        words.append(f"{_TENS[n // 10]}-{_ONES[n % 10]}")
    return words


def render_cardinal(n: int) -> str:
    """Render n in words, e.g. -21 -> "negative twenty-one"."""
    _check_range(n)
    if n == 0:
        return "zero"

    groups = []
    magnitude = abs(n)
    while magnitude:
        magnitude, group = divmod(magnitude, 1000)
        groups.append(group)

    words = ["negative"] if n < 0 else []
    for power in range(len(groups) - 1, -1, -1):
        group = groups[power]
        if group == 0:
            continue
        words.extend(_three_digit_words(group))
        if power > 0:
            words.append(_POWERS[power])
    return " ".join(words)


def render_numeral(n: int) -> str:
    """Render n in comma-grouped digits, e.g. -1000 -> "-1,000"."""
    _check_range(n)
    return f"{n:,}"


def render_integer(n: int) -> str:
    """
    Render n the way integer literals are written.

    Examples:
        0      -> "zero (0)"
        121001 -> "one hundred twenty-one thousand one (121,001)"
        -1     -> "negative one (-1)"
    """
    return f"{render_cardinal(n)} ({render_numeral(n)})"


__all__ = [
    "INT64_MIN",
    "INT64_MAX",
    "read_cardinal",
    "parse_cardinal",
    "parse_numeral",
    "render_cardinal",
    "render_numeral",
    "render_integer",
]
