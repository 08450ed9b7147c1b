"""EDN tokenizer.

Recognizes one token at a time at the current position by trying an ordered
list of anchored regular expressions. Every pattern also consumes the
whitespace and commas that follow it, so the reader only ever sees
significant tokens. Comments are consumed here and never surface.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from enum import Enum
from typing import Any, NamedTuple

from edn_py.edn.types import NAMED_CHARS, Char, Keyword, Kind, Symbol
from edn_py.exceptions import EDNLiteralError

_WS = r"[ \t\r\n,]*"

# Characters allowed after the first character of a symbol name
_BODY = r"[.*+!\-_?$%&=<>:#a-zA-Z0-9]"
# A name may not start with a digit; +, - and . may not be followed by one
_START = r"(?:[.+\-](?![0-9])|[*!_?$%&=<>a-zA-Z])"
_NAME = rf"{_START}{_BODY}*"
# No symbol constituent (or namespace separator) may directly follow a token
_END = r"(?![/.*+!\-_?$%&=<>:#a-zA-Z0-9])"
_SYMBOL = rf"(?:{_NAME}/)?{_NAME}|/"
_INT = r"[+-]?(?:0|[1-9][0-9]*)"
_EXP = r"[eE][+-]?[0-9]+"

LEADING_WS = re.compile(_WS)

SET_OPEN = re.compile(r"#\{" + _WS)
LIST_OPEN = re.compile(r"\(" + _WS)
VECTOR_OPEN = re.compile(r"\[" + _WS)
MAP_OPEN = re.compile(r"\{" + _WS)
CLOSE = re.compile(r"[)\]}]" + _WS)
STRING = re.compile(r'"((?:\\.|[^"\\])*)"' + _WS, re.DOTALL)
CHAR = re.compile(r"\\([a-zA-Z0-9]+)" + _WS)
NIL = re.compile(r"nil" + _END + _WS)
TRUE = re.compile(r"true" + _END + _WS)
FALSE = re.compile(r"false" + _END + _WS)
FLOAT = re.compile(
    rf"({_INT}(?:\.[0-9]+(?:{_EXP})?|{_EXP})M?|{_INT}M)" + _END + _WS
)
INTEGER = re.compile(rf"({_INT})N?" + _END + _WS)
SYMBOL = re.compile(rf"({_SYMBOL})" + _END + _WS)
KEYWORD = re.compile(rf":({_SYMBOL})" + _END + _WS)
COMMENT = re.compile(r";[^\n]*(?:\n|\Z)" + _WS)
TAG = re.compile(rf"#([a-zA-Z]{_BODY}*(?:/{_NAME})?)" + _END + _WS)

_UNICODE_CHAR = re.compile(r"u[0-9a-fA-F]{4}")

_STRING_ESCAPES = {
    "t": "\t",
    "r": "\r",
    "n": "\n",
    "b": "\b",
    "f": "\f",
    '"': '"',
    "\\": "\\",
}


class TokenType(Enum):
    """Kinds of token produced by :class:`EdnLexer`."""

    OPEN = "open"
    CLOSE = "close"
    SCALAR = "scalar"
    TAG = "tag"
    COMMENT = "comment"


class Token(NamedTuple):
    """A recognized token.

    ``value`` is the :class:`Kind` for openers, the closing character for
    closers, the tag name for tags and the decoded value for scalars.
    """

    type: TokenType
    value: Any
    pos: int


def decode_string(raw: str, pos: int) -> str:
    """Decode the escape sequences of a string literal body."""
    if "\\" not in raw:
        return raw
    chars = []
    i = 0
    while i < len(raw):
        c = raw[i]
        if c != "\\":
            chars.append(c)
            i += 1
            continue
        escape = raw[i + 1]
        if escape == "u":
            digits = raw[i + 2 : i + 6]
            if not _UNICODE_CHAR.fullmatch("u" + digits):
                raise EDNLiteralError(
                    f"Invalid unicode escape in string at position {pos}"
                )
            chars.append(chr(int(digits, 16)))
            i += 6
            continue
        # Unknown escapes keep the escaped character
        chars.append(_STRING_ESCAPES.get(escape, escape))
        i += 2
    return "".join(chars)


def decode_char(name: str, pos: int) -> Char:
    """Resolve the name of a character literal (the text after ``\\``)."""
    if name == "c":
        raise EDNLiteralError(
            f"The \\c character literal is not supported at position {pos}"
        )
    if name in NAMED_CHARS:
        return Char(NAMED_CHARS[name])
    if _UNICODE_CHAR.fullmatch(name):
        return Char(chr(int(name[1:], 16)))
    raise EDNLiteralError(f"Invalid character literal \\{name} at position {pos}")


def _opener(kind: Kind) -> Callable[[re.Match[str], int], Kind]:
    return lambda match, pos: kind


class EdnLexer:
    """EDN tokenizer.

    Iterating over a lexer yields :class:`Token` objects in input order.

    Attributes:
        s: The EDN string being tokenized.
        pos: Current position in the string.
        length: Length of the input string.
    """

    def __init__(self, s: str):
        self.s = s
        self.pos = 0
        self.length = len(s)

        # Order resolves ambiguity: structure first, then literals from the
        # most specific form to the most general.
        self._matchers: list[
            tuple[re.Pattern[str], TokenType, Callable[[re.Match[str], int], Any]]
        ] = [
            (SET_OPEN, TokenType.OPEN, _opener(Kind.SET)),
            (LIST_OPEN, TokenType.OPEN, _opener(Kind.LIST)),
            (VECTOR_OPEN, TokenType.OPEN, _opener(Kind.VECTOR)),
            (MAP_OPEN, TokenType.OPEN, _opener(Kind.MAP)),
            (CLOSE, TokenType.CLOSE, lambda m, pos: m.group(0)[0]),
            (STRING, TokenType.SCALAR, lambda m, pos: decode_string(m.group(1), pos)),
            (CHAR, TokenType.SCALAR, lambda m, pos: decode_char(m.group(1), pos)),
            (NIL, TokenType.SCALAR, lambda m, pos: None),
            (TRUE, TokenType.SCALAR, lambda m, pos: True),
            (FALSE, TokenType.SCALAR, lambda m, pos: False),
            (FLOAT, TokenType.SCALAR, lambda m, pos: float(m.group(1).rstrip("M"))),
            (INTEGER, TokenType.SCALAR, lambda m, pos: int(m.group(1))),
            (SYMBOL, TokenType.SCALAR, lambda m, pos: Symbol(m.group(1))),
            (KEYWORD, TokenType.SCALAR, lambda m, pos: Keyword(m.group(1))),
            (COMMENT, TokenType.COMMENT, lambda m, pos: None),
            (TAG, TokenType.TAG, lambda m, pos: m.group(1)),
        ]

    def __iter__(self) -> Iterator[Token]:
        self.pos = LEADING_WS.match(self.s).end()
        while self.pos < self.length:
            token = self.next_token()
            if token.type is not TokenType.COMMENT:
                yield token

    def next_token(self) -> Token:
        """Recognize and consume the token at the current position.

        Raises:
            EDNLiteralError: If no known form starts at the current position.
        """
        for pattern, token_type, convert in self._matchers:
            match = pattern.match(self.s, self.pos)
            if match is None:
                continue
            start = self.pos
            self.pos = match.end()
            return Token(token_type, convert(match, start), start)
        raise self._unrecognized()

    def _unrecognized(self) -> EDNLiteralError:
        remainder = self.s[self.pos : self.pos + 30]
        if remainder.startswith('"'):
            return EDNLiteralError(f"Unterminated string at position {self.pos}")
        if len(remainder) == 30:
            remainder += "..."
        return EDNLiteralError(f"Cannot parse {remainder!r} at position {self.pos}")
