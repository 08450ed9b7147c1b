"""Tests for the EDN tokenizer."""

import pytest

from edn_py.edn import EdnLexer, Keyword, Kind, Symbol, TokenType
from edn_py.edn.lexer import decode_char, decode_string
from edn_py.exceptions import EDNLiteralError


def tokens(text: str) -> list[tuple[TokenType, object]]:
    return [(t.type, t.value) for t in EdnLexer(text)]


class TestEdnLexer:
    """Tests for token recognition."""

    def test_structure_tokens(self):
        """Test openers and closers."""
        assert tokens("#{ ( [ { } ] ) }") == [
            (TokenType.OPEN, Kind.SET),
            (TokenType.OPEN, Kind.LIST),
            (TokenType.OPEN, Kind.VECTOR),
            (TokenType.OPEN, Kind.MAP),
            (TokenType.CLOSE, "}"),
            (TokenType.CLOSE, "]"),
            (TokenType.CLOSE, ")"),
            (TokenType.CLOSE, "}"),
        ]

    def test_tag_token(self):
        """Test that a tag is its own token."""
        assert tokens('#inst "x"') == [
            (TokenType.TAG, "inst"),
            (TokenType.SCALAR, "x"),
        ]
        assert tokens("#my.app/Point[1]")[0] == (TokenType.TAG, "my.app/Point")

    def test_comments_are_dropped(self):
        """Test that comments never surface as tokens."""
        assert tokens("; a\n1 ; b\n; c") == [(TokenType.SCALAR, 1)]

    def test_positions(self):
        """Test that tokens record where they start."""
        assert [t.pos for t in EdnLexer("  [1,  foo]")] == [2, 3, 7, 10]

    def test_scalar_types(self):
        """Test the Python types produced for scalars."""
        values = [t.value for t in EdnLexer('1 1.0 "s" sym :kw nil')]
        assert [type(v) for v in values] == [int, float, str, Symbol, Keyword, type(None)]

    def test_numbers_before_symbols(self):
        """Test sign handling between numbers and symbols."""
        assert tokens("-1 - -a +2.5") == [
            (TokenType.SCALAR, -1),
            (TokenType.SCALAR, Symbol("-")),
            (TokenType.SCALAR, Symbol("-a")),
            (TokenType.SCALAR, 2.5),
        ]

    def test_unrecognized(self):
        """Test that unrecognized input raises with the remainder."""
        with pytest.raises(EDNLiteralError, match="Cannot parse '~x'"):
            tokens("1 ~x")


class TestDecoding:
    """Tests for literal decoding helpers."""

    def test_decode_string_escapes(self):
        """Test the supported string escapes."""
        assert decode_string(r"a\tb\nc\\d\"eA", 0) == 'a\tb\nc\\d"eA'

    def test_decode_string_unknown_escape(self):
        """Test that unknown escapes keep the character."""
        assert decode_string(r"\q", 0) == "q"

    def test_decode_string_bad_unicode(self):
        """Test that a short unicode escape is rejected."""
        with pytest.raises(EDNLiteralError, match="unicode escape"):
            decode_string(r"\u12", 0)

    def test_decode_char(self):
        """Test named and unicode characters."""
        assert decode_char("tab", 0) == "\t"
        assert decode_char("u00e9", 0) == "é"
