"""Tests for vicissicalc.calc lexer."""

from __future__ import annotations

import pytest

from vicissicalc.calc._lexer import Token, TokenKind, scan, skip_blanks, tokenize


def _kinds(text: str) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.text) for t in tokenize(text)]


class TestNumbers:
    @pytest.mark.parametrize(
        "text,value",
        [
            ("42", 42.0),
            ("3.25", 3.25),
            ("1.", 1.0),
            ("1e3", 1000.0),
            ("2.5E-2", 0.025),
            ("7e+1", 70.0),
        ],
    )
    def test_number_forms(self, text: str, value: float) -> None:
        token, pos = scan(text, 0)
        assert token.kind is TokenKind.NUMBER
        assert token.value == value
        assert pos == len(text)

    def test_greedy_match_stops_at_operator(self) -> None:
        token, pos = scan("12.5+1", 0)
        assert token.value == 12.5
        assert pos == 4

    def test_dangling_exponent_not_consumed(self) -> None:
        token, pos = scan("1e", 0)
        assert token.value == 1.0
        assert pos == 1

    def test_leading_dot_is_invalid(self) -> None:
        token, _ = scan(".5", 0)
        assert token.kind is TokenKind.INVALID


class TestOperators:
    def test_all_single_char_tokens(self) -> None:
        ops = [t.text for t in tokenize("+ - * / % ^ @ ( ) c r")[:-1]]
        assert ops == ["+", "-", "*", "/", "%", "^", "@", "(", ")", "c", "r"]

    def test_no_blanks_needed(self) -> None:
        assert _kinds("r@c") == [
            (TokenKind.OPERATOR, "r"),
            (TokenKind.OPERATOR, "@"),
            (TokenKind.OPERATOR, "c"),
            (TokenKind.END, ""),
        ]

    def test_is_op(self) -> None:
        token, _ = scan("(", 0)
        assert token.is_op("(")
        assert not token.is_op(")")
        assert not Token(TokenKind.NUMBER, "1", 1.0).is_op("1")


class TestEndAndInvalid:
    def test_empty_is_end(self) -> None:
        token, pos = scan("", 0)
        assert token.kind is TokenKind.END
        assert pos == 0

    def test_blanks_only_is_end(self) -> None:
        token, _ = scan(" \t\r\n\f\v", 0)
        assert token.kind is TokenKind.END

    def test_comment_ends_input(self) -> None:
        assert _kinds("1 # 2 + 3") == [(TokenKind.NUMBER, "1"), (TokenKind.END, "")]

    def test_unknown_char_stays_put(self) -> None:
        token, pos = scan("  x+1", 0)
        assert token.kind is TokenKind.INVALID
        assert token.text == "x"
        assert pos == 2

    def test_tokenize_stops_at_invalid(self) -> None:
        tokens = tokenize("1 + ? 2")
        assert tokens[-1].kind is TokenKind.INVALID
        assert len(tokens) == 3

    def test_uppercase_keywords_are_invalid(self) -> None:
        token, _ = scan("R", 0)
        assert token.kind is TokenKind.INVALID


class TestSkipBlanks:
    def test_skips_from_position(self) -> None:
        assert skip_blanks("a   b", 1) == 4

    def test_at_end(self) -> None:
        assert skip_blanks("   ") == 3
