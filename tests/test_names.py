"""Tests for name character classification."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from gsp.names import is_name_char, is_name_start_char, is_valid_name


class TestNameStartChar:
    def test_accepts_letters_colon_underscore(self) -> None:
        for char in "HELLO_th:re_wörld":
            assert is_name_start_char(char), char

    @pytest.mark.parametrize("char", list("0123456789-.·{}@ \"") + ["\u0301", "\u203f"])
    def test_rejects(self, char: str) -> None:
        assert not is_name_start_char(char)

    @pytest.mark.parametrize("char", ["ç", "Ω", "ж", "中", "\U00010400"])
    def test_accepts_extended_ranges(self, char: str) -> None:
        assert is_name_start_char(char)

    def test_range_edges(self) -> None:
        assert not is_name_start_char("×")  # multiplication sign
        assert not is_name_start_char("÷")  # division sign
        assert not is_name_start_char("\u037e")  # Greek question mark
        assert is_name_start_char("\u037f")
        assert not is_name_start_char("\u3000")
        assert is_name_start_char("\u3001")

    def test_rejects_eof_and_multiple_chars(self) -> None:
        assert not is_name_start_char("")
        assert not is_name_start_char("ab")


class TestNameChar:
    def test_accepts_name_chars(self) -> None:
        for char in "hello69-th.re-wörld":
            assert is_name_char(char), char

    @pytest.mark.parametrize("char", ["\u00b7", "\u0300", "\u036f", "\u203f", "\u2040"])
    def test_accepts_continuation_only_chars(self, char: str) -> None:
        assert is_name_char(char)
        assert not is_name_start_char(char)

    @pytest.mark.parametrize("char", list(" \t\n{}=\"#@!?>/"))
    def test_rejects_punctuation(self, char: str) -> None:
        assert not is_name_char(char)

    @given(st.characters())
    def test_start_chars_are_name_chars(self, char: str) -> None:
        if is_name_start_char(char):
            assert is_name_char(char)


class TestValidName:
    @pytest.mark.parametrize("name", ["ta-g2", "div", "svg:rect", "_x", "data-foo.bar", "wörld"])
    def test_valid(self, name: str) -> None:
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["123tag", "", "-x", ".x", "a b", "a{"])
    def test_invalid(self, name: str) -> None:
        assert not is_valid_name(name)
