from __future__ import annotations

import pytest

from codecommander.cleanup import clean_text


def test_clean_text_applies_fixes_in_order() -> None:
    result = clean_text("\ufeffa\0b  \r\nc\t\r\n", normalize_line_endings="lf")
    assert result.text == "ab\nc\n"
    assert result.fixes == ("bom", "nul", "trailing_whitespace", "lf")
    assert result.changed


def test_clean_text_leaves_line_endings_alone_by_default() -> None:
    result = clean_text("a\r\nb\n")
    assert result.text == "a\r\nb\n"
    assert result.fixes == ()
    assert not result.changed


def test_trailing_whitespace_before_any_line_break() -> None:
    assert clean_text("a \rb\t\nc  ").text == "a\rb\nc"
    # Blank lines keep their break.
    assert clean_text("a\n   \nb").text == "a\n\nb"


def test_crlf_normalization_does_not_double_existing_crlf() -> None:
    result = clean_text("a\r\nb\nc", normalize_line_endings="crlf")
    assert result.text == "a\r\nb\r\nc"
    assert result.fixes == ("crlf",)
    assert clean_text("a\r\n", normalize_line_endings="crlf").fixes == ()


def test_disabled_fixes_are_skipped() -> None:
    text = "\ufeffx \0\n"
    result = clean_text(
        text, remove_bom=False, remove_nul_bytes=False, remove_trailing_whitespace=False
    )
    assert result.text == text
    assert result.fixes == ()


def test_unknown_line_ending_style() -> None:
    with pytest.raises(ValueError):
        clean_text("x", normalize_line_endings="cr")
