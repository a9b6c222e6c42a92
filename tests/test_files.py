from __future__ import annotations

from pathlib import Path

import pytest

from codecommander import i18n
from codecommander.errors import CodeCommanderInputError, CodeCommanderInputTooLargeError
from codecommander.files import (
    guard_size,
    normalize_path,
    read_lines,
    read_text,
    split_lines,
    write_text,
)


def test_split_lines_keeps_trailing_empty_line() -> None:
    assert split_lines("a\nb\n") == ["a", "b", ""]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("") == [""]


def test_split_lines_accepts_crlf() -> None:
    assert split_lines("a\r\nb\r\n") == ["a", "b", ""]
    # A lone carriage return is line content, not a break.
    assert split_lines("a\rb") == ["a\rb"]


def test_normalize_path_collapses_dots(tmp_path: Path) -> None:
    raw = str(tmp_path / "x" / ".." / "f.txt")
    assert normalize_path(raw) == tmp_path / "f.txt"


def test_read_lines(tmp_path: Path) -> None:
    p = tmp_path / "f.txt"
    p.write_text("one\ntwo  \n", encoding="utf-8")
    assert read_lines(p) == ["one", "two  ", ""]


def test_read_lines_missing_file_is_localized(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"
    with pytest.raises(CodeCommanderInputError) as exc:
        read_lines(missing)
    assert "File not found" in str(exc.value)
    assert "nope.txt" in str(exc.value)

    i18n.set_language("de")
    with pytest.raises(CodeCommanderInputError) as exc:
        read_lines(missing)
    assert "Datei nicht gefunden" in str(exc.value)


def test_read_lines_rejects_directory(tmp_path: Path) -> None:
    with pytest.raises(CodeCommanderInputError) as exc:
        read_lines(tmp_path)
    assert "Not a file" in str(exc.value)


def test_read_lines_rejects_non_utf8(tmp_path: Path) -> None:
    p = tmp_path / "latin1.txt"
    p.write_bytes("caf\xe9\n".encode("latin-1"))
    with pytest.raises(CodeCommanderInputError) as exc:
        read_lines(p)
    assert "UTF-8" in str(exc.value)


def test_guard_size_allows_inputs_up_to_limit() -> None:
    guard_size(["a", "b"], ["c"], 3)
    guard_size(["a"] * 100, ["b"] * 100, 0)


def test_guard_size_rejects_oversized_inputs() -> None:
    with pytest.raises(CodeCommanderInputTooLargeError) as exc:
        guard_size(["a", "b"], ["c", "d"], 3)
    assert "4 lines" in str(exc.value)
    assert isinstance(exc.value, CodeCommanderInputError)


def test_read_lines_keeps_carriage_returns(tmp_path: Path) -> None:
    p = tmp_path / "f.txt"
    p.write_bytes(b"a\r\nb\rc\n")
    assert read_text(p) == "a\r\nb\rc\n"
    assert read_lines(p) == ["a", "b\rc", ""]


def test_write_text_preserves_line_endings(tmp_path: Path) -> None:
    p = tmp_path / "out.txt"
    write_text(p, "a\r\nb\n")
    assert p.read_bytes() == b"a\r\nb\n"


def test_write_text_failure_is_localized(tmp_path: Path) -> None:
    with pytest.raises(CodeCommanderInputError) as exc:
        write_text(tmp_path / "missing" / "out.txt", "x")
    assert "Could not write" in str(exc.value)
