"""Text hygiene fixes for source files.

Lines are compared exactly by the diff engine, so a stray BOM, CRLF line
endings or trailing blanks show up as changed lines. `clean_text` removes
them and reports which fixes applied, in a fixed order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

LINE_ENDINGS = ("lf", "crlf")

# Blanks before any line break (CRLF, LF or lone CR) or the end of the text.
_TRAILING_WHITESPACE = re.compile(r"[ \t]+(?=\r|\n|\Z)")


@dataclass(frozen=True)
class CleanupResult:
    text: str
    fixes: tuple[str, ...]

    @property
    def changed(self) -> bool:
        return bool(self.fixes)


def clean_text(
    text: str,
    *,
    remove_bom: bool = True,
    remove_nul_bytes: bool = True,
    remove_trailing_whitespace: bool = True,
    normalize_line_endings: str | None = None,
) -> CleanupResult:
    """Apply the requested fixes; `fixes` lists the ids of those that changed something.

    Fix ids are `bom`, `nul`, `trailing_whitespace`, and `lf` or `crlf`.
    Raises ValueError for an unknown `normalize_line_endings`.
    """

    if normalize_line_endings is not None and normalize_line_endings not in LINE_ENDINGS:
        raise ValueError(f"unknown line ending style: {normalize_line_endings!r}")

    fixes: list[str] = []
    if remove_bom and text.startswith("\ufeff"):
        text = text[1:]
        fixes.append("bom")
    if remove_nul_bytes and "\0" in text:
        text = text.replace("\0", "")
        fixes.append("nul")
    if remove_trailing_whitespace:
        stripped = _TRAILING_WHITESPACE.sub("", text)
        if stripped != text:
            text = stripped
            fixes.append("trailing_whitespace")
    if normalize_line_endings:
        converted = text.replace("\r\n", "\n")
        if normalize_line_endings == "crlf":
            converted = converted.replace("\n", "\r\n")
        if converted != text:
            text = converted
            fixes.append(normalize_line_endings)
    return CleanupResult(text=text, fixes=tuple(fixes))
