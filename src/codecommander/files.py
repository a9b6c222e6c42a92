"""File acquisition for the text tools.

Errors raised here carry a localized, user-facing message; the diff engine
only ever sees lines that were read successfully.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Sequence
from pathlib import Path

from codecommander.errors import CodeCommanderInputError, CodeCommanderInputTooLargeError
from codecommander.i18n import translate

logger = logging.getLogger("codecommander.files")

_LINE_BREAK = re.compile(r"\r?\n")


def normalize_path(raw: str | os.PathLike[str]) -> Path:
    return Path(os.path.normpath(os.fspath(raw)))


def split_lines(text: str) -> list[str]:
    """Naive line split: a trailing line break leaves a trailing empty line."""
    return _LINE_BREAK.split(text)


def read_text(path: str | os.PathLike[str]) -> str:
    p = normalize_path(path)
    if not p.exists():
        raise CodeCommanderInputError(translate("common.file_not_found", path=p))
    if not p.is_file():
        raise CodeCommanderInputError(translate("common.not_a_file", path=p))
    try:
        # newline="" keeps CRLF and lone CR intact.
        with p.open(encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise CodeCommanderInputError(translate("common.not_utf8", path=p)) from e
    except OSError as e:
        raise CodeCommanderInputError(
            translate("common.read_failed", path=p, reason=e.strerror or e)
        ) from e


def read_lines(path: str | os.PathLike[str]) -> list[str]:
    lines = split_lines(read_text(path))
    logger.debug("read %d line(s) from %s", len(lines), path)
    return lines


def guard_size(lines_a: Sequence[str], lines_b: Sequence[str], max_lines: int) -> None:
    """Reject inputs whose combined line count exceeds `max_lines` (0 = no limit)."""

    total = len(lines_a) + len(lines_b)
    if max_lines and total > max_lines:
        logger.warning("refusing to diff %d lines (limit %d)", total, max_lines)
        raise CodeCommanderInputTooLargeError(
            translate("common.too_large", lines=total, limit=max_lines)
        )


def write_text(path: str | os.PathLike[str], content: str) -> None:
    p = normalize_path(path)
    try:
        with p.open("w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise CodeCommanderInputError(
            translate("common.write_failed", path=p, reason=e.strerror or e)
        ) from e
    logger.debug("wrote %d char(s) to %s", len(content), p)
