"""User-facing reports for the CodeCommander tools.

Each function returns localized markdown text and raises a
`CodeCommanderError` subclass (with an already-localized message) when the
request cannot be served. The MCP server and the CLI are thin wrappers
around these.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from codecommander.cleanup import LINE_ENDINGS, clean_text
from codecommander.diff import DEFAULT_CONTEXT, DiffResult, compute_diff
from codecommander.errors import CodeCommanderInputError, CodeCommanderPatternError
from codecommander.files import guard_size, normalize_path, read_lines, read_text, write_text
from codecommander.i18n import get_language, set_language, translate

logger = logging.getLogger("codecommander.reports")

DEFAULT_MAX_LINES = 4000
MAX_LISTED_MATCHES = 50

# JavaScript flag letters accepted by `cc_regex_test`, plus Python's `x`
# (verbose). `g` is handled separately; `u`, `y`, `d` and `v` have no Python
# counterpart and are ignored.
_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
    "y": 0,
    "d": 0,
    "v": 0,
}

# JavaScript named groups and backreferences; other escapes pass through.
_JS_PATTERN_SYNTAX = re.compile(r"\\k<([A-Za-z_]\w*)>|\\.|\(\?<([A-Za-z_]\w*)>", re.DOTALL)

_JS_REPLACEMENT_TOKEN = re.compile(r"\$(\$|&|<([A-Za-z_]\w*)>|(\d{1,2}))")


@dataclass(frozen=True)
class FileComparison:
    path_a: Path
    path_b: Path
    result: DiffResult

    @property
    def identical(self) -> bool:
        return self.result.identical

    def unified(self) -> str:
        return self.result.render(str(self.path_a), str(self.path_b))


def compare_files(
    file_a: str | os.PathLike[str],
    file_b: str | os.PathLike[str],
    *,
    context_lines: int = DEFAULT_CONTEXT,
    max_lines: int = DEFAULT_MAX_LINES,
) -> FileComparison:
    """Read two text files and diff them, enforcing the size guard."""

    if context_lines < 0:
        raise CodeCommanderInputError(translate("diff.negative_context", value=context_lines))

    path_a = normalize_path(file_a)
    path_b = normalize_path(file_b)
    lines_a = read_lines(path_a)
    lines_b = read_lines(path_b)
    guard_size(lines_a, lines_b, max_lines)

    result = compute_diff(lines_a, lines_b, context=context_lines)
    logger.debug(
        "diff %s %s: +%d -%d in %d hunk(s)",
        path_a,
        path_b,
        result.added,
        result.removed,
        len(result.hunks),
    )
    return FileComparison(path_a=path_a, path_b=path_b, result=result)


def format_comparison(cmp: FileComparison) -> str:
    """Identical files produce a short message instead of an empty diff body."""

    if cmp.identical:
        return translate("diff.identical", name_a=cmp.path_a, name_b=cmp.path_b)

    return "\n".join(
        [
            translate("diff.header", name_a=cmp.path_a.name, name_b=cmp.path_b.name),
            "",
            translate(
                "diff.summary",
                added=cmp.result.added,
                removed=cmp.result.removed,
                hunks=len(cmp.result.hunks),
            ),
            "",
            "```diff",
            cmp.unified().rstrip("\n"),
            "```",
        ]
    )


def diff_files_report(
    file_a: str,
    file_b: str,
    *,
    context_lines: int = DEFAULT_CONTEXT,
    max_lines: int = DEFAULT_MAX_LINES,
) -> str:
    """Compare two text files and report the unified diff."""
    cmp = compare_files(file_a, file_b, context_lines=context_lines, max_lines=max_lines)
    return format_comparison(cmp)


def parse_regex_flags(flags: str) -> tuple[int, bool]:
    """Translate JavaScript-style flag letters into `(re flags, global)`."""

    unknown = sorted({ch for ch in flags if ch != "g" and ch not in _REGEX_FLAGS})
    if unknown:
        raise CodeCommanderPatternError(translate("regex.invalid_flags", flags="".join(unknown)))
    value = 0
    for ch in flags:
        value |= _REGEX_FLAGS.get(ch, 0)
    return value, "g" in flags


def translate_js_pattern(pattern: str) -> str:
    r"""Rewrite JavaScript `(?<name>...)` groups and `\k<name>` backreferences.

    Lookbehinds (`(?<=`, `(?<!`) and escaped parentheses are left alone.
    """

    def _token(tok: re.Match[str]) -> str:
        if tok.group(1) is not None:
            return f"(?P={tok.group(1)})"
        if tok.group(2) is not None:
            return f"(?P<{tok.group(2)}>"
        return tok.group(0)

    return _JS_PATTERN_SYNTAX.sub(_token, pattern)


def expand_js_replacement(template: str, match: re.Match[str]) -> str:
    """Expand `$&`, `$1`..`$99`, `$<name>` and `$$` against `match`.

    Tokens naming a group that does not exist are kept literally, and a group
    that did not participate in the match expands to an empty string.
    """

    group_count = match.re.groups

    def _token(tok: re.Match[str]) -> str:
        body = tok.group(1)
        if body == "$":
            return "$"
        if body == "&":
            return match.group(0)
        name = tok.group(2)
        if name is not None:
            if name not in match.re.groupindex:
                return tok.group(0)
            return match.group(name) or ""
        digits = tok.group(3)
        if len(digits) == 2 and 0 < int(digits) <= group_count:
            return match.group(int(digits)) or ""
        if 0 < int(digits[0]) <= group_count:
            return (match.group(int(digits[0])) or "") + digits[1:]
        return tok.group(0)

    return _JS_REPLACEMENT_TOKEN.sub(_token, template)


def regex_test_report(
    pattern: str,
    text: str,
    *,
    flags: str = "g",
    replace_with: str | None = None,
) -> str:
    """Run `pattern` against `text` and list matches, groups and a replacement preview."""

    re_flags, is_global = parse_regex_flags(flags)
    try:
        compiled = re.compile(translate_js_pattern(pattern), re_flags)
    except re.error as e:
        raise CodeCommanderPatternError(translate("regex.invalid_pattern", reason=e)) from e

    matches = list(compiled.finditer(text))
    if not is_global:
        matches = matches[:1]

    logger.debug("regex %r flags=%r against %d char(s)", pattern, flags, len(text))
    lines = [translate("regex.header", pattern=pattern, flags=flags or "-"), ""]
    if not matches:
        lines.append(translate("regex.no_matches"))
    else:
        lines.append(translate("regex.match_count", count=len(matches)))
        names = {index: name for name, index in compiled.groupindex.items()}
        for n, m in enumerate(matches[:MAX_LISTED_MATCHES], start=1):
            lines.append(
                translate("regex.match", index=n, text=m.group(0), start=m.start(), end=m.end())
            )
            for g in range(1, compiled.groups + 1):
                label = f"{g} ({names[g]})" if g in names else str(g)
                value = m.group(g)
                if value is None:
                    lines.append(translate("regex.group_unmatched", name=label))
                else:
                    lines.append(translate("regex.group", name=label, text=value))
        if len(matches) > MAX_LISTED_MATCHES:
            lines.append(f"... (+{len(matches) - MAX_LISTED_MATCHES})")

    if replace_with is not None:
        preview = compiled.sub(
            lambda m: expand_js_replacement(replace_with, m),
            text,
            count=0 if is_global else 1,
        )
        lines += ["", translate("regex.replacement_header"), "```", preview, "```"]

    return "\n".join(lines)


def cleanup_file_report(
    path: str,
    *,
    remove_bom: bool = True,
    remove_trailing_whitespace: bool = True,
    normalize_line_endings: str | None = None,
    remove_nul_bytes: bool = True,
    dry_run: bool = False,
) -> str:
    """Clean a text file in place (or only list the fixes with `dry_run`)."""

    if normalize_line_endings is not None and normalize_line_endings not in LINE_ENDINGS:
        raise CodeCommanderInputError(
            translate("cleanup.invalid_line_endings", value=normalize_line_endings)
        )

    p = normalize_path(path)
    result = clean_text(
        read_text(p),
        remove_bom=remove_bom,
        remove_nul_bytes=remove_nul_bytes,
        remove_trailing_whitespace=remove_trailing_whitespace,
        normalize_line_endings=normalize_line_endings,
    )
    if not result.changed:
        return translate("cleanup.already_clean", name=p.name)

    if dry_run:
        header = translate("cleanup.preview", name=p.name)
    else:
        write_text(p, result.text)
        logger.info("cleaned %s: %s", p, ", ".join(result.fixes))
        header = translate("cleanup.done", name=p.name)
    lines = [header, ""]
    lines += [f"  - {translate('cleanup.fix.' + fix)}" for fix in result.fixes]
    return "\n".join(lines)


def set_language_report(language: str) -> str:
    set_language(language)
    return translate("language.set", language=get_language())
