"""Error formatting and actionable hints for CodeCommander CLI output.

Keep this module small and dependency-light: it is imported by the CLI layer
and only depends on the error hierarchy.
"""

from __future__ import annotations

from codecommander.errors import (
    CodeCommanderConfigError,
    CodeCommanderInputError,
    CodeCommanderInputTooLargeError,
    CodeCommanderPatternError,
)


def format_hint(exc: BaseException) -> str | None:
    """Return an actionable hint for a known error, or None."""
    msg = str(exc)

    if isinstance(exc, CodeCommanderConfigError):
        if "codecommander.toml" in msg and "find" in msg.lower():
            return "create a codecommander.toml containing `version = 1` or drop --root/--config"
        if "language" in msg.lower():
            return 'supported languages are "de" and "en"'
        return None

    # Subclass of CodeCommanderInputError; check it first.
    if isinstance(exc, CodeCommanderInputTooLargeError):
        return "raise [diff] max_lines in codecommander.toml (0 disables the limit)"

    if isinstance(exc, CodeCommanderInputError):
        return "relative paths resolve against the working directory (or --root)"

    if isinstance(exc, CodeCommanderPatternError):
        return (
            "patterns use Python `re` syntax plus JavaScript `(?<name>...)` groups; "
            "flags are the JavaScript letters g, i, m, s (u, y, d, v are ignored) and x"
        )

    return None


def format_error_with_hint(exc: BaseException) -> str:
    """Format error message + optional hint for stderr output."""
    msg = (str(exc) or repr(exc)).strip()
    result = f"error: {msg}"
    hint = format_hint(exc)
    if hint:
        result += f"\nhint: {hint}"
    return result
