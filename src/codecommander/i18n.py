"""Message catalogues for tool output.

The current language is process-wide: it is set once at startup (config or
`CC_LANGUAGE`) and can be switched at runtime through the `cc_set_language`
tool. Only the prose around tool results is localized; diff bodies and regex
matches are passed through untouched.
"""

from __future__ import annotations

from codecommander.errors import CodeCommanderConfigError

SUPPORTED_LANGUAGES = ("de", "en")
DEFAULT_LANGUAGE = "de"

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "common.file_not_found": "❌ File not found: {path}",
        "common.not_a_file": "❌ Not a file: {path}",
        "common.not_utf8": "❌ File is not valid UTF-8: {path}",
        "common.read_failed": "❌ Could not read {path}: {reason}",
        "common.too_large": (
            "❌ Inputs too large: {lines} lines combined (limit {limit})."
        ),
        "common.error": "❌ Error: {message}",
        "common.server_started": "\U0001f680 CodeCommander MCP server started",
        "diff.header": "\U0001f50d **Diff: {name_a} ↔ {name_b}**",
        "diff.identical": "✅ Files are identical: {name_a} and {name_b}",
        "diff.summary": "+{added} added, -{removed} removed, {hunks} hunk(s)",
        "diff.negative_context": "❌ context_lines must be >= 0 (got {value})",
        "regex.invalid_pattern": "❌ Invalid pattern: {reason}",
        "regex.invalid_flags": "❌ Unsupported regex flag(s): {flags}",
        "regex.header": "\U0001f50d **Regex: `{pattern}`** (flags: {flags})",
        "regex.no_matches": "No matches.",
        "regex.match_count": "**{count} match(es)**",
        "regex.match": "{index}. `{text}` at {start}-{end}",
        "regex.group": "   Group {name}: `{text}`",
        "regex.group_unmatched": "   Group {name}: (no match)",
        "regex.replacement_header": "**Replacement preview:**",
        "common.write_failed": "❌ Could not write {path}: {reason}",
        "cleanup.already_clean": "✅ {name} is already clean.",
        "cleanup.preview": "\U0001f50d **Preview: {name}**",
        "cleanup.done": "✅ **Cleaned: {name}**",
        "cleanup.fix.bom": "BOM removed",
        "cleanup.fix.nul": "NUL bytes removed",
        "cleanup.fix.trailing_whitespace": "Trailing whitespace removed",
        "cleanup.fix.lf": "Line endings normalized to LF",
        "cleanup.fix.crlf": "Line endings normalized to CRLF",
        "cleanup.invalid_line_endings": (
            "❌ normalize_line_endings must be \"lf\" or \"crlf\" (got {value})"
        ),
        "language.set": "Language set to: {language}",
        "language.unsupported": (
            "Unsupported language: {language} (expected one of {supported})"
        ),
    },
    "de": {
        "common.file_not_found": "❌ Datei nicht gefunden: {path}",
        "common.not_a_file": "❌ Keine Datei: {path}",
        "common.not_utf8": "❌ Datei ist kein gueltiges UTF-8: {path}",
        "common.read_failed": "❌ {path} konnte nicht gelesen werden: {reason}",
        "common.too_large": (
            "❌ Eingaben zu gross: {lines} Zeilen zusammen (Limit {limit})."
        ),
        "common.error": "❌ Fehler: {message}",
        "common.server_started": "\U0001f680 CodeCommander MCP Server gestartet",
        "diff.header": "\U0001f50d **Diff: {name_a} ↔ {name_b}**",
        "diff.identical": "✅ Dateien sind identisch: {name_a} und {name_b}",
        "diff.summary": "+{added} hinzugefuegt, -{removed} entfernt, {hunks} Hunk(s)",
        "diff.negative_context": "❌ context_lines muss >= 0 sein (erhalten: {value})",
        "regex.invalid_pattern": "❌ Ungueltiges Muster: {reason}",
        "regex.invalid_flags": "❌ Nicht unterstuetzte Regex-Flags: {flags}",
        "regex.header": "\U0001f50d **Regex: `{pattern}`** (Flags: {flags})",
        "regex.no_matches": "Keine Treffer.",
        "regex.match_count": "**{count} Treffer**",
        "regex.match": "{index}. `{text}` bei {start}-{end}",
        "regex.group": "   Gruppe {name}: `{text}`",
        "regex.group_unmatched": "   Gruppe {name}: (kein Treffer)",
        "regex.replacement_header": "**Ersetzungsvorschau:**",
        "common.write_failed": "❌ {path} konnte nicht geschrieben werden: {reason}",
        "cleanup.already_clean": "✅ {name} ist bereits sauber.",
        "cleanup.preview": "\U0001f50d **Vorschau: {name}**",
        "cleanup.done": "✅ **Bereinigt: {name}**",
        "cleanup.fix.bom": "BOM entfernt",
        "cleanup.fix.nul": "NUL-Bytes entfernt",
        "cleanup.fix.trailing_whitespace": "Trailing Whitespace entfernt",
        "cleanup.fix.lf": "Zeilenenden auf LF normalisiert",
        "cleanup.fix.crlf": "Zeilenenden auf CRLF normalisiert",
        "cleanup.invalid_line_endings": (
            "❌ normalize_line_endings muss \"lf\" oder \"crlf\" sein (erhalten: {value})"
        ),
        "language.set": "Sprache gesetzt auf: {language}",
        "language.unsupported": (
            "Nicht unterstuetzte Sprache: {language} (erwartet: {supported})"
        ),
    },
}

_current = DEFAULT_LANGUAGE


def normalize_language(language: str) -> str:
    code = (language or "").strip().lower()
    if code not in SUPPORTED_LANGUAGES:
        raise CodeCommanderConfigError(
            translate(
                "language.unsupported",
                language=language,
                supported=", ".join(SUPPORTED_LANGUAGES),
            )
        )
    return code


def set_language(language: str) -> str:
    """Switch the process language; returns the normalized code."""
    global _current
    _current = normalize_language(language)
    return _current


def get_language() -> str:
    return _current


def translate(key: str, **kwargs: object) -> str:
    """Format message `key` in the current language (English as fallback)."""
    template = MESSAGES[_current].get(key)
    if template is None:
        template = MESSAGES["en"][key]
    return template.format(**kwargs)
