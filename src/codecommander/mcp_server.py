"""MCP server for CodeCommander: exposes the text tools over MCP.

The server uses FastMCP for the transport layer. Core tool functions are
plain Python and can be tested without FastMCP installed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from codecommander.config import CodeCommanderConfig, load_config_or_default
from codecommander.errors import CodeCommanderError
from codecommander.i18n import set_language, translate
from codecommander.reports import (
    cleanup_file_report,
    diff_files_report,
    regex_test_report,
    set_language_report,
)

logger = logging.getLogger("codecommander.mcp")

# ---------------------------------------------------------------------------
# Core tool functions (no FastMCP dependency)
# ---------------------------------------------------------------------------


def _load(root: str | None) -> CodeCommanderConfig:
    return load_config_or_default(Path(root).resolve() if root else None)


def error_text(exc: BaseException) -> str:
    """Localized message for a failed tool call."""
    msg = (str(exc) or repr(exc)).strip()
    if isinstance(exc, CodeCommanderError) and msg.startswith("❌"):
        return msg
    return translate("common.error", message=msg)


def tool_diff_files(
    *,
    file_a: str,
    file_b: str,
    context_lines: int | None = None,
    root: str | None = None,
    config: CodeCommanderConfig | None = None,
) -> str:
    """Compare two text files; returns the localized report.

    `context_lines` and the size guard default to the project config.
    """
    cfg = config or _load(root)
    context = cfg.diff.context_lines if context_lines is None else context_lines
    logger.debug("cc_diff_files %s %s context=%d", file_a, file_b, context)
    return diff_files_report(
        file_a,
        file_b,
        context_lines=context,
        max_lines=cfg.diff.max_lines,
    )


def tool_regex_test(
    *,
    pattern: str,
    text: str,
    flags: str = "g",
    replace_with: str | None = None,
) -> str:
    """Test a regular expression; returns matches, groups and optional replacement."""
    logger.debug("cc_regex_test %r flags=%r", pattern, flags)
    return regex_test_report(pattern, text, flags=flags, replace_with=replace_with)


def tool_cleanup_file(
    *,
    path: str,
    remove_bom: bool = True,
    remove_trailing_whitespace: bool = True,
    normalize_line_endings: str | None = None,
    remove_nul_bytes: bool = True,
    dry_run: bool = False,
) -> str:
    """Strip BOM, NUL bytes and trailing blanks; optionally normalize line endings."""
    logger.debug("cc_cleanup_file %s dry_run=%s", path, dry_run)
    return cleanup_file_report(
        path,
        remove_bom=remove_bom,
        remove_trailing_whitespace=remove_trailing_whitespace,
        normalize_line_endings=normalize_line_endings,
        remove_nul_bytes=remove_nul_bytes,
        dry_run=dry_run,
    )


def tool_set_language(*, language: str) -> str:
    """Switch the output language for subsequent tool calls."""
    logger.debug("cc_set_language %s", language)
    return set_language_report(language)


# ---------------------------------------------------------------------------
# FastMCP server factory
# ---------------------------------------------------------------------------


def create_mcp_server(config: CodeCommanderConfig | None = None):
    """Create and return a FastMCP server with the CodeCommander tools registered.

    Raises ImportError if fastmcp is not installed.
    """
    from fastmcp import FastMCP
    from fastmcp.exceptions import ToolError

    cfg = config or load_config_or_default()
    set_language(cfg.i18n.language)

    mcp = FastMCP(
        "codecommander",
        instructions="Developer text tools: unified file diffs, regex testing and file cleanup.",
    )

    @mcp.tool()
    def cc_diff_files(file_a: str, file_b: str, context_lines: int | None = None) -> str:
        """Compare two text files line by line (unified diff).

        Args:
          - file_a: path of the first (old) file
          - file_b: path of the second (new) file
          - context_lines: unchanged lines shown around each change (default 3)

        Reports "identical" when the files match line for line.
        """
        try:
            return tool_diff_files(
                file_a=file_a, file_b=file_b, context_lines=context_lines, config=cfg
            )
        except CodeCommanderError as e:
            raise ToolError(error_text(e)) from e

    @mcp.tool()
    def cc_regex_test(
        pattern: str,
        text: str,
        flags: str = "g",
        replace_with: str | None = None,
    ) -> str:
        """Test a regular expression against a text.

        Flags are the JavaScript letters g, i, m and s (u, y, d and v are
        accepted and ignored) plus Python's x (verbose). Patterns may use
        JavaScript named groups `(?<name>...)`. Lists each match with its
        capture groups; with replace_with, shows a replacement preview
        ($1, $<name>, $& are supported).
        """
        try:
            return tool_regex_test(
                pattern=pattern, text=text, flags=flags, replace_with=replace_with
            )
        except CodeCommanderError as e:
            raise ToolError(error_text(e)) from e

    @mcp.tool()
    def cc_cleanup_file(
        path: str,
        remove_bom: bool = True,
        remove_trailing_whitespace: bool = True,
        normalize_line_endings: str | None = None,
        remove_nul_bytes: bool = True,
        dry_run: bool = False,
    ) -> str:
        """Clean a source file: BOM, NUL bytes, trailing whitespace, line endings.

        Args:
          - path: file to clean (rewritten in place unless dry_run)
          - normalize_line_endings: "lf" or "crlf"; omitted leaves them as they are
          - dry_run: only list the fixes that would apply
        """
        try:
            return tool_cleanup_file(
                path=path,
                remove_bom=remove_bom,
                remove_trailing_whitespace=remove_trailing_whitespace,
                normalize_line_endings=normalize_line_endings,
                remove_nul_bytes=remove_nul_bytes,
                dry_run=dry_run,
            )
        except CodeCommanderError as e:
            raise ToolError(error_text(e)) from e

    @mcp.tool()
    def cc_set_language(language: str) -> str:
        """Set the output language for tool messages ("de" or "en")."""
        try:
            return tool_set_language(language=language)
        except CodeCommanderError as e:
            raise ToolError(error_text(e)) from e

    return mcp


def run_server(
    *,
    root: str | None = None,
    language: str | None = None,
    config: CodeCommanderConfig | None = None,
) -> None:
    """Entry point: create and run the MCP server (stdio transport).

    If *root* is provided, changes the working directory to that path so
    that relative file paths and `codecommander.toml` resolve against it.
    An explicit *config* (e.g. from `--config`) replaces the lookup.
    """
    import os

    if root:
        os.chdir(Path(root).resolve())
    cfg = config or load_config_or_default()
    if not cfg.mcp.enabled:
        raise CodeCommanderError("MCP server is disabled ([mcp] enabled = false).")
    mcp = create_mcp_server(cfg)
    if language:
        set_language(language)
    logger.info(translate("common.server_started"))
    mcp.run()
