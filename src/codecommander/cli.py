from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from codecommander import __version__
from codecommander.config import CodeCommanderConfig, load_config, load_config_or_default
from codecommander.diagnostics import format_error_with_hint
from codecommander.errors import CodeCommanderError
from codecommander.i18n import SUPPORTED_LANGUAGES, set_language

EXIT_OK = 0
EXIT_DIFFERENT = 1
EXIT_CONFIG_OR_INPUT = 2


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--root",
        type=str,
        default=None,
        help="Project root (defaults to searching upward from cwd for codecommander.toml).",
    )
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to codecommander.toml (defaults to <root>/codecommander.toml).",
    )
    p.add_argument(
        "--lang",
        choices=SUPPORTED_LANGUAGES,
        default=None,
        help="Output language (overrides config and CC_LANGUAGE).",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="codecommander")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    diff_p = subparsers.add_parser("diff", help="Show a unified diff of two text files.")
    _add_common_flags(diff_p)
    diff_p.add_argument("file_a", help="Old file.")
    diff_p.add_argument("file_b", help="New file.")
    diff_p.add_argument(
        "-U",
        "--context",
        type=int,
        default=None,
        help="Unchanged lines around each change (default from config, else 3).",
    )
    diff_p.add_argument(
        "--raw",
        action="store_true",
        help="Print only the unified diff, without the report around it.",
    )

    regex_p = subparsers.add_parser("regex", help="Test a regular expression against text.")
    _add_common_flags(regex_p)
    regex_p.add_argument("pattern")
    regex_p.add_argument("text")
    regex_p.add_argument(
        "--flags", default="g", help="JavaScript flag letters, plus x for verbose (default: g)."
    )
    regex_p.add_argument("--replace", default=None, help="Show a replacement preview.")

    cleanup_p = subparsers.add_parser(
        "cleanup", help="Remove BOM, NUL bytes and trailing whitespace from a file."
    )
    _add_common_flags(cleanup_p)
    cleanup_p.add_argument("path", help="File to clean in place.")
    cleanup_p.add_argument("--keep-bom", action="store_true", help="Leave a leading BOM.")
    cleanup_p.add_argument("--keep-nul", action="store_true", help="Leave NUL bytes.")
    cleanup_p.add_argument(
        "--keep-trailing-whitespace", action="store_true", help="Leave trailing blanks."
    )
    cleanup_p.add_argument(
        "--line-endings", choices=("lf", "crlf"), default=None, help="Normalize line endings."
    )
    cleanup_p.add_argument(
        "--dry-run", action="store_true", help="Only list the fixes that would apply."
    )

    mcp_p = subparsers.add_parser("mcp", help="MCP server commands.")
    mcp_sub = mcp_p.add_subparsers(dest="mcp_command", required=True)
    serve_p = mcp_sub.add_parser("serve", help="Run the MCP server over stdio.")
    _add_common_flags(serve_p)

    return parser


def parse_args(argv: list[str]) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


def _configure_logging(args: argparse.Namespace) -> None:
    # stdout carries tool output (and the MCP transport); logs go to stderr.
    logging.basicConfig(
        level=logging.DEBUG if bool(getattr(args, "verbose", False)) else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace) -> CodeCommanderConfig:
    if args.config:
        return load_config(config_path=Path(args.config).resolve())
    if args.root:
        return load_config_or_default(Path(args.root).resolve())
    return load_config_or_default()


def _prepare(args: argparse.Namespace) -> CodeCommanderConfig:
    _configure_logging(args)
    cfg = _load_config(args)
    set_language(args.lang or cfg.i18n.language)
    return cfg


def _resolve_input(raw: str, root: str | None) -> str:
    p = Path(raw)
    if root and not p.is_absolute():
        return str(Path(root) / p)
    return raw


def cmd_diff(args: argparse.Namespace) -> int:
    from codecommander.reports import compare_files, format_comparison

    try:
        cfg = _prepare(args)
        context = cfg.diff.context_lines if args.context is None else int(args.context)
        cmp = compare_files(
            _resolve_input(args.file_a, args.root),
            _resolve_input(args.file_b, args.root),
            context_lines=context,
            max_lines=cfg.diff.max_lines,
        )
    except CodeCommanderError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_CONFIG_OR_INPUT

    if bool(args.raw):
        sys.stdout.write(cmp.unified())
    else:
        print(format_comparison(cmp))
    return EXIT_OK if cmp.identical else EXIT_DIFFERENT


def cmd_regex(args: argparse.Namespace) -> int:
    from codecommander.reports import regex_test_report

    try:
        _prepare(args)
        report = regex_test_report(
            args.pattern, args.text, flags=args.flags, replace_with=args.replace
        )
    except CodeCommanderError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_CONFIG_OR_INPUT
    print(report)
    return EXIT_OK


def cmd_cleanup(args: argparse.Namespace) -> int:
    from codecommander.reports import cleanup_file_report

    try:
        _prepare(args)
        report = cleanup_file_report(
            _resolve_input(args.path, args.root),
            remove_bom=not args.keep_bom,
            remove_trailing_whitespace=not args.keep_trailing_whitespace,
            normalize_line_endings=args.line_endings,
            remove_nul_bytes=not args.keep_nul,
            dry_run=bool(args.dry_run),
        )
    except CodeCommanderError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_CONFIG_OR_INPUT
    print(report)
    return EXIT_OK


def cmd_mcp(args: argparse.Namespace) -> int:
    try:
        _configure_logging(args)

        from codecommander.mcp_server import run_server

        # Resolve --config before run_server changes into --root.
        cfg = load_config(config_path=Path(args.config).resolve()) if args.config else None
        run_server(root=args.root, language=args.lang, config=cfg)
    except ImportError as e:
        _eprint(f"error: MCP support requires fastmcp ({e})")
        return EXIT_CONFIG_OR_INPUT
    except CodeCommanderError as e:
        _eprint(format_error_with_hint(e))
        return EXIT_CONFIG_OR_INPUT
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    try:
        args = parse_args(list(sys.argv[1:] if argv is None else argv))
    except SystemExit as e:
        # argparse uses SystemExit for --help/--version and parse errors.
        code = e.code
        return int(code) if isinstance(code, int) else EXIT_CONFIG_OR_INPUT

    if args.command == "diff":
        return cmd_diff(args)
    if args.command == "regex":
        return cmd_regex(args)
    if args.command == "cleanup":
        return cmd_cleanup(args)
    if args.command == "mcp":
        return cmd_mcp(args)

    return EXIT_CONFIG_OR_INPUT


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
