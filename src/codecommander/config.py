"""Configuration loading for CodeCommander.

This module is intentionally small and deterministic: it only reads
`codecommander.toml` and performs light validation. The file is optional;
`load_config_or_default` falls back to built-in defaults when none is found.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from codecommander.errors import CodeCommanderConfigError
from codecommander.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES

CONFIG_FILENAME = "codecommander.toml"
LANGUAGE_ENV = "CC_LANGUAGE"


@dataclass(frozen=True)
class DiffConfig:
    context_lines: int = 3
    # Combined lines of both inputs. The LCS table holds (n+1) x (m+1) cells,
    # so 2000 x 2000 lines is about 4M cells (tens of MB).
    max_lines: int = 4000


@dataclass(frozen=True)
class I18nConfig:
    language: str = DEFAULT_LANGUAGE


@dataclass(frozen=True)
class MCPConfig:
    enabled: bool = True


@dataclass(frozen=True)
class CodeCommanderConfig:
    version: int = 1
    diff: DiffConfig = field(default_factory=DiffConfig)
    i18n: I18nConfig = field(default_factory=I18nConfig)
    mcp: MCPConfig = field(default_factory=MCPConfig)


def find_project_root(start: Path) -> Path:
    """Walk upward from `start` (file or directory) looking for `codecommander.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent

    raise CodeCommanderConfigError(
        f"Could not find {CONFIG_FILENAME} by walking upward from start path."
    )


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CodeCommanderConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_bool(value: Any, *, name: str) -> bool:
    if not isinstance(value, bool):
        raise CodeCommanderConfigError(f"Expected {name} to be a boolean.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise CodeCommanderConfigError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise CodeCommanderConfigError(f"Expected {name} to be a string.")
    return value


def _env_language(default: str) -> str:
    value = os.environ.get(LANGUAGE_ENV, "").strip().lower()
    # Unknown values are ignored, matching how the server always starts up.
    return value if value in SUPPORTED_LANGUAGES else default


def load_config(
    *, root: Path | None = None, config_path: Path | None = None
) -> CodeCommanderConfig:
    """Load and validate `codecommander.toml`.

    If neither `root` nor `config_path` are provided, the project root is
    discovered by walking upward from the current working directory.
    `CC_LANGUAGE`, when set to a supported code, overrides `[i18n] language`.
    """

    if config_path is None:
        if root is None:
            root = find_project_root(Path.cwd())
        config_path = root / CONFIG_FILENAME

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise CodeCommanderConfigError(f"Missing {CONFIG_FILENAME} at: {config_path}") from e
    except OSError as e:
        raise CodeCommanderConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise CodeCommanderConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise CodeCommanderConfigError(f"Invalid TOML in {config_path}: {e}") from e

    version = data.get("version", None)
    if version is None:
        raise CodeCommanderConfigError(f"Missing required `version = 1` in {CONFIG_FILENAME}.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise CodeCommanderConfigError(f"Unsupported config version: {version_i} (expected 1).")

    diff_tbl = _as_table(data.get("diff"), name="diff")
    i18n_tbl = _as_table(data.get("i18n"), name="i18n")
    mcp_tbl = _as_table(data.get("mcp"), name="mcp")

    defaults = DiffConfig()
    if "context_lines" in diff_tbl:
        context_lines = _as_int(diff_tbl["context_lines"], name="diff.context_lines")
    else:
        context_lines = defaults.context_lines

    if "max_lines" in diff_tbl:
        max_lines = _as_int(diff_tbl["max_lines"], name="diff.max_lines")
    else:
        max_lines = defaults.max_lines

    if "language" in i18n_tbl:
        language = _as_str(i18n_tbl["language"], name="i18n.language").strip().lower()
    else:
        language = DEFAULT_LANGUAGE

    if "enabled" in mcp_tbl:
        mcp_enabled = _as_bool(mcp_tbl["enabled"], name="mcp.enabled")
    else:
        mcp_enabled = True

    # Validation
    if context_lines < 0:
        raise CodeCommanderConfigError("Invalid config: diff.context_lines must be >= 0.")

    if max_lines < 0:
        raise CodeCommanderConfigError(
            "Invalid config: diff.max_lines must be >= 0 (0 = unlimited)."
        )

    if language not in SUPPORTED_LANGUAGES:
        raise CodeCommanderConfigError(
            f"Invalid config: i18n.language must be one of {', '.join(SUPPORTED_LANGUAGES)}."
        )

    return CodeCommanderConfig(
        version=version_i,
        diff=DiffConfig(context_lines=context_lines, max_lines=max_lines),
        i18n=I18nConfig(language=_env_language(language)),
        mcp=MCPConfig(enabled=mcp_enabled),
    )


def load_config_or_default(start: Path | None = None) -> CodeCommanderConfig:
    """Like `load_config`, but return defaults when no config file exists."""

    try:
        root = find_project_root(start or Path.cwd())
    except CodeCommanderConfigError:
        return CodeCommanderConfig(i18n=I18nConfig(language=_env_language(DEFAULT_LANGUAGE)))
    return load_config(root=root)
