from __future__ import annotations

from pathlib import Path

import pytest

from codecommander.config import (
    CodeCommanderConfig,
    find_project_root,
    load_config,
    load_config_or_default,
)
from codecommander.errors import CodeCommanderConfigError


def _write_config(root: Path, *lines: str) -> None:
    (root / "codecommander.toml").write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_load_minimal_config_defaults_apply(tmp_path: Path) -> None:
    _write_config(tmp_path, "version = 1")
    cfg = load_config(root=tmp_path)

    assert cfg.version == 1
    assert cfg.diff.context_lines == 3
    assert cfg.diff.max_lines == 4000
    assert cfg.i18n.language == "de"
    assert cfg.mcp.enabled is True


def test_load_config_overrides_work(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        "version = 1",
        "",
        "[diff]",
        "context_lines = 5",
        "max_lines = 0",
        "",
        "[i18n]",
        'language = "EN"',
        "",
        "[mcp]",
        "enabled = false",
    )
    cfg = load_config(root=tmp_path)
    assert cfg.diff.context_lines == 5
    assert cfg.diff.max_lines == 0
    assert cfg.i18n.language == "en"
    assert cfg.mcp.enabled is False


def test_env_language_overrides_config(tmp_path: Path, monkeypatch) -> None:
    _write_config(tmp_path, "version = 1", "[i18n]", 'language = "de"')
    monkeypatch.setenv("CC_LANGUAGE", "en")
    assert load_config(root=tmp_path).i18n.language == "en"

    monkeypatch.setenv("CC_LANGUAGE", "klingon")
    assert load_config(root=tmp_path).i18n.language == "de"


def test_load_config_via_explicit_path(tmp_path: Path) -> None:
    cfg_path = tmp_path / "custom.toml"
    cfg_path.write_text("version = 1\n[diff]\ncontext_lines = 1\n", encoding="utf-8")
    assert load_config(config_path=cfg_path).diff.context_lines == 1


@pytest.mark.parametrize(
    ("lines", "needle"),
    [
        (["[diff]", "context_lines = 3"], "version"),
        (["version = 2"], "Unsupported config version"),
        (["version = 1", "diff = 3"], "[diff]"),
        (["version = 1", "[diff]", 'context_lines = "3"'], "diff.context_lines"),
        (["version = 1", "[diff]", "context_lines = true"], "diff.context_lines"),
        (["version = 1", "[diff]", "context_lines = -1"], "diff.context_lines"),
        (["version = 1", "[diff]", "max_lines = -5"], "diff.max_lines"),
        (["version = 1", "[i18n]", 'language = "fr"'], "i18n.language"),
        (["version = 1", "[mcp]", 'enabled = "yes"'], "mcp.enabled"),
        (["version = 1 oops"], "Invalid TOML"),
    ],
)
def test_invalid_config_is_rejected(tmp_path: Path, lines: list[str], needle: str) -> None:
    _write_config(tmp_path, *lines)
    with pytest.raises(CodeCommanderConfigError) as exc:
        load_config(root=tmp_path)
    assert needle in str(exc.value)


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(CodeCommanderConfigError) as exc:
        load_config(config_path=tmp_path / "codecommander.toml")
    assert "Missing codecommander.toml" in str(exc.value)


def test_find_project_root_walks_upward(tmp_path: Path) -> None:
    _write_config(tmp_path, "version = 1")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    (nested / "file.txt").write_text("x", encoding="utf-8")

    assert find_project_root(nested) == tmp_path.resolve()
    assert find_project_root(nested / "file.txt") == tmp_path.resolve()


def test_load_config_or_default_without_file(tmp_path: Path, monkeypatch) -> None:
    def _not_found(start: Path) -> Path:
        raise CodeCommanderConfigError("Could not find codecommander.toml")

    # Keep the upward walk from escaping tmp_path.
    monkeypatch.setattr("codecommander.config.find_project_root", _not_found)
    assert load_config_or_default(tmp_path) == CodeCommanderConfig()

    monkeypatch.setenv("CC_LANGUAGE", "en")
    assert load_config_or_default(tmp_path).i18n.language == "en"


def test_load_config_or_default_reads_found_file(tmp_path: Path) -> None:
    _write_config(tmp_path, "version = 1", "[diff]", "context_lines = 7")
    sub = tmp_path / "sub"
    sub.mkdir()
    assert load_config_or_default(sub).diff.context_lines == 7
