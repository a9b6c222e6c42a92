from __future__ import annotations

import pytest

from codecommander import i18n
from codecommander.errors import CodeCommanderConfigError


def test_catalogues_cover_the_same_keys() -> None:
    assert set(i18n.MESSAGES["de"]) == set(i18n.MESSAGES["en"])


def test_set_language_normalizes_code() -> None:
    assert i18n.set_language(" DE ") == "de"
    assert i18n.get_language() == "de"


def test_set_language_rejects_unknown_code() -> None:
    with pytest.raises(CodeCommanderConfigError) as exc:
        i18n.set_language("fr")
    assert "fr" in str(exc.value)
    assert i18n.get_language() == "en"


def test_translate_formats_in_current_language() -> None:
    assert i18n.translate("language.set", language="en") == "Language set to: en"
    i18n.set_language("de")
    assert i18n.translate("language.set", language="de") == "Sprache gesetzt auf: de"


def test_translate_falls_back_to_english(monkeypatch) -> None:
    monkeypatch.delitem(i18n.MESSAGES["de"], "regex.no_matches")
    i18n.set_language("de")
    assert i18n.translate("regex.no_matches") == "No matches."
