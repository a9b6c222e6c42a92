from __future__ import annotations

import pytest

from codecommander import i18n


@pytest.fixture(autouse=True)
def _english_messages(monkeypatch):
    # The output language is process-wide; keep tests independent of it.
    monkeypatch.delenv("CC_LANGUAGE", raising=False)
    i18n.set_language("en")
    yield
    i18n.set_language(i18n.DEFAULT_LANGUAGE)
