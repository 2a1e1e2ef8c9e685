"""Tests for application settings."""

import pytest

from models.settings import DEFAULT_SETTINGS, get_settings, save_settings


class TestSettings:
    def test_defaults_when_nothing_saved(self, store):
        assert get_settings(store) == DEFAULT_SETTINGS

    def test_save_and_read_back(self, store):
        save_settings(store, currency="USD", language="en")
        assert get_settings(store) == {"currency": "USD", "language": "en"}

    def test_invalid_saved_values_fall_back_to_defaults(self, store):
        store.set("settings", {"currency": "EUR", "language": "en"})
        assert get_settings(store) == {"currency": "VND", "language": "en"}

    def test_non_dict_settings_are_ignored(self, store):
        store.set("settings", ["USD"])
        assert get_settings(store) == DEFAULT_SETTINGS

    @pytest.mark.parametrize("currency,language", [("EUR", "vi"), ("VND", "fr")])
    def test_save_rejects_unsupported_values(self, store, currency, language):
        with pytest.raises(ValueError):
            save_settings(store, currency=currency, language=language)
        assert store.get("settings") is None
