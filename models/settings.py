"""Settings management models."""
from utils.constants import CURRENCIES, LANGUAGES, SETTINGS_KEY
from utils.log import get_logger
from .store import KeyValueStore

logger = get_logger(__name__)

DEFAULT_SETTINGS = {"currency": "VND", "language": "vi"}


def get_settings(store: KeyValueStore) -> dict:
    """Get application settings, ignoring unknown or invalid values."""
    saved = store.get(SETTINGS_KEY) or {}
    if not isinstance(saved, dict):
        saved = {}
    currency = saved.get("currency")
    language = saved.get("language")
    return {
        "currency": currency if currency in CURRENCIES else DEFAULT_SETTINGS["currency"],
        "language": language if language in LANGUAGES else DEFAULT_SETTINGS["language"],
    }


def save_settings(store: KeyValueStore, *, currency: str, language: str) -> dict:
    """Save application settings."""
    if currency not in CURRENCIES:
        raise ValueError(f"Unsupported currency: {currency!r}")
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {language!r}")
    settings = {"currency": currency, "language": language}
    store.set(SETTINGS_KEY, settings)
    logger.info("settings_saved", **settings)
    return settings
