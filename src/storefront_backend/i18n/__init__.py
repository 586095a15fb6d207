"""
Localized message catalog.

Messages live in messages.yaml next to this module, keyed first by message
key and then by locale. Callers always pass the locale explicitly.

Usage:
    from storefront_backend.i18n import translate

    translate("category_not_found", "de")
"""

import yaml
from pathlib import Path
from typing import Dict, List, Optional

from storefront_backend.settings import settings

MESSAGES_PATH = Path(__file__).parent / "messages.yaml"

# Cache for the message catalog
_catalog: Optional[Dict[str, Dict[str, str]]] = None
_locales: Optional[List[str]] = None


def load_messages() -> Dict[str, Dict[str, str]]:
    """
    Load the message catalog from YAML.

    Returns:
        Dictionary mapping message keys to {locale: text}

    Raises:
        FileNotFoundError: If messages.yaml is missing
        ValueError: If the YAML is malformed
    """
    global _catalog, _locales

    if _catalog is not None:
        return _catalog

    if not MESSAGES_PATH.exists():
        raise FileNotFoundError(f"Message catalog not found at {MESSAGES_PATH}")

    with open(MESSAGES_PATH, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data or "messages" not in data:
        raise ValueError("Invalid message catalog format: missing 'messages' key")

    _locales = list(data.get("locales") or [])
    _catalog = {str(key): dict(texts) for key, texts in data["messages"].items()}
    return _catalog


def supported_locales() -> List[str]:
    load_messages()
    return list(_locales or [])


def normalize_locale(locale: Optional[str]) -> str:
    """
    Reduce a locale tag to a supported language code.

    "de-AT" -> "de", unknown or empty -> DEFAULT_LOCALE.
    """
    if locale:
        language = locale.strip().split("-")[0].split("_")[0].lower()
        if language in supported_locales():
            return language
    return settings.DEFAULT_LOCALE


def parse_accept_language(header: Optional[str]) -> str:
    """
    Pick the best supported locale from an Accept-Language header.

    Entries are ranked by their q value, ties keep header order.
    """
    if not header:
        return settings.DEFAULT_LOCALE

    candidates = []
    for position, part in enumerate(header.split(",")):
        pieces = part.strip().split(";")
        tag = pieces[0].strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition("=")
            if name == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        candidates.append((-quality, position, tag))

    for _, _, tag in sorted(candidates):
        language = tag.split("-")[0].lower()
        if language in supported_locales():
            return language

    return settings.DEFAULT_LOCALE


def translate(message_key: str, locale: Optional[str] = None) -> str:
    """
    Resolve a message key for a locale.

    Falls back to the default locale, then to the key itself.
    """
    texts = load_messages().get(message_key)
    if not texts:
        return message_key

    locale = normalize_locale(locale)
    return texts.get(locale) or texts.get(settings.DEFAULT_LOCALE) or message_key
