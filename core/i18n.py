"""Minimal internationalization helpers.

Catalogs are nested JSON documents under ``translations/<lang>.json`` and are
addressed with dotted keys such as ``newApplication.step1.errors.emailInvalid``.
"""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from core import config

logger = logging.getLogger(__name__)

TRANSLATIONS_DIR = Path(__file__).resolve().parents[1] / "translations"


@lru_cache()
def load_translations(lang: str) -> Dict[str, Any]:
    """Load the translation catalog for the given language."""
    path = TRANSLATIONS_DIR / f"{lang}.json"
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return {}


def _lookup(catalog: Dict[str, Any], key: str) -> Optional[str]:
    node: Any = catalog
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def normalize_locale(lang: Optional[str]) -> str:
    """Return ``lang`` if supported, else the configured default locale."""
    if lang in config.SUPPORTED_LOCALES:
        return lang
    return config.DEFAULT_LOCALE


def has_translation(key: str, lang: str) -> bool:
    """True when ``key`` resolves in ``lang`` or the default locale."""
    return (
        _lookup(load_translations(lang), key) is not None
        or _lookup(load_translations(config.DEFAULT_LOCALE), key) is not None
    )


def t(key: str, lang: str, **params: Any) -> str:
    """Translate ``key`` using the specified language.

    Falls back to the default locale and finally to the key itself. Keyword
    arguments are interpolated into ``{name}`` placeholders.
    """
    text = _lookup(load_translations(lang), key)
    if text is None and lang != config.DEFAULT_LOCALE:
        text = _lookup(load_translations(config.DEFAULT_LOCALE), key)
    if text is None:
        logger.debug("Missing translation for %s (%s)", key, lang)
        return key
    if params:
        try:
            return text.format(**params)
        except (KeyError, IndexError, ValueError):
            logger.warning("Bad interpolation for %s (%s)", key, lang)
    return text


class Translator:
    """Translation lookup bound to one locale, optionally to a namespace."""

    def __init__(self, lang: str, namespace: str = ""):
        self.lang = normalize_locale(lang)
        self.namespace = namespace

    def __call__(self, key: str, **params: Any) -> str:
        full = f"{self.namespace}.{key}" if self.namespace else key
        return t(full, self.lang, **params)

    def has(self, key: str) -> bool:
        full = f"{self.namespace}.{key}" if self.namespace else key
        return has_translation(full, self.lang)

    def scoped(self, namespace: str) -> "Translator":
        return Translator(self.lang, namespace)
