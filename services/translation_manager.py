# -*- coding: utf-8 -*-
"""
User-facing message catalogue.

Messages are looked up by key (``tr("agreement.sign_success")``) and
formatted with keyword placeholders. A key missing from the active
language falls back to English, then to the key itself.
"""

from typing import Dict, Set

from app.config import Config
from utils.logger import get_logger

logger = get_logger(__name__)

FALLBACK_LANGUAGE = "en"


class TranslationManager:
    """Process-wide catalogue holder; use the module-level helpers."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._catalogues = cls._load_catalogues()
            instance._language = FALLBACK_LANGUAGE
            instance._reported: Set[str] = set()
            cls._instance = instance
            instance.set_language(Config.LANGUAGE)
        return cls._instance

    @staticmethod
    def _load_catalogues() -> Dict[str, Dict[str, str]]:
        from services.translations.en import EN_TRANSLATIONS
        return {"en": EN_TRANSLATIONS}

    @property
    def language(self) -> str:
        return self._language

    def set_language(self, lang_code: str):
        if lang_code not in self._catalogues:
            logger.warning(f"No catalogue for '{lang_code}', keeping '{self._language}'")
            return
        if lang_code != self._language:
            self._language = lang_code
            logger.info(f"Message language: {lang_code}")

    def tr(self, key: str, **kwargs) -> str:
        text = self._catalogues[self._language].get(key)
        if text is None:
            text = self._catalogues[FALLBACK_LANGUAGE].get(key)
        if text is None:
            if key not in self._reported:
                self._reported.add(key)
                logger.warning(f"Missing message key '{key}'")
            return key
        if not kwargs:
            return text
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            logger.warning(f"Placeholders {sorted(kwargs)} do not fit message '{key}'")
            return text


_translator = TranslationManager()


def tr(key: str, **kwargs) -> str:
    return _translator.tr(key, **kwargs)


def set_language(lang_code: str):
    _translator.set_language(lang_code)


def get_language() -> str:
    return _translator.language
