import logging
from typing import Iterable

from ghroute.repositories.base import BaseTranslationRepository

logger = logging.getLogger(__name__)


class StaticTranslationRepository(BaseTranslationRepository):
    """Translation lookup backed by a fixed list of supported locales."""

    def __init__(self, locales: Iterable[str], fallback: str = "en_US"):
        self.locales = list(locales)
        self.fallback = fallback

    @staticmethod
    def _normalize(locale: str) -> str:
        # en-US -> en_US
        parts = locale.strip().replace("-", "_").split("_")
        if len(parts) > 1:
            return f"{parts[0].lower()}_{parts[1].upper()}"
        return parts[0].lower()

    def is_supported(self, locale: str) -> bool:
        return self._normalize(locale) in self.locales

    def resolve_locale(self, language: str) -> str:
        if not language:
            return self.fallback
        locale = self._normalize(language)
        if locale in self.locales:
            return locale
        base_language = locale.split("_")[0]
        if base_language in self.locales:
            return base_language
        logger.warning(f"No translation for '{language}', falling back to '{self.fallback}'")
        return self.fallback
