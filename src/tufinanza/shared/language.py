# src/tufinanza/shared/language.py
"""
Language Management - Multi-language Support

This module provides translations for the user-facing messages produced by
the core (validation errors, relative times, summaries) in English and
Spanish.

Files that USE this module:
- tufinanza.shared.validators (validation error messages)
- tufinanza.adapters.formatting.formatter (relative time strings)
- tufinanza.app (summary labels)

Files that this module USES:
- tufinanza.config (default language)
"""
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Language constants
LANG_ENGLISH = "en"
LANG_SPANISH = "es"

# Translation dictionaries
TRANSLATIONS: Dict[str, Dict[str, str]] = {
    LANG_ENGLISH: {
        "amount_not_positive": "Amount must be a positive number",
        "amount_zero": "Amount must be greater than zero",
        "amount_too_large": "Amount is too large",
        "just_now": "Just now",
        "minutes_ago": "{minutes} min ago",
        "hours_ago": "{hours}h ago",
        "days_ago": "{days} days ago",
        "usdt_quote_line": "USDT quote: {price} ({source}, {age})",
        "balance_header": "Balance ({currency})",
        "income_line": "Income:   {value}",
        "expenses_line": "Expenses: {value}",
        "savings_line": "Savings:  {value}",
        "net_line": "Net:      {value}",
        "no_profile": "No user profile stored",
    },
    LANG_SPANISH: {
        "amount_not_positive": "El monto debe ser un número positivo",
        "amount_zero": "El monto debe ser mayor a cero",
        "amount_too_large": "El monto es demasiado grande",
        "just_now": "Ahora mismo",
        "minutes_ago": "Hace {minutes} min",
        "hours_ago": "Hace {hours}h",
        "days_ago": "Hace {days} días",
        "usdt_quote_line": "Cotización USDT: {price} ({source}, {age})",
        "balance_header": "Balance ({currency})",
        "income_line": "Ingresos: {value}",
        "expenses_line": "Gastos:   {value}",
        "savings_line": "Ahorros:  {value}",
        "net_line": "Neto:     {value}",
        "no_profile": "No hay perfil de usuario guardado",
    },
}


class LanguageManager:
    """Holds the active language for translated messages."""

    def __init__(self, default_language: str = LANG_ENGLISH):
        self._current_language: str = default_language

    def get_language(self) -> str:
        """
        Get current language.

        Returns:
            Current language code ('en' or 'es')
        """
        return self._current_language

    def set_language(self, lang: str) -> bool:
        """
        Set the active language.

        Args:
            lang: Language code ('en' or 'es')

        Returns:
            True if language was set successfully, False if invalid
        """
        if lang not in TRANSLATIONS:
            logger.warning("Invalid language code: %s", lang)
            return False

        old_lang = self._current_language
        self._current_language = lang
        logger.info("Language changed from %s to %s", old_lang, lang)
        return True

    def translate(self, key: str, **kwargs: Any) -> str:
        """
        Translate a message key with optional parameters.

        Args:
            key: Translation key
            **kwargs: Parameters to format into translation

        Returns:
            Translated and formatted string, or key if translation not found
        """
        lang_dict = TRANSLATIONS.get(self._current_language, TRANSLATIONS[LANG_ENGLISH])
        template = lang_dict.get(key, key)

        try:
            return template.format(**kwargs)
        except KeyError as e:
            logger.warning("Missing parameter in translation '%s': %s", key, e)
            return template


def _default_language() -> str:
    from tufinanza.config import settings
    return settings.default_language


# Global language manager instance
language_manager = LanguageManager(_default_language())


def get_language() -> str:
    """Get current language."""
    return language_manager.get_language()


def set_language(lang: str) -> bool:
    """Set language."""
    return language_manager.set_language(lang)


def translate(key: str, **kwargs: Any) -> str:
    """Translate a message key."""
    return language_manager.translate(key, **kwargs)
