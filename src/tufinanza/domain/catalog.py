# src/tufinanza/domain/catalog.py
"""
Reference Data - Countries and Movement Categories

Static lists shown during onboarding and when recording movements.

Files that USE this module:
- tufinanza.app (default display currency for the summary)
- tests.test_catalog (unit tests)

Files that this module USES:
- tufinanza.domain.models (Category, Country, MovementType)
- tufinanza.domain.currencies (Currency)
"""
from __future__ import annotations

from typing import List, Optional

from tufinanza.domain.currencies import Currency
from tufinanza.domain.models import Category, Country, MovementType

COUNTRIES: List[Country] = [
    Country("AR", "Argentina", Currency.ARS, "🇦🇷"),
    Country("US", "Estados Unidos", Currency.USD, "🇺🇸"),
    Country("MX", "México", Currency.MXN, "🇲🇽"),
    Country("CO", "Colombia", Currency.COP, "🇨🇴"),
    Country("CL", "Chile", Currency.CLP, "🇨🇱"),
    Country("PE", "Perú", Currency.PEN, "🇵🇪"),
    Country("UY", "Uruguay", Currency.UYU, "🇺🇾"),
    Country("BR", "Brasil", Currency.BRL, "🇧🇷"),
    Country("ES", "España", Currency.EUR, "🇪🇸"),
    Country("GB", "Reino Unido", Currency.GBP, "🇬🇧"),
]

INCOME_CATEGORIES: List[Category] = [
    Category("salary", "Salario", MovementType.INCOME, "💰", "#10B981"),
    Category("freelance", "Freelance", MovementType.INCOME, "💻", "#059669"),
    Category("sales", "Ventas", MovementType.INCOME, "🛒", "#0D9488"),
    Category("investment", "Inversiones", MovementType.INCOME, "📈", "#0891B2"),
    Category("bonus", "Bonus", MovementType.INCOME, "🎁", "#7C3AED"),
    Category("rental", "Alquileres", MovementType.INCOME, "🏠", "#059669"),
    Category("other-income", "Otros", MovementType.INCOME, "💎", "#6366F1"),
]

EXPENSE_CATEGORIES: List[Category] = [
    Category("food", "Alimentación", MovementType.EXPENSE, "🍕", "#EF4444"),
    Category("transport", "Transporte", MovementType.EXPENSE, "🚗", "#DC2626"),
    Category("utilities", "Servicios", MovementType.EXPENSE, "⚡", "#B91C1C"),
    Category("entertainment", "Entretenimiento", MovementType.EXPENSE, "🎬", "#991B1B"),
    Category("health", "Salud", MovementType.EXPENSE, "🏥", "#7F1D1D"),
    Category("education", "Educación", MovementType.EXPENSE, "📚", "#F97316"),
    Category("shopping", "Compras", MovementType.EXPENSE, "🛍️", "#EA580C"),
    Category("rent", "Alquiler", MovementType.EXPENSE, "🏠", "#C2410C"),
    Category("insurance", "Seguros", MovementType.EXPENSE, "🛡️", "#B91C1C"),
    Category("other-expense", "Otros", MovementType.EXPENSE, "📝", "#C2410C"),
]

SAVING_CATEGORIES: List[Category] = [
    Category("general", "Meta General", MovementType.SAVING, "🎯", "#3B82F6"),
    Category("emergency", "Emergencias", MovementType.SAVING, "🆘", "#2563EB"),
    Category("vacation", "Vacaciones", MovementType.SAVING, "✈️", "#1D4ED8"),
    Category("big-purchase", "Compra Grande", MovementType.SAVING, "🏠", "#1E40AF"),
    Category("investment", "Inversión", MovementType.SAVING, "💹", "#1E3A8A"),
    Category("retirement", "Jubilación", MovementType.SAVING, "🌅", "#6366F1"),
    Category("education", "Educación", MovementType.SAVING, "🎓", "#4F46E5"),
]

ALL_CATEGORIES: List[Category] = INCOME_CATEGORIES + EXPENSE_CATEGORIES + SAVING_CATEGORIES

DEFAULT_CURRENCY = Currency.USD
DEFAULT_COUNTRY = COUNTRIES[0]


def get_category(category_id: str, movement_type: Optional[MovementType] = None) -> Optional[Category]:
    """
    Look up a category by id.

    Some ids ("investment", "education") exist for more than one movement
    type; pass movement_type to pick the right one.
    """
    for category in ALL_CATEGORIES:
        if category.id != category_id:
            continue
        if movement_type is None or category.type == movement_type:
            return category
    return None


def get_country(code: str) -> Optional[Country]:
    """Look up a country by ISO code (case-insensitive)."""
    code = (code or "").upper()
    for country in COUNTRIES:
        if country.code == code:
            return country
    return None
