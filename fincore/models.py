"""Data models and defaults for fincore results."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

DEFAULT_CURRENCY = "INR"
DEFAULT_LOCALE = "en-IN"
DEFAULT_DATE_FORMAT = "dd/mm/yyyy"

# Financial year starts in April
FINANCIAL_YEAR_START_MONTH = 4

PLACEHOLDER = "-"


@dataclass(frozen=True, slots=True)
class CurrencyInfo:
    code: str
    name: str
    symbol: str


@dataclass(slots=True)
class GrowthProjection:
    future_value: float
    total_investment: float
    estimated_returns: float
    absolute_return_percent: float


@dataclass(slots=True)
class YearlySnapshot:
    year: int
    invested: float
    value: float


@dataclass(slots=True)
class GoalPlan:
    target_amount: float
    monthly_investment: float
    years: float


# --- Currency registry ---

def _build_currency_map() -> MappingProxyType[str, CurrencyInfo]:
    entries = [
        CurrencyInfo("INR", "Indian Rupee", "₹"),
        CurrencyInfo("USD", "US Dollar", "$"),
        CurrencyInfo("EUR", "Euro", "€"),
        CurrencyInfo("GBP", "British Pound", "£"),
        CurrencyInfo("JPY", "Japanese Yen", "¥"),
        CurrencyInfo("CAD", "Canadian Dollar", "C$"),
        CurrencyInfo("AUD", "Australian Dollar", "A$"),
    ]
    return MappingProxyType({e.code: e for e in entries})


CURRENCY_MAP = _build_currency_map()
SUPPORTED_CURRENCIES = list(CURRENCY_MAP.keys())
