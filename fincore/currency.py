"""Currency and number formatting backed by Babel's CLDR data.

Every formatter returns ``PLACEHOLDER`` for missing or non-finite amounts and
falls back to the fixed symbol table when Babel cannot handle the
currency/locale pair, so callers always get a renderable string.
"""

from __future__ import annotations

import math
import re

from babel.core import Locale, UnknownLocaleError
from babel.numbers import (
    format_compact_currency,
    format_compact_decimal,
    format_currency as babel_format_currency,
    format_decimal,
    get_decimal_symbol,
)

from fincore.logging_config import get_logger
from fincore.models import CURRENCY_MAP, DEFAULT_CURRENCY, DEFAULT_LOCALE, PLACEHOLDER

logger = get_logger(__name__)

_CURRENCY_CODE_RE = re.compile(r"^[A-Za-z]{3}$")
_NON_NUMERIC_RE = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")
_LAST_DIGIT_RE = re.compile(r"(\d)(?!.*\d)")
_STANDARD_FRACTION_RE = re.compile(r"0\.0+")


def _is_amount(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _babel_locale(locale: str) -> Locale:
    """Accept both BCP-47 (``en-IN``) and POSIX (``en_IN``) identifiers."""
    return Locale.parse((locale or DEFAULT_LOCALE).replace("-", "_"))


def _fmt_number(value: float) -> str:
    """Format a number with K/M/B suffix, keeping max 3 digits left of the decimal."""
    abs_val = abs(value)
    if abs_val >= 1_000_000_000:
        return f"{value / 1_000_000_000:.2f}B"
    if abs_val >= 1_000_000:
        return f"{value / 1_000_000:.2f}M"
    if abs_val >= 1_000:
        return f"{value / 1_000:.2f}K"
    return f"{value:.2f}"


def _two_decimal_pattern(locale: Locale) -> str:
    """The locale's decimal pattern (with its grouping) forced to two decimals."""
    pattern = locale.decimal_formats[None].pattern
    integer_part = pattern.split(";")[0].split(".")[0]
    return f"{integer_part}.00"


def _compact_threshold(locale: Locale) -> float:
    """Smallest magnitude the locale abbreviates in short compact notation."""
    formats = locale.compact_currency_formats["short"]["other"]
    magnitudes = [
        int(magnitude)
        for magnitude, pattern in formats.items()
        if str(getattr(pattern, "pattern", pattern)) != "0"
    ]
    return float(min(magnitudes)) if magnitudes else math.inf


def _pad_compact_mantissa(text: str, locale: Locale) -> str:
    """Give a bare compact mantissa (``$1M``) one fraction digit (``$1.0M``)."""
    decimal_symbol = get_decimal_symbol(locale)
    if decimal_symbol in text:
        return text
    return _LAST_DIGIT_RE.sub(lambda m: f"{m.group(1)}{decimal_symbol}0", text, count=1)


def get_currency_symbol(currency_code: str = DEFAULT_CURRENCY) -> str:
    """Display symbol for a currency code; unknown codes are echoed back.

    A missing code resolves to the default currency's symbol.
    """
    info = CURRENCY_MAP.get(currency_code or DEFAULT_CURRENCY)
    if info is not None:
        return info.symbol
    return currency_code


def format_currency(
    amount: float | None,
    currency_code: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Localized currency string with exactly two fraction digits.

    >>> format_currency(1234567.5)
    '₹12,34,567.50'
    """
    if not _is_amount(amount):
        return PLACEHOLDER
    assert amount is not None

    if _CURRENCY_CODE_RE.match(currency_code or ""):
        try:
            return babel_format_currency(
                amount,
                currency_code.upper(),
                locale=_babel_locale(locale),
                currency_digits=False,
            )
        except (KeyError, ValueError, UnknownLocaleError) as exc:
            logger.debug(
                "format_currency_fallback",
                currency=currency_code,
                locale=locale,
                error=str(exc),
            )

    return f"{get_currency_symbol(currency_code)} {amount:.2f}"


def format_currency_compact(
    amount: float | None,
    currency_code: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Short-scale compact currency string (e.g. ``$1.5M``) for tight layouts.

    Always one or two fraction digits: ``$1.0K``, ``$1.25M``, ``$123.46``.
    Amounts below the locale's first abbreviation keep the standard
    currency layout.
    """
    if not _is_amount(amount):
        return PLACEHOLDER
    assert amount is not None

    if _CURRENCY_CODE_RE.match(currency_code or ""):
        try:
            babel_locale = _babel_locale(locale)
            code = currency_code.upper()
            if abs(amount) < _compact_threshold(babel_locale):
                standard = babel_locale.currency_formats["standard"].pattern
                return babel_format_currency(
                    amount,
                    code,
                    format=_STANDARD_FRACTION_RE.sub("0.0#", standard),
                    locale=babel_locale,
                    currency_digits=False,
                )
            compact = format_compact_currency(
                amount,
                code,
                format_type="short",
                locale=babel_locale,
                fraction_digits=2,
            )
            return _pad_compact_mantissa(compact, babel_locale)
        except (KeyError, ValueError, UnknownLocaleError) as exc:
            logger.debug(
                "format_currency_compact_fallback",
                currency=currency_code,
                locale=locale,
                error=str(exc),
            )

    return f"{get_currency_symbol(currency_code)} {_fmt_number(amount)}"


def format_currency_without_symbol(
    amount: float | None, locale: str = DEFAULT_LOCALE
) -> str:
    """Digit-grouped amount with two decimals and no currency symbol."""
    if not _is_amount(amount):
        return PLACEHOLDER
    assert amount is not None

    try:
        babel_locale = _babel_locale(locale)
        return format_decimal(
            amount, format=_two_decimal_pattern(babel_locale), locale=babel_locale
        )
    except (KeyError, ValueError, UnknownLocaleError) as exc:
        logger.debug("format_without_symbol_fallback", locale=locale, error=str(exc))
        return f"{amount:,.2f}"


def parse_currency(raw: object) -> float:
    """Best-effort number from a display string such as ``"₹1,234.50"``.

    Everything but digits, ``.`` and ``-`` is dropped and the longest leading
    number is taken. Empty or unparseable input gives 0.
    """
    if not raw:
        return 0.0
    if _is_amount(raw):
        return float(raw)  # type: ignore[arg-type]

    cleaned = _NON_NUMERIC_RE.sub("", str(raw))
    match = _LEADING_NUMBER_RE.match(cleaned)
    if match is None:
        return 0.0
    return float(match.group(0))


# --- Plain number formatting ---

def format_number(
    value: float | None,
    decimals: int = 2,
    compact: bool = False,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Locale-grouped number with a fixed number of decimals."""
    if not _is_amount(value):
        return PLACEHOLDER
    assert value is not None

    try:
        babel_locale = _babel_locale(locale)
        if compact:
            return format_compact_decimal(
                value, format_type="short", locale=babel_locale, fraction_digits=decimals
            )
        pattern = _two_decimal_pattern(babel_locale)
        pattern = pattern.split(".")[0] + ("." + "0" * decimals if decimals > 0 else "")
        return format_decimal(value, format=pattern, locale=babel_locale)
    except (KeyError, ValueError, UnknownLocaleError) as exc:
        logger.debug("format_number_fallback", locale=locale, error=str(exc))
        return f"{value:,.{decimals}f}"


def format_percentage(
    value: float | None, decimals: int = 2, show_symbol: bool = True
) -> str:
    if not _is_amount(value):
        return PLACEHOLDER
    formatted = f"{value:.{decimals}f}"
    return f"{formatted}%" if show_symbol else formatted


def format_percentage_change(value: float | None) -> str:
    """Signed percentage, e.g. ``+12.50%`` or ``-3.00%``."""
    if not _is_amount(value):
        return PLACEHOLDER
    assert value is not None
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"


def format_large_number(value: float | None) -> str:
    """Abbreviate with Indian units: Cr (crore), L (lakh) and K."""
    if not _is_amount(value):
        return PLACEHOLDER
    assert value is not None

    abs_val = abs(value)
    if abs_val >= 10_000_000:
        return f"{value / 10_000_000:.2f} Cr"
    if abs_val >= 100_000:
        return f"{value / 100_000:.2f} L"
    if abs_val >= 1_000:
        return f"{value / 1_000:.2f} K"
    return format_number(value, decimals=2)
