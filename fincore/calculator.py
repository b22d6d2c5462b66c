"""Pure calculation functions for investment growth and returns.

Every function resolves undefined results (zero divisors, non-finite inputs
or results, overflow, negative bases under fractional powers) to a defined
value instead of raising or returning NaN.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from fincore.logging_config import get_logger
from fincore.models import GoalPlan, GrowthProjection, YearlySnapshot

logger = get_logger(__name__)

# Every float at or above 2**53 is already a whole number
_EXACT_INTEGER_LIMIT = 2.0**53


def _finite(*values: float) -> bool:
    return all(isinstance(v, (int, float)) and math.isfinite(v) for v in values)


def _power(base: float, exponent: float) -> float | None:
    """``base ** exponent``, or ``None`` when it overflows or is undefined."""
    try:
        result = base**exponent
    except (OverflowError, ZeroDivisionError):
        return None
    return result if _finite(result) else None


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from negative infinity, like JavaScript's Math.round."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _round2(value: float) -> float:
    """Two decimals with ties away from zero on the exact binary value (``toFixed``)."""
    if abs(value) >= _EXACT_INTEGER_LIMIT:
        return float(value)
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _annuity_due_factor(monthly_rate: float, months: float) -> float | None:
    """FV of 1 paid at the start of each month for ``months`` months."""
    if monthly_rate == 0:
        return float(months)
    growth = max(1 + monthly_rate, 0.0)
    compounded = _power(growth, months)
    if compounded is None:
        return None
    factor = ((compounded - 1) / monthly_rate) * growth
    return factor if _finite(factor) else None


def _zero_projection(total_investment: float = 0.0) -> GrowthProjection:
    return GrowthProjection(
        future_value=total_investment,
        total_investment=total_investment,
        estimated_returns=0.0,
        absolute_return_percent=0.0,
    )


def _projection(future_value: float, total_investment: float) -> GrowthProjection:
    returns = future_value - total_investment
    absolute = (returns / total_investment) * 100 if total_investment else 0.0
    if not _finite(future_value, total_investment, returns, absolute):
        logger.debug("projection_out_of_range", future_value=future_value)
        return _zero_projection()
    return GrowthProjection(
        future_value=round_half_up(future_value),
        total_investment=total_investment,
        estimated_returns=round_half_up(returns),
        absolute_return_percent=absolute,
    )


def percentage_change(old_value: float, new_value: float) -> float:
    """Percentage change relative to ``|old_value|``, two decimals.

    A zero baseline reports 100 for any positive new value and 0 otherwise.
    """
    if not _finite(old_value, new_value):
        logger.debug("percentage_change_non_finite", old=old_value, new=new_value)
        return 0.0
    if old_value == 0:
        return 100.0 if new_value > 0 else 0.0
    change = ((new_value - old_value) / abs(old_value)) * 100
    if not _finite(change):
        logger.debug("percentage_change_out_of_range", old=old_value, new=new_value)
        return 0.0
    return _round2(change)


def sip_returns(
    monthly_investment: float, years: float, annual_return_percent: float
) -> GrowthProjection:
    """Project a monthly SIP compounded monthly (annuity due).

    A zero rate degenerates to the plain sum of instalments.
    """
    if not _finite(monthly_investment, years, annual_return_percent):
        logger.debug("sip_returns_non_finite")
        return _zero_projection()
    if years <= 0:
        return _zero_projection()

    monthly_rate = annual_return_percent / 12 / 100
    months = years * 12
    factor = _annuity_due_factor(monthly_rate, months)
    if factor is None:
        logger.debug("sip_returns_overflow", years=years, rate=annual_return_percent)
        return _zero_projection()
    return _projection(monthly_investment * factor, monthly_investment * months)


def lumpsum_returns(
    principal: float, years: float, annual_return_percent: float
) -> GrowthProjection:
    """Project a one-off investment compounded annually."""
    if not _finite(principal, years, annual_return_percent):
        logger.debug("lumpsum_returns_non_finite")
        return _zero_projection()
    if years <= 0:
        return _zero_projection(principal)

    # Losses beyond -100% floor at total loss
    growth = _power(max(1 + annual_return_percent / 100, 0.0), years)
    if growth is None:
        logger.debug("lumpsum_returns_overflow", years=years, rate=annual_return_percent)
        return _zero_projection()
    return _projection(principal * growth, principal)


def cagr(beginning_value: float, ending_value: float, years: float) -> float:
    """Compound Annual Growth Rate as a percentage with two decimals."""
    if not _finite(beginning_value, ending_value, years):
        return 0.0
    if beginning_value <= 0 or years <= 0 or ending_value < 0:
        return 0.0
    growth = _power(ending_value / beginning_value, 1 / years)
    if growth is None:
        logger.debug("cagr_out_of_range", begin=beginning_value, end=ending_value)
        return 0.0
    rate = (growth - 1) * 100
    return _round2(rate) if _finite(rate) else 0.0


def sip_schedule(
    monthly_investment: float, years: int, annual_return_percent: float
) -> list[YearlySnapshot]:
    """Year-end invested amount and accumulated value of a SIP.

    Stops at the first year whose value no longer fits in a float.
    """
    if not _finite(monthly_investment, years, annual_return_percent):
        return []
    monthly_rate = annual_return_percent / 12 / 100
    rows: list[YearlySnapshot] = []
    for year in range(1, int(years) + 1):
        months = year * 12
        factor = _annuity_due_factor(monthly_rate, months)
        value = monthly_investment * factor if factor is not None else math.inf
        if not _finite(value):
            logger.debug("sip_schedule_overflow", year=year)
            break
        rows.append(
            YearlySnapshot(
                year=year,
                invested=monthly_investment * months,
                value=round_half_up(value),
            )
        )
    return rows


def lumpsum_schedule(
    principal: float, years: int, annual_return_percent: float
) -> list[YearlySnapshot]:
    """Year-end value of a lumpsum investment."""
    if not _finite(principal, years, annual_return_percent):
        return []
    growth = max(1 + annual_return_percent / 100, 0.0)
    rows: list[YearlySnapshot] = []
    for year in range(1, int(years) + 1):
        compounded = _power(growth, year)
        if compounded is None or not _finite(principal * compounded):
            logger.debug("lumpsum_schedule_overflow", year=year)
            break
        rows.append(
            YearlySnapshot(
                year=year, invested=principal, value=round_half_up(principal * compounded)
            )
        )
    return rows


def inflation_adjusted_value(
    future_value: float, years: float, annual_inflation_percent: float
) -> float:
    """Discount a future value to today's money, compounding inflation monthly."""
    if not _finite(future_value, years, annual_inflation_percent):
        return 0.0
    base = 1 + annual_inflation_percent / 12 / 100
    if base <= 0:
        return 0.0
    discount = _power(base, years * 12)
    if not discount:
        logger.debug("inflation_adjusted_value_out_of_range", years=years)
        return 0.0
    adjusted = future_value / discount
    return round_half_up(adjusted) if _finite(adjusted) else 0.0


def required_monthly_investment(
    target_amount: float,
    years: float,
    annual_return_percent: float,
    current_savings: float = 0.0,
) -> GoalPlan:
    """Monthly SIP needed to reach ``target_amount`` in ``years``.

    Existing savings grow at the annual rate; the SIP covers the remainder
    and is never negative.
    """
    if not _finite(target_amount, years, annual_return_percent, current_savings):
        return GoalPlan(target_amount=0.0, monthly_investment=0.0, years=0.0)
    if years <= 0:
        return GoalPlan(
            target_amount=round_half_up(target_amount), monthly_investment=0.0, years=0.0
        )

    growth = _power(max(1 + annual_return_percent / 100, 0.0), years)
    factor = _annuity_due_factor(annual_return_percent / 12 / 100, years * 12)
    if growth is None or factor is None:
        logger.debug("required_monthly_investment_overflow", years=years)
        return GoalPlan(
            target_amount=round_half_up(target_amount), monthly_investment=0.0, years=years
        )
    shortfall = target_amount - current_savings * growth
    monthly = shortfall / factor if factor > 0 else 0.0
    if not _finite(monthly):
        monthly = 0.0
    return GoalPlan(
        target_amount=round_half_up(target_amount),
        monthly_investment=round_half_up(max(monthly, 0.0)),
        years=years,
    )



# --- Numeric helpers ---

def round_to_nearest(value: float, nearest: float = 0.05) -> float:
    if not _finite(value, nearest) or nearest == 0:
        return 0.0
    return round_half_up(value / nearest) * nearest


def average(numbers: Sequence[float]) -> float:
    if not numbers:
        return 0.0
    return sum(numbers) / len(numbers)


def median(numbers: Sequence[float]) -> float:
    if not numbers:
        return 0.0
    ordered = sorted(numbers)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return float(ordered[middle])


def standard_deviation(numbers: Sequence[float]) -> float:
    """Population standard deviation; fewer than two values give 0."""
    if len(numbers) < 2:
        return 0.0
    avg = average(numbers)
    return math.sqrt(average([(n - avg) ** 2 for n in numbers]))


def normalize_value(value: float, minimum: float, maximum: float) -> float:
    if minimum == maximum:
        return 1.0
    return (value - minimum) / (maximum - minimum)


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)
