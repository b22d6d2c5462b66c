"""Tests for pure calculation functions."""

import math

import pytest

from fincore.calculator import (
    average,
    cagr,
    clamp,
    inflation_adjusted_value,
    lumpsum_returns,
    lumpsum_schedule,
    median,
    normalize_value,
    percentage_change,
    required_monthly_investment,
    round_half_up,
    round_to_nearest,
    sip_returns,
    sip_schedule,
    standard_deviation,
)


class TestPercentageChange:
    def test_gain(self):
        assert percentage_change(100, 150) == 50

    def test_loss(self):
        assert percentage_change(200, 150) == -25

    def test_negative_baseline_uses_magnitude(self):
        assert percentage_change(-100, -50) == 50

    def test_rounded_to_two_decimals(self):
        assert percentage_change(3, 4) == 33.33

    def test_zero_baseline_positive(self):
        assert percentage_change(0, 50) == 100

    def test_zero_baseline_zero(self):
        assert percentage_change(0, 0) == 0

    def test_zero_baseline_negative(self):
        assert percentage_change(0, -5) == 0

    def test_nan_input(self):
        assert percentage_change(math.nan, 10) == 0

    def test_overflowing_result(self):
        assert percentage_change(1e-320, 1e308) == 0

    def test_tie_rounds_half_up(self):
        # 1 on 800 is a 0.125% change
        assert percentage_change(800, 801) == 0.13

    def test_negative_tie_rounds_away_from_zero(self):
        assert percentage_change(800, 799) == -0.13


class TestSipReturns:
    def test_total_investment(self):
        result = sip_returns(5000, 10, 12)
        assert result.total_investment == 5000 * 120

    def test_future_value(self):
        # 5000/month at 12% for 10 years, instalments at the start of each month
        result = sip_returns(5000, 10, 12)
        assert result.future_value == pytest.approx(1161695, abs=1)

    def test_values_are_consistent(self):
        result = sip_returns(5000, 10, 12)
        assert result.future_value == pytest.approx(
            result.total_investment + result.estimated_returns, abs=1
        )
        assert result.absolute_return_percent == pytest.approx(
            result.estimated_returns / result.total_investment * 100, rel=1e-4
        )

    def test_whole_units(self):
        result = sip_returns(1234, 7, 9.5)
        assert result.future_value == int(result.future_value)
        assert result.estimated_returns == int(result.estimated_returns)

    def test_zero_rate_is_linear(self):
        result = sip_returns(1000, 2, 0)
        assert result.future_value == 24000
        assert result.estimated_returns == 0
        assert result.absolute_return_percent == 0

    def test_zero_investment(self):
        result = sip_returns(0, 5, 12)
        assert result.future_value == 0
        assert result.absolute_return_percent == 0.0

    def test_zero_years(self):
        result = sip_returns(1000, 0, 12)
        assert result.total_investment == 0
        assert result.future_value == 0

    def test_non_finite(self):
        result = sip_returns(math.inf, 10, 12)
        assert result.future_value == 0

    def test_overflowing_growth(self):
        result = sip_returns(1000, 100, 1e6)
        assert result.future_value == 0
        assert result.estimated_returns == 0
        assert result.absolute_return_percent == 0

    def test_overflowing_total(self):
        result = sip_returns(1e308, 10, 0)
        assert result.future_value == 0


class TestLumpsumReturns:
    def test_future_value(self):
        result = lumpsum_returns(100000, 10, 12)
        assert result.future_value == round_half_up(100000 * 1.12**10)
        assert result.future_value == pytest.approx(310585, abs=1)

    def test_one_year(self):
        result = lumpsum_returns(1000, 1, 10)
        assert result.future_value == 1100
        assert result.total_investment == 1000
        assert result.estimated_returns == 100
        assert result.absolute_return_percent == pytest.approx(10.0)

    def test_zero_principal(self):
        result = lumpsum_returns(0, 10, 12)
        assert result.absolute_return_percent == 0.0

    def test_total_loss_floor(self):
        result = lumpsum_returns(1000, 2.5, -150)
        assert result.future_value == 0
        assert result.estimated_returns == -1000

    def test_overflowing_growth(self):
        result = lumpsum_returns(1000, 1000, 1e4)
        assert result.future_value == 0
        assert result.absolute_return_percent == 0

    def test_zero_years_keeps_principal(self):
        result = lumpsum_returns(1000, 0, 12)
        assert result.future_value == 1000
        assert result.estimated_returns == 0


class TestCagr:
    def test_doubling_in_one_year(self):
        assert cagr(100, 200, 1) == 100

    def test_two_years(self):
        # 100 to 121 in 2 years = 10%
        assert cagr(100, 121, 2) == 10.0

    def test_decline(self):
        assert cagr(100, 50, 1) == -50

    def test_zero_beginning_value(self):
        assert cagr(0, 200, 1) == 0

    def test_zero_years(self):
        assert cagr(100, 200, 0) == 0

    def test_negative_ending_value(self):
        assert cagr(100, -50, 2) == 0

    def test_overflowing_ratio(self):
        assert cagr(1e-300, 1e300, 1) == 0

    def test_overflowing_power(self):
        assert cagr(1, 1e200, 0.1) == 0


class TestSchedules:
    def test_sip_schedule_zero_rate(self):
        rows = sip_schedule(1000, 2, 0)
        assert [(r.year, r.invested, r.value) for r in rows] == [
            (1, 12000, 12000),
            (2, 24000, 24000),
        ]

    def test_sip_schedule_last_row_matches_projection(self):
        rows = sip_schedule(5000, 10, 12)
        assert len(rows) == 10
        assert rows[-1].value == sip_returns(5000, 10, 12).future_value

    def test_lumpsum_schedule(self):
        rows = lumpsum_schedule(1000, 2, 10)
        assert [r.value for r in rows] == [1100, 1210]
        assert all(r.invested == 1000 for r in rows)

    def test_empty_for_zero_years(self):
        assert sip_schedule(1000, 0, 12) == []


class TestInflationAdjustedValue:
    def test_no_inflation(self):
        assert inflation_adjusted_value(1000, 5, 0) == 1000

    def test_discounts(self):
        assert inflation_adjusted_value(1000, 10, 6) < 1000

    def test_invalid_base(self):
        assert inflation_adjusted_value(1000, 1, -1300) == 0


class TestRequiredMonthlyInvestment:
    def test_zero_rate(self):
        plan = required_monthly_investment(24000, 2, 0)
        assert plan.monthly_investment == 1000

    def test_savings_reduce_instalment(self):
        plan = required_monthly_investment(24000, 2, 0, current_savings=12000)
        assert plan.monthly_investment == 500

    def test_savings_exceed_target(self):
        plan = required_monthly_investment(10000, 5, 10, current_savings=50000)
        assert plan.monthly_investment == 0

    def test_inverse_of_sip(self):
        target = sip_returns(5000, 10, 12).future_value
        plan = required_monthly_investment(target, 10, 12)
        assert plan.monthly_investment == pytest.approx(5000, abs=1)

    def test_zero_years(self):
        plan = required_monthly_investment(10000, 0, 10)
        assert plan.monthly_investment == 0


class TestNumericHelpers:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2

    def test_round_to_nearest(self):
        assert round_to_nearest(1.23) == pytest.approx(1.25)
        assert round_to_nearest(17, 5) == 15

    def test_average(self):
        assert average([1, 2, 3]) == 2
        assert average([]) == 0

    def test_median(self):
        assert median([3, 1, 2]) == 2
        assert median([4, 1, 3, 2]) == 2.5
        assert median([]) == 0

    def test_standard_deviation(self):
        assert standard_deviation([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)
        assert standard_deviation([5]) == 0

    def test_normalize_value(self):
        assert normalize_value(5, 0, 10) == 0.5
        assert normalize_value(5, 5, 5) == 1

    def test_clamp(self):
        assert clamp(15, 0, 10) == 10
        assert clamp(-1, 0, 10) == 0
        assert clamp(5, 0, 10) == 5
