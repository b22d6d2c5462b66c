"""CLI entry point for fincore."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date

import click

from fincore import calculator, currency, dates, formatters
from fincore.logging_config import configure_logging, get_logger
from fincore.models import DEFAULT_CURRENCY, DEFAULT_LOCALE, GrowthProjection, YearlySnapshot

logger = get_logger(__name__)


@dataclass(slots=True)
class CliOptions:
    currency_code: str
    locale: str
    output_format: str


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise click.BadParameter(
            f"Invalid date format: {value!r}. Use YYYY-MM-DD."
        ) from exc


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        raise click.BadParameter(f"{name} must be positive.")


def _emit(
    opts: CliOptions,
    title: str,
    projection: GrowthProjection,
    schedule: list[YearlySnapshot] | None,
) -> None:
    if opts.output_format == "json":
        click.echo(
            formatters.format_json(projection, opts.currency_code, opts.locale, schedule)
        )
    elif opts.output_format == "csv":
        click.echo(formatters.format_csv(projection, schedule), nl=False)
    else:
        click.echo(
            formatters.format_table(
                title, projection, opts.currency_code, opts.locale, schedule
            ),
            nl=False,
        )


@click.group()
@click.option(
    "--currency",
    "currency_code",
    default=DEFAULT_CURRENCY,
    envvar="FINCORE_CURRENCY",
    show_default=True,
    help="Currency code used for display",
)
@click.option(
    "--locale",
    default=DEFAULT_LOCALE,
    envvar="FINCORE_LOCALE",
    show_default=True,
    help="Locale for number formatting (e.g. en-IN, en-US)",
)
@click.option(
    "--output",
    "output_format",
    default="table",
    type=click.Choice(["table", "json", "csv"]),
    help="Output format",
)
@click.option(
    "--log-level",
    default="WARNING",
    envvar="FINCORE_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (logs go to stderr)",
)
@click.pass_context
def main(
    ctx: click.Context,
    currency_code: str,
    locale: str,
    output_format: str,
    log_level: str,
) -> None:
    """Investment growth projections and financial date helpers."""
    configure_logging(log_level)
    ctx.obj = CliOptions(
        currency_code=currency_code.strip().upper(),
        locale=locale,
        output_format=output_format,
    )


@main.command()
@click.option("--monthly", type=float, required=True, help="Monthly instalment")
@click.option("--years", type=int, required=True, help="Investment horizon in years")
@click.option("--rate", type=float, required=True, help="Expected annual return (%)")
@click.option("--inflation", type=float, default=None, help="Annual inflation (%)")
@click.option("--schedule", "show_schedule", is_flag=True, help="Include a yearly breakdown")
@click.pass_obj
def sip(
    opts: CliOptions,
    monthly: float,
    years: int,
    rate: float,
    inflation: float | None,
    show_schedule: bool,
) -> None:
    """Project a monthly systematic investment plan."""
    _require_positive("--monthly", monthly)
    _require_positive("--years", years)

    projection = calculator.sip_returns(monthly, years, rate)
    logger.info("sip_projection", monthly=monthly, years=years, rate=rate)
    schedule = calculator.sip_schedule(monthly, years, rate) if show_schedule else None
    _emit(opts, "SIP projection", projection, schedule)

    if inflation is not None and opts.output_format == "table":
        real = calculator.inflation_adjusted_value(projection.future_value, years, inflation)
        click.echo(
            f"Inflation-adjusted value: "
            f"{currency.format_currency(real, opts.currency_code, opts.locale)}"
        )


@main.command()
@click.option("--amount", type=float, required=True, help="One-off investment")
@click.option("--years", type=int, required=True, help="Investment horizon in years")
@click.option("--rate", type=float, required=True, help="Expected annual return (%)")
@click.option("--schedule", "show_schedule", is_flag=True, help="Include a yearly breakdown")
@click.pass_obj
def lumpsum(
    opts: CliOptions, amount: float, years: int, rate: float, show_schedule: bool
) -> None:
    """Project a one-off investment compounded annually."""
    _require_positive("--amount", amount)
    _require_positive("--years", years)

    projection = calculator.lumpsum_returns(amount, years, rate)
    schedule = (
        calculator.lumpsum_schedule(amount, years, rate) if show_schedule else None
    )
    _emit(opts, "Lumpsum projection", projection, schedule)


@main.command()
@click.option("--start-value", type=float, required=True, help="Value at start")
@click.option("--end-value", type=float, required=True, help="Value at end")
@click.option("--years", type=float, default=None, help="Holding period in years")
@click.option("--start-date", default=None, help="Start date (YYYY-MM-DD)")
@click.option("--end-date", default=None, help="End date (YYYY-MM-DD)")
@click.pass_obj
def cagr(
    opts: CliOptions,
    start_value: float,
    end_value: float,
    years: float | None,
    start_date: str | None,
    end_date: str | None,
) -> None:
    """Compound annual growth rate between two values."""
    if years is None:
        if not (start_date and end_date):
            raise click.BadParameter("Give --years or both --start-date and --end-date.")
        sd, ed = _parse_date(start_date), _parse_date(end_date)
        if ed <= sd:
            raise click.BadParameter("End date must be after start date.")
        years = (ed - sd).days / 365.25

    _require_positive("--start-value", start_value)
    _require_positive("--years", years)

    rate = calculator.cagr(start_value, end_value, years)
    if opts.output_format == "json":
        click.echo(json.dumps({"years": round(years, 2), "cagr_percent": rate}))
    elif opts.output_format == "csv":
        click.echo("years,cagr_percent")
        click.echo(f"{years:.2f},{rate:.2f}")
    else:
        click.echo(f"CAGR over {years:.2f} years: {currency.format_percentage(rate)}")


@main.command()
@click.argument("old_value")
@click.argument("new_value")
@click.pass_obj
def change(opts: CliOptions, old_value: str, new_value: str) -> None:
    """Percentage change between two amounts (currency strings accepted)."""
    old = currency.parse_currency(old_value)
    new = currency.parse_currency(new_value)
    pct = calculator.percentage_change(old, new)
    if opts.output_format == "json":
        click.echo(json.dumps({"old": old, "new": new, "change_percent": pct}))
    elif opts.output_format == "csv":
        click.echo("old,new,change_percent")
        click.echo(f"{old:.2f},{new:.2f},{pct:.2f}")
    else:
        click.echo(
            f"{currency.format_currency(old, opts.currency_code, opts.locale)} -> "
            f"{currency.format_currency(new, opts.currency_code, opts.locale)}: "
            f"{currency.format_percentage_change(pct)}"
        )


@main.command()
@click.option("--target", type=float, required=True, help="Goal amount")
@click.option("--years", type=float, required=True, help="Years to reach the goal")
@click.option("--rate", type=float, required=True, help="Expected annual return (%)")
@click.option("--savings", type=float, default=0.0, help="Existing savings")
@click.pass_obj
def goal(
    opts: CliOptions, target: float, years: float, rate: float, savings: float
) -> None:
    """Monthly investment needed to reach a target amount."""
    _require_positive("--target", target)
    _require_positive("--years", years)

    plan = calculator.required_monthly_investment(target, years, rate, savings)
    if opts.output_format == "json":
        click.echo(
            json.dumps({
                "target_amount": plan.target_amount,
                "monthly_investment": plan.monthly_investment,
                "years": plan.years,
            })
        )
    elif opts.output_format == "csv":
        click.echo("target_amount,monthly_investment,years")
        click.echo(f"{plan.target_amount:.2f},{plan.monthly_investment:.2f},{plan.years:g}")
    else:
        click.echo(
            f"Invest {currency.format_currency(plan.monthly_investment, opts.currency_code, opts.locale)}"
            f" per month for {plan.years:g} years to reach "
            f"{currency.format_currency(plan.target_amount, opts.currency_code, opts.locale)}"
        )


@main.command()
@click.argument("on_date", required=False)
def fy(on_date: str | None) -> None:
    """Financial year (April to March) containing a date, today by default."""
    d = _parse_date(on_date) if on_date else None
    click.echo(dates.financial_year(d))


if __name__ == "__main__":
    main()
