"""Output formatters for table, JSON, and CSV."""

from __future__ import annotations

import csv
import io
import json
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from fincore.currency import format_currency, format_percentage_change
from fincore.models import DEFAULT_CURRENCY, DEFAULT_LOCALE, GrowthProjection, YearlySnapshot


def _fmt_pct(val: float, plus_sign: bool = True) -> str:
    """Format a percentage value with 2 decimal places."""
    if plus_sign:
        return format_percentage_change(val)
    return f"{val:.2f}%"


def format_table(
    title: str,
    projection: GrowthProjection,
    currency_code: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    schedule: list[YearlySnapshot] | None = None,
) -> str:
    """Format a projection (and optional yearly schedule) as a Rich table."""
    buf = io.StringIO()
    rich_console = Console(file=buf, width=100, no_color=True)

    def money(value: float) -> str:
        return format_currency(value, currency_code, locale)

    summary = Table(title=title, box=box.SIMPLE_HEAD, pad_edge=False, show_header=False)
    summary.add_column("Metric", style="bold")
    summary.add_column("Value", justify="right")
    summary.add_row("Total investment", money(projection.total_investment))
    summary.add_row("Estimated returns", money(projection.estimated_returns))
    summary.add_row("Future value", money(projection.future_value))
    summary.add_row("Absolute return", _fmt_pct(projection.absolute_return_percent))
    rich_console.print(summary)

    if schedule:
        table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
        table.add_column("Year", justify="right")
        table.add_column("Invested", justify="right")
        table.add_column("Value", justify="right")
        table.add_column("Gain", justify="right")
        for row in schedule:
            table.add_row(
                str(row.year),
                money(row.invested),
                money(row.value),
                money(row.value - row.invested),
            )
        rich_console.print(table)

    return buf.getvalue()


def _projection_dict(projection: GrowthProjection) -> dict[str, Any]:
    return {
        "future_value": projection.future_value,
        "total_investment": projection.total_investment,
        "estimated_returns": projection.estimated_returns,
        "absolute_return_percent": round(projection.absolute_return_percent, 2),
    }


def format_json(
    projection: GrowthProjection,
    currency_code: str = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
    schedule: list[YearlySnapshot] | None = None,
) -> str:
    """Format a projection as JSON, with display strings alongside raw numbers."""
    data: dict[str, Any] = {
        "currency": currency_code,
        "locale": locale,
        **_projection_dict(projection),
        "display": {
            "future_value": format_currency(projection.future_value, currency_code, locale),
            "total_investment": format_currency(
                projection.total_investment, currency_code, locale
            ),
            "estimated_returns": format_currency(
                projection.estimated_returns, currency_code, locale
            ),
        },
    }
    if schedule:
        data["schedule"] = [
            {"year": r.year, "invested": r.invested, "value": r.value} for r in schedule
        ]
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_csv(
    projection: GrowthProjection,
    schedule: list[YearlySnapshot] | None = None,
) -> str:
    """Format a projection as CSV: the summary row, or one row per year."""
    buf = io.StringIO()

    if schedule:
        writer = csv.DictWriter(buf, fieldnames=["year", "invested", "value", "gain"])
        writer.writeheader()
        for r in schedule:
            writer.writerow({
                "year": r.year,
                "invested": f"{r.invested:.2f}",
                "value": f"{r.value:.2f}",
                "gain": f"{r.value - r.invested:.2f}",
            })
        return buf.getvalue()

    fields = list(_projection_dict(projection))
    writer = csv.DictWriter(buf, fieldnames=fields)
    writer.writeheader()
    writer.writerow({k: f"{v:.2f}" for k, v in _projection_dict(projection).items()})
    return buf.getvalue()
