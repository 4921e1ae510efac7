"""Monthly P&L rows and their rollups.

Rollups add up the monthly amounts and then derive margins from the summed
totals. Monthly percentages are never averaged.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from app.utils import ZERO, add_months, month_key, to_date, to_decimal, to_int

HUNDRED = Decimal("100")

ROLLUP_ALL = "all"
ROLLUP_YTD = "ytd"


def ratio_pct(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return ZERO
    return numerator / denominator * HUNDRED


class MarginTier(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    LOW = "Low"
    LOSS = "Loss"


def classify_margin(margin_pct: Decimal) -> MarginTier:
    if margin_pct >= 15:
        return MarginTier.EXCELLENT
    if margin_pct >= 8:
        return MarginTier.GOOD
    if margin_pct >= 0:
        return MarginTier.LOW
    return MarginTier.LOSS


@dataclass(frozen=True)
class FinancialSummary:
    month: str
    month_date: Optional[date]
    invoice_count: int
    total_sales: Decimal
    total_sales_with_vat: Decimal
    cost_of_goods_sold: Decimal
    gross_profit: Decimal
    avg_profit_margin: Decimal
    expense_count: int
    operating_expenses: Decimal
    net_profit: Decimal
    net_profit_margin: Decimal
    gross_profit_margin: Decimal
    expense_ratio: Decimal

    @property
    def margin_tier(self) -> MarginTier:
        return classify_margin(self.net_profit_margin)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> FinancialSummary:
        return cls(
            month=str(row["month"]),
            month_date=to_date(row.get("month_date")),
            invoice_count=to_int(row.get("invoice_count")),
            total_sales=to_decimal(row.get("total_sales")),
            total_sales_with_vat=to_decimal(row.get("total_sales_with_vat")),
            cost_of_goods_sold=to_decimal(row.get("cost_of_goods_sold")),
            gross_profit=to_decimal(row.get("gross_profit")),
            avg_profit_margin=to_decimal(row.get("avg_profit_margin")),
            expense_count=to_int(row.get("expense_count")),
            operating_expenses=to_decimal(row.get("operating_expenses")),
            net_profit=to_decimal(row.get("net_profit")),
            net_profit_margin=to_decimal(row.get("net_profit_margin")),
            gross_profit_margin=to_decimal(row.get("gross_profit_margin")),
            expense_ratio=to_decimal(row.get("expense_ratio")),
        )


@dataclass(frozen=True)
class PeriodTotals:
    revenue: Decimal
    cogs: Decimal
    gross_profit: Decimal
    expenses: Decimal
    net_profit: Decimal


@dataclass(frozen=True)
class FinancialMetrics:
    total_revenue: Decimal
    total_cogs: Decimal
    total_gross_profit: Decimal
    total_expenses: Decimal
    total_net_profit: Decimal
    gross_margin: Decimal
    net_margin: Decimal
    best_month: Optional[str]
    worst_month: Optional[str]
    current_month: Optional[FinancialSummary]
    previous_month: Optional[FinancialSummary]
    year_to_date: PeriodTotals


def _sum(rows: Sequence[FinancialSummary], field: str) -> Decimal:
    return sum((getattr(row, field) for row in rows), ZERO)


def aggregate_months(months: Iterable[FinancialSummary], label: str) -> FinancialSummary:
    rows = list(months)
    total_sales = _sum(rows, "total_sales")
    gross_profit = _sum(rows, "gross_profit")
    operating_expenses = _sum(rows, "operating_expenses")
    net_profit = _sum(rows, "net_profit")
    gross_profit_margin = ratio_pct(gross_profit, total_sales)
    return FinancialSummary(
        month=label,
        month_date=None,
        invoice_count=sum(row.invoice_count for row in rows),
        total_sales=total_sales,
        total_sales_with_vat=_sum(rows, "total_sales_with_vat"),
        cost_of_goods_sold=_sum(rows, "cost_of_goods_sold"),
        gross_profit=gross_profit,
        # no per-invoice detail at this level; the summed gross margin stands in
        avg_profit_margin=gross_profit_margin,
        expense_count=sum(row.expense_count for row in rows),
        operating_expenses=operating_expenses,
        net_profit=net_profit,
        net_profit_margin=ratio_pct(net_profit, total_sales),
        gross_profit_margin=gross_profit_margin,
        expense_ratio=ratio_pct(operating_expenses, total_sales),
    )


def months_in_year(months: Iterable[FinancialSummary], year: int) -> List[FinancialSummary]:
    prefix = f"{year:04d}-"
    return [row for row in months if row.month.startswith(prefix)]


def rollup_financials(
    months: Sequence[FinancialSummary],
    selection: str,
    as_of: date,
) -> Optional[FinancialSummary]:
    """Summary for ``all``, ``ytd`` or a single ``YYYY-MM`` month.

    A month with no row returns None.
    """
    if selection == ROLLUP_ALL:
        return aggregate_months(months, "All Time")
    if selection == ROLLUP_YTD:
        return aggregate_months(months_in_year(months, as_of.year), f"Year {as_of.year}")
    for row in months:
        if row.month == selection:
            return row
    return None


def _period_totals(rows: Sequence[FinancialSummary]) -> PeriodTotals:
    return PeriodTotals(
        revenue=_sum(rows, "total_sales"),
        cogs=_sum(rows, "cost_of_goods_sold"),
        gross_profit=_sum(rows, "gross_profit"),
        expenses=_sum(rows, "operating_expenses"),
        net_profit=_sum(rows, "net_profit"),
    )


def compute_financial_metrics(months: Sequence[FinancialSummary], as_of: date) -> FinancialMetrics:
    totals = _period_totals(months)

    ranked = sorted(months, key=lambda row: row.net_profit, reverse=True)
    current_key = month_key(as_of)
    previous_key = month_key(add_months(as_of, -1))
    by_month = {row.month: row for row in months}

    return FinancialMetrics(
        total_revenue=totals.revenue,
        total_cogs=totals.cogs,
        total_gross_profit=totals.gross_profit,
        total_expenses=totals.expenses,
        total_net_profit=totals.net_profit,
        gross_margin=ratio_pct(totals.gross_profit, totals.revenue),
        net_margin=ratio_pct(totals.net_profit, totals.revenue),
        best_month=ranked[0].month if ranked else None,
        worst_month=ranked[-1].month if ranked else None,
        current_month=by_month.get(current_key),
        previous_month=by_month.get(previous_key),
        year_to_date=_period_totals(months_in_year(months, as_of.year)),
    )
