from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.financials.calculations import MarginTier


class FinancialSummaryResponse(BaseModel):
    month: str
    month_date: Optional[date] = None
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
    margin_tier: MarginTier

    model_config = ConfigDict(from_attributes=True)


class PeriodTotalsResponse(BaseModel):
    revenue: Decimal
    cogs: Decimal
    gross_profit: Decimal
    expenses: Decimal
    net_profit: Decimal

    model_config = ConfigDict(from_attributes=True)


class FinancialMetricsResponse(BaseModel):
    total_revenue: Decimal
    total_cogs: Decimal
    total_gross_profit: Decimal
    total_expenses: Decimal
    total_net_profit: Decimal
    gross_margin: Decimal
    net_margin: Decimal
    best_month: Optional[str] = None
    worst_month: Optional[str] = None
    current_month: Optional[FinancialSummaryResponse] = None
    previous_month: Optional[FinancialSummaryResponse] = None
    year_to_date: PeriodTotalsResponse

    model_config = ConfigDict(from_attributes=True)


class FinancialsResponse(BaseModel):
    months: List[FinancialSummaryResponse]
    available_months: List[str]
    metrics: FinancialMetricsResponse
