from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from app.expenses.calculations import ExpenseTier


class ExpenseRow(BaseModel):
    id: int
    expense_date: Optional[date] = None
    original_date: Optional[str] = None
    account_name: Optional[str] = None
    description: Optional[str] = None
    reference_number: Optional[str] = None
    reference_no: Optional[str] = None
    full_description: Optional[str] = None
    amount: Decimal
    original_amount: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None
    created_at: Optional[datetime] = None
    branch_name: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = None
    year_month: Optional[str] = None
    amount_tier: ExpenseTier

    model_config = ConfigDict(from_attributes=True)


class AccountBreakdownResponse(BaseModel):
    count: int
    total: Decimal

    model_config = ConfigDict(from_attributes=True)


class ExpenseSummaryResponse(BaseModel):
    total_expenses: Decimal
    expense_count: int
    daily_average: Decimal
    largest_expense: Decimal
    current_month_total: Decimal
    previous_month_total: Decimal
    monthly_change: Decimal
    monthly_expenses: Dict[str, Decimal]
    account_breakdown: Dict[str, AccountBreakdownResponse]

    model_config = ConfigDict(from_attributes=True)


class ExpensesResponse(BaseModel):
    expenses: List[ExpenseRow]
    filtered_count: int
    filtered_total: Decimal
    available_months: List[str]
    summary: ExpenseSummaryResponse
