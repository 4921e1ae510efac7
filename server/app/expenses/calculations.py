from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

from app.utils import ZERO, add_months, month_key, to_date, to_decimal, to_int

HUNDRED = Decimal("100")
UNCATEGORIZED = "Uncategorized"

EXPENSE_SEARCH_FIELDS = ("full_description", "account_name", "reference_number", "reference_no")
EXPENSE_SORT_FIELDS = ("expense_date", "account_name", "description", "amount")


class ExpenseTier(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    MINIMAL = "Minimal"


def classify_expense_amount(amount: Decimal) -> ExpenseTier:
    if amount >= 1000:
        return ExpenseTier.HIGH
    if amount >= 500:
        return ExpenseTier.MEDIUM
    if amount >= 100:
        return ExpenseTier.LOW
    return ExpenseTier.MINIMAL


@dataclass(frozen=True)
class Expense:
    id: int
    expense_date: Optional[date]
    original_date: Optional[str]
    account_name: Optional[str]
    description: Optional[str]
    reference_number: Optional[str]
    reference_no: Optional[str]
    full_description: Optional[str]
    amount: Decimal
    original_amount: Optional[str]
    entity_type: Optional[str]
    entity_id: Optional[str]
    created_at: Optional[datetime]
    branch_name: Optional[str]
    year: Optional[int]
    month: Optional[int]
    year_month: Optional[str]

    @property
    def amount_tier(self) -> ExpenseTier:
        return classify_expense_amount(self.amount)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Expense:
        return cls(
            id=to_int(row["id"]),
            expense_date=to_date(row.get("expense_date")),
            original_date=row.get("original_date"),
            account_name=row.get("account_name"),
            description=row.get("description"),
            reference_number=row.get("reference_number"),
            reference_no=row.get("reference_no"),
            full_description=row.get("full_description"),
            amount=to_decimal(row.get("amount")),
            original_amount=row.get("original_amount"),
            entity_type=row.get("entity_type"),
            entity_id=row.get("entity_id"),
            created_at=row.get("created_at"),
            branch_name=row.get("branch_name"),
            year=to_int(row.get("year")) or None,
            month=to_int(row.get("month")) or None,
            year_month=row.get("year_month"),
        )


@dataclass(frozen=True)
class AccountBreakdown:
    count: int
    total: Decimal


@dataclass(frozen=True)
class ExpenseSummary:
    total_expenses: Decimal
    expense_count: int
    daily_average: Decimal
    largest_expense: Decimal
    current_month_total: Decimal
    previous_month_total: Decimal
    monthly_change: Decimal
    monthly_expenses: Dict[str, Decimal] = field(default_factory=dict)
    account_breakdown: Dict[str, AccountBreakdown] = field(default_factory=dict)


def summarize_expenses(expenses: Iterable[Expense], as_of: date) -> ExpenseSummary:
    rows = list(expenses)
    total = sum((row.amount for row in rows), ZERO)

    monthly: Dict[str, Decimal] = {}
    accounts: Dict[str, list] = {}
    expense_days = set()
    for row in rows:
        if row.year_month:
            monthly[row.year_month] = monthly.get(row.year_month, ZERO) + row.amount
        bucket = accounts.setdefault(row.account_name or UNCATEGORIZED, [0, ZERO])
        bucket[0] += 1
        bucket[1] += row.amount
        if row.expense_date is not None:
            expense_days.add(row.expense_date)

    current_total = monthly.get(month_key(as_of), ZERO)
    previous_total = monthly.get(month_key(add_months(as_of, -1)), ZERO)
    # a month-over-month change is only meaningful against a positive base
    monthly_change = (
        (current_total - previous_total) / previous_total * HUNDRED if previous_total > 0 else ZERO
    )

    return ExpenseSummary(
        total_expenses=total,
        expense_count=len(rows),
        daily_average=total / len(expense_days) if expense_days else ZERO,
        largest_expense=max([row.amount for row in rows] + [ZERO]),
        current_month_total=current_total,
        previous_month_total=previous_total,
        monthly_change=monthly_change,
        monthly_expenses=dict(sorted(monthly.items(), reverse=True)),
        account_breakdown={
            name: AccountBreakdown(count=count, total=amount) for name, (count, amount) in accounts.items()
        },
    )
