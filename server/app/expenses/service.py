from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from app.datasource import fetch_view_rows
from app.expenses.calculations import Expense
from app.models import expenses_view


def fetch_expenses(db: Session) -> List[Expense]:
    view = expenses_view
    rows = fetch_view_rows(
        db,
        view,
        "SEB expenses",
        order_by=[view.c.expense_date.desc(), view.c.amount.desc()],
    )
    return [Expense.from_row(row) for row in rows]
