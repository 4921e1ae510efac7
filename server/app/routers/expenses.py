from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.expenses.calculations import EXPENSE_SEARCH_FIELDS, EXPENSE_SORT_FIELDS, summarize_expenses
from app.expenses.schemas import ExpenseRow, ExpenseSummaryResponse, ExpensesResponse
from app.expenses.service import fetch_expenses
from app.table_views import TableView, apply_table_view
from app.utils import ZERO

router = APIRouter(prefix="/api/expenses", tags=["expenses"])


@router.get("", response_model=ExpensesResponse)
def list_expenses(
    search: str = Query("", max_length=200),
    month: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}$"),
    sort_field: str = Query("expense_date"),
    sort_direction: str = Query("desc", pattern="^(asc|desc)$"),
    as_of: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    expenses = fetch_expenses(db)
    view = TableView(sort_field=sort_field, sort_direction=sort_direction, search=search, month=month)
    try:
        rows = apply_table_view(
            expenses, view, EXPENSE_SEARCH_FIELDS, month_field="year_month", sortable_fields=EXPENSE_SORT_FIELDS
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    summary = summarize_expenses(expenses, as_of or date.today())
    return ExpensesResponse(
        expenses=[ExpenseRow.model_validate(row) for row in rows],
        filtered_count=len(rows),
        filtered_total=sum((row.amount for row in rows), ZERO),
        available_months=list(summary.monthly_expenses.keys()),
        summary=ExpenseSummaryResponse.model_validate(summary),
    )
