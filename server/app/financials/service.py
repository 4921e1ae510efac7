from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from app.datasource import fetch_view_rows
from app.financials.calculations import FinancialSummary
from app.models import financial_summary_view


def fetch_monthly_financials(db: Session) -> List[FinancialSummary]:
    view = financial_summary_view
    rows = fetch_view_rows(
        db,
        view,
        "financial summary",
        order_by=[view.c.month.desc()],
    )
    return [FinancialSummary.from_row(row) for row in rows]
