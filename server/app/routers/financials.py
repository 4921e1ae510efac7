from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db import get_db
from app.financials.calculations import compute_financial_metrics, rollup_financials
from app.financials.schemas import FinancialMetricsResponse, FinancialSummaryResponse, FinancialsResponse
from app.financials.service import fetch_monthly_financials

router = APIRouter(prefix="/api/financials", tags=["financials"])


@router.get("", response_model=FinancialsResponse)
def financials_overview(
    as_of: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    today = as_of or date.today()
    months = fetch_monthly_financials(db)
    return FinancialsResponse(
        months=[FinancialSummaryResponse.model_validate(row) for row in months],
        available_months=[row.month for row in months],
        metrics=FinancialMetricsResponse.model_validate(compute_financial_metrics(months, today)),
    )


@router.get("/rollup", response_model=FinancialSummaryResponse)
def financials_rollup(
    selection: str = Query("all", pattern=r"^(all|ytd|\d{4}-\d{2})$"),
    as_of: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    today = as_of or date.today()
    summary = rollup_financials(fetch_monthly_financials(db), selection, today)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"No financial summary for {selection}.")
    return FinancialSummaryResponse.model_validate(summary)
