from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.date_ranges import DatePreset, resolve_date_range
from app.db import get_db
from app.profit.calculations import summarize_profit_groups
from app.profit.schemas import ProfitAnalysisResponse
from app.profit.service import get_profit_groups

router = APIRouter(prefix="/api/profit-analysis", tags=["profit"])


@router.get("", response_model=ProfitAnalysisResponse)
def profit_analysis(
    preset: Optional[str] = Query(None, description="Date preset label or slug, e.g. this_month"),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    label = "all"
    if preset is not None or (start is not None and end is not None):
        try:
            resolved = DatePreset.parse(preset) if preset is not None else DatePreset.CUSTOM
            date_range = resolve_date_range(resolved, start=start, end=end)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        label = resolved.slug
        start, end = date_range.start, date_range.end
    elif start is not None or end is not None:
        # a single bound leaves the other side open
        label = DatePreset.CUSTOM.slug

    groups = get_profit_groups(db, start, end)
    return {
        "preset": label,
        "start": start,
        "end": end,
        "groups": groups,
        "totals": summarize_profit_groups(groups),
    }
