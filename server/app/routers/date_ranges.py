from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from app.date_ranges import DatePreset, resolve_date_range

router = APIRouter(prefix="/api/date-ranges", tags=["date-ranges"])


class DatePresetResponse(BaseModel):
    slug: str
    label: str


class DateRangeResponse(BaseModel):
    preset: str
    start: date
    end: date


@router.get("", response_model=List[DatePresetResponse])
def list_presets():
    return [{"slug": preset.slug, "label": preset.value} for preset in DatePreset]


@router.get("/{preset}", response_model=DateRangeResponse)
def resolve_preset(
    preset: str,
    today: Optional[date] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
):
    try:
        resolved = DatePreset.parse(preset)
        date_range = resolve_date_range(resolved, today=today, start=start, end=end)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"preset": resolved.slug, "start": date_range.start, "end": date_range.end}
