from fastapi import APIRouter

from app.config import settings
from app.dashboard.schemas import RefreshIntervalsResponse

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    return {"status": "ok", "branch": settings.branch_name}


@router.get("/api/refresh-intervals", response_model=RefreshIntervalsResponse)
def refresh_intervals():
    return {
        "branch_name": settings.branch_name,
        "currency": settings.currency,
        "intervals": settings.refresh_intervals,
    }
