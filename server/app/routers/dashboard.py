from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.dashboard.schemas import DashboardSummaryResponse, DueFromSebResponse, FundTransfersResponse
from app.dashboard.service import fetch_due_from_seb, fetch_fund_transfers, get_dashboard_summary
from app.db import get_db
from app.utils import ZERO

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummaryResponse)
def dashboard_summary(db: Session = Depends(get_db)):
    return get_dashboard_summary(db)


@router.get("/due-from-seb", response_model=DueFromSebResponse)
def due_from_seb(db: Session = Depends(get_db)):
    entries = fetch_due_from_seb(db)
    return {"entries": entries, "total": sum((entry.amount for entry in entries), ZERO)}


@router.get("/fund-transfers", response_model=FundTransfersResponse)
def fund_transfers(db: Session = Depends(get_db)):
    transfers = fetch_fund_transfers(db)
    return {"transfers": transfers, "total": sum((transfer.amount for transfer in transfers), ZERO)}
