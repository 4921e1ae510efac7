from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.config import settings
from app.db import get_db
from app.orders.calculations import summarize_order_groups, summarize_orders
from app.orders.export import ORDER_EXPORT_COLUMNS, flatten_order_groups, rows_to_csv
from app.orders.schemas import OrderListResponse, OrdersSummaryResponse
from app.orders.service import fetch_transfer_order_lines, get_order_groups

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse)
def list_order_groups(db: Session = Depends(get_db)):
    groups = get_order_groups(db)
    return {"groups": groups, "totals": summarize_order_groups(groups, settings.vat_rate)}


@router.get("/summary", response_model=OrdersSummaryResponse)
def orders_summary(db: Session = Depends(get_db)):
    return summarize_orders(fetch_transfer_order_lines(db))


@router.get("/export")
def export_orders(db: Session = Depends(get_db)):
    rows = flatten_order_groups(get_order_groups(db))
    return Response(
        content=rows_to_csv(rows, ORDER_EXPORT_COLUMNS),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="transfer_orders.csv"'},
    )
