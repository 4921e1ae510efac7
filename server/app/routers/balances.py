from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.balances.calculations import (
    CUSTOMER_SEARCH_FIELDS,
    CUSTOMER_SORT_FIELDS,
    VENDOR_SEARCH_FIELDS,
    VENDOR_SORT_FIELDS,
    active_vendor_balances,
    summarize_customer_balances,
    summarize_vendor_balances,
)
from app.balances.schemas import CustomerBalancesResponse, VendorBalancesResponse
from app.balances.service import fetch_customer_balances, fetch_vendor_balances
from app.db import get_db
from app.table_views import TableView, apply_table_view

router = APIRouter(prefix="/api/balances", tags=["balances"])


@router.get("/customers", response_model=CustomerBalancesResponse)
def customer_balances(
    search: str = Query("", max_length=200),
    sort_field: str = Query("total_balance"),
    sort_direction: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    balances = fetch_customer_balances(db)
    view = TableView(sort_field=sort_field, sort_direction=sort_direction, search=search)
    try:
        rows = apply_table_view(balances, view, CUSTOMER_SEARCH_FIELDS, sortable_fields=CUSTOMER_SORT_FIELDS)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"balances": rows, "totals": summarize_customer_balances(balances)}


@router.get("/vendors", response_model=VendorBalancesResponse)
def vendor_balances(
    search: str = Query("", max_length=200),
    sort_field: str = Query("total_outstanding"),
    sort_direction: str = Query("desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    balances = fetch_vendor_balances(db)
    view = TableView(sort_field=sort_field, sort_direction=sort_direction, search=search)
    try:
        rows = apply_table_view(
            active_vendor_balances(balances), view, VENDOR_SEARCH_FIELDS, sortable_fields=VENDOR_SORT_FIELDS
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"balances": rows, "totals": summarize_vendor_balances(balances)}
