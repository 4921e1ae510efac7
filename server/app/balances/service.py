from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from app.balances.calculations import CustomerBalance, VendorBalance
from app.config import settings
from app.datasource import fetch_view_rows
from app.models import customer_balance_aging_view, vendor_balance_aging_view


def fetch_customer_balances(db: Session, customer_owner_id: str | None = None) -> List[CustomerBalance]:
    view = customer_balance_aging_view
    owner = customer_owner_id or settings.customer_owner_id
    rows = fetch_view_rows(
        db,
        view,
        "customer balances",
        filters=[view.c.customer_owner == owner],
        order_by=[view.c.total_balance.desc()],
    )
    return [CustomerBalance.from_row(row) for row in rows]


def fetch_vendor_balances(db: Session) -> List[VendorBalance]:
    view = vendor_balance_aging_view
    rows = fetch_view_rows(
        db,
        view,
        "vendor balances",
        order_by=[view.c.total_outstanding.desc()],
    )
    return [VendorBalance.from_row(row) for row in rows]
