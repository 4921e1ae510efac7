from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from app.datasource import fetch_view_rows
from app.models import transfer_orders_view
from app.orders.calculations import TransferOrderLine, group_orders_by_order_number, OrderGroup


def fetch_transfer_order_lines(db: Session) -> List[TransferOrderLine]:
    rows = fetch_view_rows(
        db,
        transfer_orders_view,
        "transfer orders",
        order_by=[transfer_orders_view.c.date.desc()],
    )
    return [TransferOrderLine.from_row(row) for row in rows]


def get_order_groups(db: Session) -> List[OrderGroup]:
    return group_orders_by_order_number(fetch_transfer_order_lines(db))
