from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from app.dashboard.calculations import DashboardSummary, DueFromSebEntry, FundTransfer, compose_dashboard_summary
from app.datasource import fetch_view_rows
from app.models import due_from_seb_table, fund_transfers_table
from app.orders.service import fetch_transfer_order_lines

logger = logging.getLogger(__name__)


def fetch_due_from_seb(db: Session) -> List[DueFromSebEntry]:
    rows = fetch_view_rows(
        db,
        due_from_seb_table,
        "due from SEB",
        order_by=[due_from_seb_table.c.date.desc()],
    )
    return [DueFromSebEntry.from_row(row) for row in rows]


def fetch_fund_transfers(db: Session) -> List[FundTransfer]:
    rows = fetch_view_rows(
        db,
        fund_transfers_table,
        "SEB transfers",
        order_by=[fund_transfers_table.c.transaction_date.desc()],
    )
    return [FundTransfer.from_row(row) for row in rows]


def get_dashboard_summary(db: Session) -> DashboardSummary:
    summary = compose_dashboard_summary(
        fetch_transfer_order_lines(db),
        fetch_due_from_seb(db),
        fetch_fund_transfers(db),
    )
    logger.info(
        "Dashboard summary: receivables=%s transfers=%s net=%s",
        summary.total_receivables,
        summary.fund_transfers_total,
        summary.net_balance,
    )
    return summary
