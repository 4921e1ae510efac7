from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.datasource import fetch_view_rows
from app.models import profit_analysis_view
from app.profit.calculations import ProfitGroup, ProfitLine, group_profit_by_invoice

logger = logging.getLogger(__name__)


def fetch_profit_lines(
    db: Session,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[ProfitLine]:
    """Invoice lines, optionally bounded on either side by invoice date."""
    view = profit_analysis_view
    filters = []
    if start is not None:
        filters.append(view.c.inv_date >= start)
    if end is not None:
        filters.append(view.c.inv_date <= end)
    if filters:
        logger.debug("Profit analysis limited to %s..%s", start or "*", end or "*")

    rows = fetch_view_rows(
        db,
        view,
        "profit analysis",
        filters=filters,
        order_by=[view.c.inv_date.desc(), view.c.inv_no.desc()],
    )
    return [ProfitLine.from_row(row) for row in rows]


def get_profit_groups(
    db: Session,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[ProfitGroup]:
    return group_profit_by_invoice(fetch_profit_lines(db, start, end))
