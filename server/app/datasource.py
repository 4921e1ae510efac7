from __future__ import annotations

import logging
from typing import Any, List, Mapping, Sequence

from sqlalchemy import Table, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import DataSourceError

logger = logging.getLogger(__name__)


def fetch_view_rows(
    db: Session,
    view: Table,
    dataset: str,
    *,
    filters: Sequence[Any] = (),
    order_by: Sequence[Any] = (),
) -> List[Mapping[str, Any]]:
    """Select every column of a reporting view, keyed by column key."""
    stmt = select(*(column.label(column.key) for column in view.c))
    if filters:
        stmt = stmt.where(*filters)
    if order_by:
        stmt = stmt.order_by(*order_by)

    try:
        rows = db.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        logger.error("Error fetching %s from %s: %s", dataset, view.name, exc)
        raise DataSourceError(dataset, str(exc)) from exc

    logger.debug("Fetched %s %s rows from %s", len(rows), dataset, view.name)
    return list(rows)
