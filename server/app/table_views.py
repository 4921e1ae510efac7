"""Search, month filter and sort applied to listing rows.

A ``TableView`` is the whole of a listing's view state. Endpoints build one
from query parameters and hand it to ``apply_table_view``; nothing is kept
between requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, List, Literal, Optional, Sequence, TypeVar

SortDirection = Literal["asc", "desc"]

T = TypeVar("T")


@dataclass(frozen=True)
class TableView:
    sort_field: str
    sort_direction: SortDirection = "desc"
    search: str = ""
    month: Optional[str] = None

    def toggled(self, field: str) -> TableView:
        """Clicking the active column flips direction; a new column starts descending."""
        if field == self.sort_field:
            direction: SortDirection = "asc" if self.sort_direction == "desc" else "desc"
            return TableView(field, direction, self.search, self.month)
        return TableView(field, "desc", self.search, self.month)


def _matches(row: Any, needle: str, search_fields: Sequence[str]) -> bool:
    for field in search_fields:
        value = getattr(row, field, None)
        if value and needle in str(value).lower():
            return True
    return False


def _sort_key(value: Any) -> tuple:
    # Missing values sort below everything else.
    if value is None:
        return (0, 0)
    # ranked values such as risk tiers order by severity, not by label
    severity = getattr(value, "severity", None)
    if isinstance(severity, int):
        return (1, severity)
    if isinstance(value, str):
        return (1, value.lower())
    if isinstance(value, date):
        return (1, value.toordinal())
    if isinstance(value, (int, float, Decimal)):
        return (1, value)
    return (1, str(value).lower())


def apply_table_view(
    rows: Sequence[T],
    view: TableView,
    search_fields: Sequence[str],
    month_field: Optional[str] = None,
    sortable_fields: Optional[Sequence[str]] = None,
) -> List[T]:
    if sortable_fields is not None and view.sort_field not in sortable_fields:
        raise ValueError(f"Cannot sort by {view.sort_field!r}.")

    filtered = list(rows)
    needle = view.search.strip().lower()
    if needle:
        filtered = [row for row in filtered if _matches(row, needle, search_fields)]
    if view.month and month_field:
        filtered = [row for row in filtered if getattr(row, month_field, None) == view.month]

    return sorted(
        filtered,
        key=lambda row: _sort_key(getattr(row, view.sort_field, None)),
        reverse=view.sort_direction == "desc",
    )
