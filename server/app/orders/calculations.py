from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from app.utils import ZERO, to_date, to_decimal


@dataclass(frozen=True)
class TransferOrderLine:
    date: Optional[date]
    order_number: str
    item_name: Optional[str]
    qty: Decimal
    cost: Decimal
    costwvat: Decimal
    total: Decimal
    totalwvat: Decimal
    source_warehouse: Optional[str]
    destination_warehouse: Optional[str]
    status: Optional[str]

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> TransferOrderLine:
        return cls(
            date=to_date(row["date"]),
            order_number=str(row["order_number"]),
            item_name=row.get("item_name"),
            qty=to_decimal(row.get("qty")),
            cost=to_decimal(row.get("cost")),
            costwvat=to_decimal(row.get("costwvat")),
            total=to_decimal(row.get("total")),
            totalwvat=to_decimal(row.get("totalwvat")),
            source_warehouse=row.get("source_warehouse"),
            destination_warehouse=row.get("destination_warehouse"),
            status=row.get("status"),
        )


@dataclass(frozen=True)
class OrderGroup:
    order_number: str
    date: Optional[date]
    source: Optional[str]
    destination: Optional[str]
    status: Optional[str]
    item_count: int
    total_qty: Decimal
    total_value: Decimal
    items: Tuple[TransferOrderLine, ...]


@dataclass(frozen=True)
class OrderGroupTotals:
    order_count: int
    item_count: int
    total_qty: Decimal
    total_value: Decimal
    total_value_excl_vat: Decimal


@dataclass(frozen=True)
class OrdersSummary:
    total_orders: int
    total_value: Decimal
    inbound_value: Decimal
    outbound_value: Decimal


def group_orders_by_order_number(lines: Iterable[TransferOrderLine]) -> List[OrderGroup]:
    accumulators: Dict[str, Dict[str, Any]] = {}
    for line in lines:
        acc = accumulators.get(line.order_number)
        if acc is None:
            acc = {
                "order_number": line.order_number,
                "date": line.date,
                "source": line.source_warehouse,
                "destination": line.destination_warehouse,
                "status": line.status,
                "total_qty": ZERO,
                "total_value": ZERO,
                "items": [],
            }
            accumulators[line.order_number] = acc
        acc["items"].append(line)
        acc["total_qty"] += line.qty
        acc["total_value"] += line.totalwvat

    groups = [
        OrderGroup(
            order_number=acc["order_number"],
            date=acc["date"],
            source=acc["source"],
            destination=acc["destination"],
            status=acc["status"],
            item_count=len(acc["items"]),
            total_qty=acc["total_qty"],
            total_value=acc["total_value"],
            items=tuple(acc["items"]),
        )
        for acc in accumulators.values()
    ]
    # sorted() is stable, so same-day orders keep their arrival order
    return sorted(groups, key=lambda group: group.date or date.min, reverse=True)


def summarize_order_groups(groups: Iterable[OrderGroup], vat_rate: Decimal) -> OrderGroupTotals:
    groups = list(groups)
    total_value = sum((group.total_value for group in groups), ZERO)
    return OrderGroupTotals(
        order_count=len(groups),
        item_count=sum(group.item_count for group in groups),
        total_qty=sum((group.total_qty for group in groups), ZERO),
        total_value=total_value,
        total_value_excl_vat=total_value / (Decimal("1") + vat_rate),
    )


def summarize_orders(lines: Iterable[TransferOrderLine]) -> OrdersSummary:
    total_orders = 0
    total_value = inbound_value = outbound_value = ZERO
    for line in lines:
        total_orders += 1
        total_value += line.totalwvat
        if line.totalwvat > 0:
            inbound_value += line.totalwvat
        elif line.totalwvat < 0:
            outbound_value += line.totalwvat
    return OrdersSummary(
        total_orders=total_orders,
        total_value=total_value,
        inbound_value=inbound_value,
        outbound_value=outbound_value,
    )
