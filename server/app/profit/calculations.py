from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from app.utils import ZERO, to_date, to_decimal

HUNDRED = Decimal("100")


def profit_margin(profit: Decimal, sale: Decimal) -> Decimal:
    """Profit as a percentage of the absolute sale amount; zero when nothing was sold."""
    if sale == 0:
        return ZERO
    return profit / abs(sale) * HUNDRED


@dataclass(frozen=True)
class ProfitLine:
    inv_no: str
    inv_date: Optional[date]
    item: Optional[str]
    qty: Decimal
    sale_price: Decimal
    sale_with_vat: Decimal
    cost: Decimal
    profit: Decimal
    profit_percentage: Decimal
    customer_name: Optional[str]
    branch_name: Optional[str]
    unit_price: Decimal
    unit_cost: Decimal
    unit_profit: Decimal
    sales_person_name: Optional[str]
    invoice_status: Optional[str]

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> ProfitLine:
        return cls(
            inv_no=str(row["inv_no"]),
            inv_date=to_date(row.get("inv_date")),
            item=row.get("item"),
            qty=to_decimal(row.get("qty")),
            sale_price=to_decimal(row.get("sale_price")),
            sale_with_vat=to_decimal(row.get("sale_with_vat")),
            cost=to_decimal(row.get("cost")),
            profit=to_decimal(row.get("profit")),
            profit_percentage=to_decimal(row.get("profit_percentage")),
            customer_name=row.get("customer_name"),
            branch_name=row.get("branch_name"),
            unit_price=to_decimal(row.get("unit_price")),
            unit_cost=to_decimal(row.get("unit_cost")),
            unit_profit=to_decimal(row.get("unit_profit")),
            sales_person_name=row.get("sales_person_name"),
            invoice_status=row.get("invoice_status"),
        )


@dataclass(frozen=True)
class ProfitGroup:
    invoice_number: str
    date: Optional[date]
    customer_name: Optional[str]
    sales_person: Optional[str]
    status: Optional[str]
    item_count: int
    total_qty: Decimal
    total_sale: Decimal
    total_sale_with_vat: Decimal
    total_cost: Decimal
    total_profit: Decimal
    avg_profit_margin: Decimal
    items: Tuple[ProfitLine, ...]


@dataclass(frozen=True)
class ProfitTotals:
    invoice_count: int
    item_count: int
    total_qty: Decimal
    total_sale: Decimal
    total_sale_with_vat: Decimal
    total_cost: Decimal
    total_profit: Decimal
    profit_margin: Decimal


_SUMMED_FIELDS = (
    ("total_qty", "qty"),
    ("total_sale", "sale_price"),
    ("total_sale_with_vat", "sale_with_vat"),
    ("total_cost", "cost"),
    ("total_profit", "profit"),
)


def group_profit_by_invoice(lines: Iterable[ProfitLine]) -> List[ProfitGroup]:
    accumulators: Dict[str, Dict[str, Any]] = {}
    for line in lines:
        acc = accumulators.get(line.inv_no)
        if acc is None:
            acc = {
                "invoice_number": line.inv_no,
                "date": line.inv_date,
                "customer_name": line.customer_name,
                "sales_person": line.sales_person_name,
                "status": line.invoice_status,
                "items": [],
            }
            acc.update({total: ZERO for total, _ in _SUMMED_FIELDS})
            accumulators[line.inv_no] = acc
        acc["items"].append(line)
        for total, field in _SUMMED_FIELDS:
            acc[total] += getattr(line, field)

    # Margins are taken once per invoice, after every line has been added.
    groups = [
        ProfitGroup(
            invoice_number=acc["invoice_number"],
            date=acc["date"],
            customer_name=acc["customer_name"],
            sales_person=acc["sales_person"],
            status=acc["status"],
            item_count=len(acc["items"]),
            total_qty=acc["total_qty"],
            total_sale=acc["total_sale"],
            total_sale_with_vat=acc["total_sale_with_vat"],
            total_cost=acc["total_cost"],
            total_profit=acc["total_profit"],
            avg_profit_margin=profit_margin(acc["total_profit"], acc["total_sale"]),
            items=tuple(acc["items"]),
        )
        for acc in accumulators.values()
    ]
    # newest first, then invoice number descending
    return sorted(groups, key=lambda group: (group.date or date.min, group.invoice_number), reverse=True)


def summarize_profit_groups(groups: Iterable[ProfitGroup]) -> ProfitTotals:
    groups = list(groups)
    total_sale = sum((group.total_sale for group in groups), ZERO)
    total_profit = sum((group.total_profit for group in groups), ZERO)
    return ProfitTotals(
        invoice_count=len(groups),
        item_count=sum(group.item_count for group in groups),
        total_qty=sum((group.total_qty for group in groups), ZERO),
        total_sale=total_sale,
        total_sale_with_vat=sum((group.total_sale_with_vat for group in groups), ZERO),
        total_cost=sum((group.total_cost for group in groups), ZERO),
        total_profit=total_profit,
        profit_margin=profit_margin(total_profit, total_sale),
    )
