import csv
from io import StringIO
from typing import Any, Dict, Iterable, List

from app.orders.calculations import OrderGroup
from app.utils import quantize_money

ORDER_EXPORT_COLUMNS = [
    "Order Number",
    "Date",
    "Item Name",
    "Quantity",
    "Cost",
    "Cost w/VAT",
    "Total",
    "Total w/VAT",
]


def flatten_order_groups(groups: Iterable[OrderGroup]) -> List[Dict[str, Any]]:
    return [
        {
            "Order Number": group.order_number,
            "Date": group.date.isoformat() if group.date else "",
            "Item Name": item.item_name or "",
            "Quantity": item.qty,
            "Cost": quantize_money(item.cost),
            "Cost w/VAT": quantize_money(item.costwvat),
            "Total": quantize_money(item.total),
            "Total w/VAT": quantize_money(item.totalwvat),
        }
        for group in groups
        for item in group.items
    ]


def rows_to_csv(rows: Iterable[Dict[str, Any]], columns: List[str]) -> str:
    buffer = StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buffer.getvalue()
