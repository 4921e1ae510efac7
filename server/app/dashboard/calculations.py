from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from app.orders.calculations import TransferOrderLine
from app.utils import ZERO, parse_amount


@dataclass(frozen=True)
class DueFromSebEntry:
    date: Optional[str]
    description: Optional[str]
    amount_text: Optional[str]
    amount: Decimal

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> DueFromSebEntry:
        return cls(
            date=row.get("date"),
            description=row.get("description"),
            amount_text=row.get("amount"),
            amount=parse_amount(row.get("amount")),
        )


@dataclass(frozen=True)
class FundTransfer:
    transaction_date: Optional[str]
    transaction_number: Optional[str]
    from_account: Optional[str]
    to_account: Optional[str]
    amount_text: Optional[str]
    amount: Decimal
    reference: Optional[str]
    description: Optional[str]

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> FundTransfer:
        return cls(
            transaction_date=row.get("transaction_date"),
            transaction_number=row.get("transaction_number"),
            from_account=row.get("from_account"),
            to_account=row.get("to_account"),
            amount_text=row.get("amount"),
            amount=parse_amount(row.get("amount")),
            reference=row.get("reference"),
            description=row.get("description"),
        )


@dataclass(frozen=True)
class DashboardSummary:
    transfer_orders_total: Decimal
    due_from_seb_total: Decimal
    fund_transfers_total: Decimal
    total_receivables: Decimal
    net_balance: Decimal


def compose_dashboard_summary(
    transfer_orders: Iterable[TransferOrderLine],
    due_from_seb: Iterable[DueFromSebEntry],
    fund_transfers: Iterable[FundTransfer],
) -> DashboardSummary:
    """Net position of the branch from three already-fetched datasets.

    Transfer orders count by magnitude whichever direction they moved stock.
    """
    transfer_orders_total = sum((abs(line.totalwvat) for line in transfer_orders), ZERO)
    due_from_seb_total = sum((entry.amount for entry in due_from_seb), ZERO)
    fund_transfers_total = sum((transfer.amount for transfer in fund_transfers), ZERO)
    total_receivables = transfer_orders_total + due_from_seb_total
    return DashboardSummary(
        transfer_orders_total=transfer_orders_total,
        due_from_seb_total=due_from_seb_total,
        fund_transfers_total=fund_transfers_total,
        total_receivables=total_receivables,
        net_balance=total_receivables - fund_transfers_total,
    )
