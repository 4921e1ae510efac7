from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class DashboardSummaryResponse(BaseModel):
    transfer_orders_total: Decimal
    due_from_seb_total: Decimal
    fund_transfers_total: Decimal
    total_receivables: Decimal
    net_balance: Decimal

    model_config = ConfigDict(from_attributes=True)


class DueFromSebRow(BaseModel):
    date: Optional[str] = None
    description: Optional[str] = None
    amount_text: Optional[str] = None
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class DueFromSebResponse(BaseModel):
    entries: List[DueFromSebRow]
    total: Decimal


class FundTransferRow(BaseModel):
    transaction_date: Optional[str] = None
    transaction_number: Optional[str] = None
    from_account: Optional[str] = None
    to_account: Optional[str] = None
    amount_text: Optional[str] = None
    amount: Decimal
    reference: Optional[str] = None
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class FundTransfersResponse(BaseModel):
    transfers: List[FundTransferRow]
    total: Decimal


class RefreshIntervalsResponse(BaseModel):
    branch_name: str
    currency: str
    intervals: dict[str, int]
