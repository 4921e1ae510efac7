import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class TransferOrderLineResponse(BaseModel):
    date: Optional[datetime.date] = None
    order_number: str
    item_name: Optional[str] = None
    qty: Decimal
    cost: Decimal
    costwvat: Decimal
    total: Decimal
    totalwvat: Decimal
    source_warehouse: Optional[str] = None
    destination_warehouse: Optional[str] = None
    status: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderGroupResponse(BaseModel):
    order_number: str
    date: Optional[datetime.date] = None
    source: Optional[str] = None
    destination: Optional[str] = None
    status: Optional[str] = None
    item_count: int
    total_qty: Decimal
    total_value: Decimal
    items: List[TransferOrderLineResponse]

    model_config = ConfigDict(from_attributes=True)


class OrderGroupTotalsResponse(BaseModel):
    order_count: int
    item_count: int
    total_qty: Decimal
    total_value: Decimal
    total_value_excl_vat: Decimal


class OrderListResponse(BaseModel):
    groups: List[OrderGroupResponse]
    totals: OrderGroupTotalsResponse


class OrdersSummaryResponse(BaseModel):
    total_orders: int
    total_value: Decimal
    inbound_value: Decimal
    outbound_value: Decimal
