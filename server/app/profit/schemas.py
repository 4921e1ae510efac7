import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ProfitLineResponse(BaseModel):
    inv_no: str
    inv_date: Optional[datetime.date] = None
    item: Optional[str] = None
    qty: Decimal
    sale_price: Decimal
    sale_with_vat: Decimal
    cost: Decimal
    profit: Decimal
    profit_percentage: Decimal
    customer_name: Optional[str] = None
    branch_name: Optional[str] = None
    unit_price: Decimal
    unit_cost: Decimal
    unit_profit: Decimal
    sales_person_name: Optional[str] = None
    invoice_status: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProfitGroupResponse(BaseModel):
    invoice_number: str
    date: Optional[datetime.date] = None
    customer_name: Optional[str] = None
    sales_person: Optional[str] = None
    status: Optional[str] = None
    item_count: int
    total_qty: Decimal
    total_sale: Decimal
    total_sale_with_vat: Decimal
    total_cost: Decimal
    total_profit: Decimal
    avg_profit_margin: Decimal
    items: List[ProfitLineResponse]

    model_config = ConfigDict(from_attributes=True)


class ProfitTotalsResponse(BaseModel):
    invoice_count: int
    item_count: int
    total_qty: Decimal
    total_sale: Decimal
    total_sale_with_vat: Decimal
    total_cost: Decimal
    total_profit: Decimal
    profit_margin: Decimal


class ProfitAnalysisResponse(BaseModel):
    preset: str
    start: Optional[datetime.date] = None
    end: Optional[datetime.date] = None
    groups: List[ProfitGroupResponse]
    totals: ProfitTotalsResponse
