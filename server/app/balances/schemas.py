from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.balances.risk import RiskTier


class CustomerBalanceRow(BaseModel):
    customer_id: str
    customer_name: str
    display_name: Optional[str] = None
    company_name: Optional[str] = None
    total_balance: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_180: Decimal
    past_due_over_180: Decimal
    total_invoices: int
    last_invoice_date: Optional[date] = None
    customer_status: Optional[str] = None
    risk_tier: RiskTier

    model_config = ConfigDict(from_attributes=True)


class CustomerBalanceTotalsResponse(BaseModel):
    customer_count: int
    total_balance: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_180: Decimal
    past_due_over_180: Decimal
    total_invoices: int


class CustomerBalancesResponse(BaseModel):
    balances: List[CustomerBalanceRow]
    totals: CustomerBalanceTotalsResponse


class VendorBalanceRow(BaseModel):
    vendor_id: str
    vendor_name: str
    company_name: Optional[str] = None
    vendor_status: Optional[str] = None
    vendor_currency: Optional[str] = None
    total_outstanding: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_120: Decimal
    past_due_over_120: Decimal
    outstanding_bills_count: int
    avg_days_outstanding: Optional[Decimal] = None
    oldest_due_date: Optional[date] = None
    last_bill_date: Optional[date] = None
    currency: Optional[str] = None
    risk_category: Optional[str] = None
    risk_tier: RiskTier

    model_config = ConfigDict(from_attributes=True)


class VendorBalanceTotalsResponse(BaseModel):
    vendor_count: int
    total_outstanding: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_120: Decimal
    past_due_over_120: Decimal
    outstanding_bills_count: int


class VendorBalancesResponse(BaseModel):
    balances: List[VendorBalanceRow]
    totals: VendorBalanceTotalsResponse
