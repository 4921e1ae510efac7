from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, List, Mapping, Optional

from app.balances.risk import RiskTier, classify_customer_risk, classify_vendor_risk
from app.utils import ZERO, to_date, to_decimal, to_int

CUSTOMER_SEARCH_FIELDS = ("customer_name", "display_name", "company_name")
CUSTOMER_SORT_FIELDS = (
    "customer_name",
    "total_balance",
    "current_0_30",
    "past_due_31_60",
    "past_due_61_90",
    "past_due_91_180",
    "past_due_over_180",
    "total_invoices",
    "last_invoice_date",
    "risk_tier",
)

VENDOR_SEARCH_FIELDS = ("vendor_name", "company_name")
VENDOR_SORT_FIELDS = (
    "vendor_name",
    "total_outstanding",
    "current_0_30",
    "past_due_31_60",
    "past_due_61_90",
    "past_due_91_120",
    "past_due_over_120",
    "outstanding_bills_count",
    "oldest_due_date",
    "risk_tier",
)


@dataclass(frozen=True)
class CustomerBalance:
    customer_id: str
    customer_name: str
    display_name: Optional[str]
    company_name: Optional[str]
    total_balance: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_180: Decimal
    past_due_over_180: Decimal
    total_invoices: int
    last_invoice_date: Optional[date]
    customer_status: Optional[str]
    risk_tier: RiskTier = RiskTier.CURRENT

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> CustomerBalance:
        balance = cls(
            customer_id=str(row["customer_id"]),
            customer_name=row.get("customer_name") or "",
            display_name=row.get("display_name"),
            company_name=row.get("company_name"),
            total_balance=to_decimal(row.get("total_balance")),
            current_0_30=to_decimal(row.get("current_0_30")),
            past_due_31_60=to_decimal(row.get("past_due_31_60")),
            past_due_61_90=to_decimal(row.get("past_due_61_90")),
            past_due_91_180=to_decimal(row.get("past_due_91_180")),
            past_due_over_180=to_decimal(row.get("past_due_over_180")),
            total_invoices=to_int(row.get("total_invoices")),
            last_invoice_date=to_date(row.get("last_invoice_date")),
            customer_status=row.get("customer_status"),
        )
        return replace(balance, risk_tier=classify_customer_risk(balance))


@dataclass(frozen=True)
class VendorBalance:
    vendor_id: str
    vendor_name: str
    company_name: Optional[str]
    vendor_status: Optional[str]
    vendor_currency: Optional[str]
    total_outstanding: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_120: Decimal
    past_due_over_120: Decimal
    outstanding_bills_count: int
    avg_days_outstanding: Optional[Decimal]
    oldest_due_date: Optional[date]
    last_bill_date: Optional[date]
    currency: Optional[str]
    risk_category: Optional[str]
    risk_tier: RiskTier = RiskTier.CURRENT

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> VendorBalance:
        avg_days = row.get("avg_days_outstanding")
        balance = cls(
            vendor_id=str(row["vendor_id"]),
            vendor_name=row.get("vendor_name") or "",
            company_name=row.get("company_name"),
            vendor_status=row.get("vendor_status"),
            vendor_currency=row.get("vendor_currency"),
            total_outstanding=to_decimal(row.get("total_outstanding")),
            current_0_30=to_decimal(row.get("current_0_30")),
            past_due_31_60=to_decimal(row.get("past_due_31_60")),
            past_due_61_90=to_decimal(row.get("past_due_61_90")),
            past_due_91_120=to_decimal(row.get("past_due_91_120")),
            past_due_over_120=to_decimal(row.get("past_due_over_120")),
            outstanding_bills_count=to_int(row.get("outstanding_bills_count")),
            avg_days_outstanding=None if avg_days is None else to_decimal(avg_days),
            oldest_due_date=to_date(row.get("oldest_due_date")),
            last_bill_date=to_date(row.get("last_bill_date")),
            currency=row.get("currency"),
            risk_category=row.get("risk_category"),
        )
        return replace(balance, risk_tier=classify_vendor_risk(balance))


@dataclass(frozen=True)
class CustomerBalanceTotals:
    customer_count: int
    total_balance: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_180: Decimal
    past_due_over_180: Decimal
    total_invoices: int


@dataclass(frozen=True)
class VendorBalanceTotals:
    vendor_count: int
    total_outstanding: Decimal
    current_0_30: Decimal
    past_due_31_60: Decimal
    past_due_61_90: Decimal
    past_due_91_120: Decimal
    past_due_over_120: Decimal
    outstanding_bills_count: int


def _total(rows: List[Any], field: str) -> Decimal:
    return sum((getattr(row, field) for row in rows), ZERO)


def summarize_customer_balances(balances: Iterable[CustomerBalance]) -> CustomerBalanceTotals:
    rows = list(balances)
    return CustomerBalanceTotals(
        customer_count=len(rows),
        total_balance=_total(rows, "total_balance"),
        current_0_30=_total(rows, "current_0_30"),
        past_due_31_60=_total(rows, "past_due_31_60"),
        past_due_61_90=_total(rows, "past_due_61_90"),
        past_due_91_180=_total(rows, "past_due_91_180"),
        past_due_over_180=_total(rows, "past_due_over_180"),
        total_invoices=sum(row.total_invoices for row in rows),
    )


def active_vendor_balances(balances: Iterable[VendorBalance]) -> List[VendorBalance]:
    return [balance for balance in balances if balance.total_outstanding > 0]


def summarize_vendor_balances(balances: Iterable[VendorBalance]) -> VendorBalanceTotals:
    """Totals over vendors that still owe something; settled vendors are left out."""
    rows = active_vendor_balances(balances)
    return VendorBalanceTotals(
        vendor_count=len(rows),
        total_outstanding=_total(rows, "total_outstanding"),
        current_0_30=_total(rows, "current_0_30"),
        past_due_31_60=_total(rows, "past_due_31_60"),
        past_due_61_90=_total(rows, "past_due_61_90"),
        past_due_91_120=_total(rows, "past_due_91_120"),
        past_due_over_120=_total(rows, "past_due_over_120"),
        outstanding_bills_count=sum(row.outstanding_bills_count for row in rows),
    )
