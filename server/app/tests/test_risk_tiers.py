from decimal import Decimal

import pytest

from app.balances.calculations import (
    CUSTOMER_SEARCH_FIELDS,
    CUSTOMER_SORT_FIELDS,
    CustomerBalance,
    VendorBalance,
    active_vendor_balances,
    summarize_customer_balances,
    summarize_vendor_balances,
)
from app.balances.risk import RiskTier
from app.table_views import TableView, apply_table_view


def customer(**buckets):
    row = {
        "customer_id": buckets.pop("customer_id", "C-1"),
        "customer_name": buckets.pop("customer_name", "Fleet Co"),
        "total_invoices": buckets.pop("total_invoices", 1),
    }
    row.update(buckets)
    return CustomerBalance.from_row(row)


def vendor(**buckets):
    row = {
        "vendor_id": buckets.pop("vendor_id", "V-1"),
        "vendor_name": buckets.pop("vendor_name", "Parts Supplier"),
        "outstanding_bills_count": buckets.pop("outstanding_bills_count", 1),
    }
    row.update(buckets)
    return VendorBalance.from_row(row)


@pytest.mark.parametrize(
    "buckets, expected",
    [
        ({}, RiskTier.CURRENT),
        ({"current_0_30": "500"}, RiskTier.CURRENT),
        ({"current_0_30": "500", "past_due_31_60": "1"}, RiskTier.LOW),
        ({"past_due_31_60": "10", "past_due_61_90": "5"}, RiskTier.MEDIUM),
        ({"past_due_91_180": "0.01"}, RiskTier.HIGH),
        ({"past_due_31_60": "10", "past_due_over_180": "2"}, RiskTier.VERY_HIGH),
    ],
)
def test_customer_risk_follows_oldest_non_empty_bucket(buckets, expected):
    assert customer(**buckets).risk_tier == expected


def test_vendor_risk_uses_120_day_buckets():
    assert vendor(past_due_91_120="40").risk_tier == RiskTier.HIGH
    assert vendor(past_due_over_120="40").risk_tier == RiskTier.VERY_HIGH
    assert vendor(current_0_30="40").risk_tier == RiskTier.CURRENT


def test_vendor_keeps_reported_category_alongside_computed_tier():
    balance = vendor(past_due_61_90="10", risk_category="Low Risk")

    assert balance.risk_category == "Low Risk"
    assert balance.risk_tier == RiskTier.MEDIUM


@pytest.mark.parametrize(
    "buckets",
    [
        {},
        {"current_0_30": "10"},
        {"past_due_31_60": "10"},
        {"past_due_61_90": "10", "past_due_91_180": "3"},
        {"past_due_over_180": "1"},
    ],
)
def test_oldest_bucket_never_lowers_the_tier(buckets):
    before = customer(**buckets)
    after = customer(**dict(buckets, past_due_over_180="250"))

    assert after.risk_tier.severity >= before.risk_tier.severity
    assert after.risk_tier == RiskTier.VERY_HIGH


def test_malformed_bucket_values_are_treated_as_empty():
    balance = customer(past_due_91_180="--", past_due_31_60="12")

    assert balance.past_due_91_180 == Decimal("0")
    assert balance.risk_tier == RiskTier.LOW


def test_customer_totals_cover_every_customer():
    balances = [
        customer(customer_id="C-1", total_balance="100", current_0_30="100", total_invoices=2),
        customer(customer_id="C-2", total_balance="0", total_invoices=0),
        customer(customer_id="C-3", total_balance="50", past_due_over_180="50", total_invoices=1),
    ]

    totals = summarize_customer_balances(balances)

    assert totals.customer_count == 3
    assert totals.total_balance == Decimal("150")
    assert totals.past_due_over_180 == Decimal("50")
    assert totals.total_invoices == 3


def test_vendor_totals_skip_settled_vendors():
    balances = [
        vendor(vendor_id="V-1", total_outstanding="300", past_due_61_90="300", outstanding_bills_count=2),
        vendor(vendor_id="V-2", total_outstanding="0", outstanding_bills_count=5),
    ]

    totals = summarize_vendor_balances(balances)

    assert [row.vendor_id for row in active_vendor_balances(balances)] == ["V-1"]
    assert totals.vendor_count == 1
    assert totals.total_outstanding == Decimal("300")
    assert totals.outstanding_bills_count == 2


def test_count_fields_tolerate_decimal_text_and_junk():
    assert customer(total_invoices="3.0").total_invoices == 3
    assert customer(total_invoices="n/a").total_invoices == 0
    assert vendor(outstanding_bills_count="2.0").outstanding_bills_count == 2
    assert vendor(outstanding_bills_count=None).outstanding_bills_count == 0


def test_sorting_by_risk_tier_follows_severity():
    balances = [
        customer(customer_id="C-low", past_due_31_60="5"),
        customer(customer_id="C-very-high", past_due_over_180="5"),
        customer(customer_id="C-current", current_0_30="5"),
        customer(customer_id="C-medium", past_due_61_90="5"),
    ]

    ranked = apply_table_view(
        balances, TableView("risk_tier"), CUSTOMER_SEARCH_FIELDS, sortable_fields=CUSTOMER_SORT_FIELDS
    )

    assert [row.customer_id for row in ranked] == ["C-very-high", "C-medium", "C-low", "C-current"]
