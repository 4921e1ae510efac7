"""Aging-bucket risk tiers for customer and vendor balances.

A balance's tier is decided by its most overdue non-empty bucket, so moving
money into an older bucket can only raise the tier.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Sequence, Tuple


class RiskTier(str, Enum):
    CURRENT = "Current"
    LOW = "Low Risk"
    MEDIUM = "Medium Risk"
    HIGH = "High Risk"
    VERY_HIGH = "Very High Risk"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {tier: index for index, tier in enumerate(RiskTier)}

# (bucket attribute, tier) pairs, most overdue first
CUSTOMER_RISK_BUCKETS: Tuple[Tuple[str, RiskTier], ...] = (
    ("past_due_over_180", RiskTier.VERY_HIGH),
    ("past_due_91_180", RiskTier.HIGH),
    ("past_due_61_90", RiskTier.MEDIUM),
    ("past_due_31_60", RiskTier.LOW),
)

VENDOR_RISK_BUCKETS: Tuple[Tuple[str, RiskTier], ...] = (
    ("past_due_over_120", RiskTier.VERY_HIGH),
    ("past_due_91_120", RiskTier.HIGH),
    ("past_due_61_90", RiskTier.MEDIUM),
    ("past_due_31_60", RiskTier.LOW),
)


def classify_risk(balance: Any, buckets: Sequence[Tuple[str, RiskTier]]) -> RiskTier:
    for field, tier in buckets:
        if getattr(balance, field) > 0:
            return tier
    return RiskTier.CURRENT


def classify_customer_risk(balance: Any) -> RiskTier:
    return classify_risk(balance, CUSTOMER_RISK_BUCKETS)


def classify_vendor_risk(balance: Any) -> RiskTier:
    return classify_risk(balance, VENDOR_RISK_BUCKETS)
