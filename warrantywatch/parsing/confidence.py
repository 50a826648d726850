"""
Confidence scorer - completeness score (0-100) for review triage.

Not a probability: each resolved field adds a fixed weight. The weights sum
to exactly 100; adding a signal means rebalancing the table, not appending
to it.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from warrantywatch.config import UNKNOWN_PRODUCT, UNKNOWN_VENDOR
from warrantywatch.parsing.dates import parse_email_date
from warrantywatch.parsing.models import RawEmail

CONFIDENCE_WEIGHTS: Mapping[str, int] = MappingProxyType(
    {
        "name": 30,
        "vendor": 25,
        "price": 20,
        "date_header": 15,
        "order_number": 10,
    }
)

if sum(CONFIDENCE_WEIGHTS.values()) != 100:
    raise RuntimeError("CONFIDENCE_WEIGHTS must sum to exactly 100")


def confidence_breakdown(
    email: RawEmail | Mapping[str, Any],
    name: str | None,
    vendor: str | None,
    price: float | None,
    order_number: str | None,
) -> dict[str, int]:
    """Per-signal contribution (weight or 0). Sentinel strings count as unresolved."""
    raw = RawEmail.coerce(email)
    resolved = {
        "name": bool(name) and name != UNKNOWN_PRODUCT,
        "vendor": bool(vendor) and vendor != UNKNOWN_VENDOR,
        "price": price is not None and price > 0,
        "date_header": parse_email_date(raw.date) is not None,
        "order_number": bool(order_number),
    }
    return {key: CONFIDENCE_WEIGHTS[key] if resolved[key] else 0 for key in CONFIDENCE_WEIGHTS}


def score_confidence(
    email: RawEmail | Mapping[str, Any],
    name: str | None,
    vendor: str | None,
    price: float | None,
    order_number: str | None,
) -> int:
    """
    Additive confidence score, clamped to [0, 100].

    name +30, vendor +25, price +20, usable date header +15, order number +10.
    """
    total = sum(confidence_breakdown(email, name, vendor, price, order_number).values())
    return max(0, min(total, 100))
