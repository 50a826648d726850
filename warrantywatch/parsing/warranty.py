"""
Warranty-window calculator.

The end date is always purchase date + a fixed number of calendar months
(12 by default). Durations mentioned in the email ("2 year warranty") are
surfaced through estimate_warranty_months() as a suggestion only and are
NOT applied to the end date; whether they should be is an open product
decision.
"""

from __future__ import annotations

import re
from datetime import datetime

from dateutil.relativedelta import relativedelta

from warrantywatch.config import DEFAULT_WARRANTY_MONTHS
from warrantywatch.parsing.parser_data import TYPICAL_WARRANTY_MONTHS

_UNIT_MONTHS = {"year": 12, "yr": 12, "month": 1, "mon": 1}

# (pattern, unit) - unit None means the unit is captured as group 2
_DURATION_PATTERNS: tuple[tuple[re.Pattern[str], str | None], ...] = (
    (re.compile(r"(\d+)[\s-]*(?:year|yr)s?[\s-]*(?:warranty|guarantee)", re.IGNORECASE), "year"),
    (re.compile(r"(\d+)[\s-]*(?:month|mon)s?[\s-]*(?:warranty|guarantee)", re.IGNORECASE), "month"),
    (
        re.compile(
            r"(?:warranty|guarantee)\s*(?:for|of)\s*(\d+)[\s-]*(year|yr|month|mon)s?\b",
            re.IGNORECASE,
        ),
        None,
    ),
)


def compute_warranty_end_date(
    purchase_date: datetime, months: int = DEFAULT_WARRANTY_MONTHS
) -> datetime:
    """
    Add calendar months to the purchase date.

    Month/day overflow clamps to the last valid day
    (2024-02-29 + 12 months -> 2025-02-28).

    Raises:
        ValueError: If months < 1
    """
    if months < 1:
        raise ValueError(f"warranty duration must be at least 1 month, got {months}")
    return purchase_date + relativedelta(months=months)


def estimate_warranty_months(text: str | None) -> int | None:
    """
    Mine a warranty duration (in months) from free text.

    Explicit phrases win ("2 year warranty", "warranty for 6 months"); otherwise
    a typical duration for a recognised product keyword; otherwise None.
    """
    if not text:
        return None

    for pattern, unit in _DURATION_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        amount = int(match.group(1))
        unit_name = unit or match.group(2).lower()
        months = amount * _UNIT_MONTHS[unit_name]
        if months >= 1:
            return months

    lowered = text.lower()
    for keyword, months in TYPICAL_WARRANTY_MONTHS:
        if keyword in lowered:
            return months
    return None
