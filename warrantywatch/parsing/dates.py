"""
Date parsing helpers for purchase dates.

All returned datetimes are timezone-aware UTC. Naive values are assumed to
be UTC already. A date must name its year; missing month, day or time are
filled from a fixed default, never from today.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from dateutil import parser as date_parser

from warrantywatch.observability.logging import get_logger

logger = get_logger(__name__)

_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"

# Date-shaped substrings, tried in order inside a captured phrase
_DATE_SHAPES = (
    re.compile(r"\d{4}[/-]\d{1,2}[/-]\d{1,2}"),
    re.compile(r"\d{1,2}[/-]\d{1,2}[/-]\d{4}"),
    re.compile(rf"{_MONTH}\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}", re.IGNORECASE),
    re.compile(rf"\d{{1,2}}(?:st|nd|rd|th)?\s+{_MONTH},?\s+\d{{4}}", re.IGNORECASE),
)

# RFC 2822 headers sometimes carry a trailing zone comment: "... +0000 (UTC)"
_HEADER_COMMENT_RE = re.compile(r"\s*\([^)]*\)\s*$")
_ORDINAL_RE = re.compile(r"(\d)(st|nd|rd|th)\b", re.IGNORECASE)

# Fixed fill-in for missing date parts so results never depend on the current day
_DEFAULT = datetime(2000, 1, 1)
_YEAR_CHECK = datetime(2001, 1, 1)


def to_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _parse(value: str) -> datetime | None:
    """Parse a date that names its year; missing month/day/time fall back to Jan 1, 00:00."""
    try:
        parsed = date_parser.parse(value, default=_DEFAULT)
        # dateutil fills a missing year from the default, so two defaults disagree
        if parsed.year != date_parser.parse(value, default=_YEAR_CHECK).year:
            logger.debug("Date without a year %r", value[:40])
            return None
        return to_utc(parsed)
    except (ValueError, OverflowError, TypeError) as e:
        logger.debug("Unparseable date %r: %s", value[:40], e)
        return None


def parse_email_date(value: str | None) -> datetime | None:
    """
    Parse an email Date header (RFC 2822 or ISO 8601).

    Returns None when the header is missing or unparseable.
    """
    if not value or not value.strip():
        return None
    return _parse(_HEADER_COMMENT_RE.sub("", value.strip()))


def parse_date_text(text: str | None) -> datetime | None:
    """
    Parse a date out of free text captured after a cue like "ordered on".

    Looks for a date-shaped substring first, then tries the whole capture.
    """
    if not text:
        return None

    for shape in _DATE_SHAPES:
        match = shape.search(text)
        if match:
            parsed = _parse(_ORDINAL_RE.sub(r"\1", match.group(0)))
            if parsed is not None:
                return parsed

    candidate = text.strip(" ,.;:")
    if not candidate or not any(ch.isdigit() for ch in candidate):
        return None
    return _parse(candidate)
