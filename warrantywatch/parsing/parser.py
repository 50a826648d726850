"""
Purchase Email Parser - Main entry point for the parsing pipeline.

Coordinates:
1. Text normalization (text.py)
2. PurchaseEmailClassifier - is this an order/receipt email at all?
3. PurchaseFieldExtractor - independent rule chains per field
4. Warranty window (warranty.py) - purchase date + fixed months
5. Confidence scorer (confidence.py)

Entry points: parse_email() and is_purchase_email().

Stateless and synchronous: nothing persists between calls, so one parser can
be shared across threads. Output is deterministic for a given email, except
when the purchase date falls back to "now" (no usable date header and no
date phrase in the text); pass `now` explicitly to make that path repeatable.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from warrantywatch.config import DEFAULT_WARRANTY_MONTHS, UNKNOWN_VENDOR
from warrantywatch.observability.logging import get_logger
from warrantywatch.observability.telemetry import counter, log_event, time_block
from warrantywatch.parsing.classifier import PurchaseEmailClassifier
from warrantywatch.parsing.confidence import score_confidence
from warrantywatch.parsing.field_extractor import PurchaseFieldExtractor
from warrantywatch.parsing.models import ParsedCandidate, RawEmail
from warrantywatch.parsing.text import combined_text, normalize_body, normalize_subject
from warrantywatch.parsing.warranty import compute_warranty_end_date, estimate_warranty_months
from warrantywatch.utils.redaction import redact, redact_subject

logger = get_logger(__name__)


def _build_description(vendor: str | None, warranty_info: str | None) -> str:
    description = f"Imported from {vendor or UNKNOWN_VENDOR} email."
    if warranty_info:
        description += f" Warranty: {warranty_info}"
    return description


class PurchaseEmailParser:
    """
    Turn raw emails into advisory ParsedCandidate records.

    Returns None for emails the classifier rejects; every other email yields
    a candidate, however incomplete, with a confidence score for triage.
    """

    def __init__(
        self,
        classifier: PurchaseEmailClassifier | None = None,
        extractor: PurchaseFieldExtractor | None = None,
        warranty_months: int = DEFAULT_WARRANTY_MONTHS,
    ):
        if warranty_months < 1:
            raise ValueError(f"warranty_months must be >= 1, got {warranty_months}")
        self.classifier = classifier or PurchaseEmailClassifier()
        self.extractor = extractor or PurchaseFieldExtractor()
        self.warranty_months = warranty_months

    def is_purchase_email(self, email: RawEmail | Mapping[str, Any]) -> bool:
        """Pre-filter without running the extractors."""
        return self.classifier.is_purchase_email(email)

    def parse_email(
        self,
        email: RawEmail | Mapping[str, Any],
        now: datetime | None = None,
    ) -> ParsedCandidate | None:
        """
        Parse one email into a candidate product record.

        Args:
            email: RawEmail or mapping with id/subject/from/date/body
            now: Purchase-date fallback when neither the header nor the text
                 yields a date (defaults to the current UTC time)

        Returns:
            ParsedCandidate, or None when the email is not a purchase email
        """
        raw = RawEmail.coerce(email)
        subject = normalize_subject(raw.subject)
        body = normalize_body(raw.body)

        with time_block("parser.parse_email.latency"):
            classification = self.classifier.classify_parts(raw.from_address, subject, body)
            if not classification.is_purchase:
                counter("parser.rejected")
                logger.debug("Not a purchase email: %s", redact_subject(subject))
                return None

            fields = self.extractor.extract(
                raw, subject, body, now=now, warranty_months=self.warranty_months
            )
            warranty_end_date = compute_warranty_end_date(
                fields.purchase_date, self.warranty_months
            )
            confidence = score_confidence(
                raw, fields.name, fields.vendor, fields.price, fields.order_number
            )

            candidate = ParsedCandidate(
                name=fields.name,
                category=fields.category,
                vendor=fields.vendor,
                purchase_date=fields.purchase_date,
                warranty_end_date=warranty_end_date,
                price=fields.price,
                currency=fields.currency,
                order_number=fields.order_number,
                warranty_info=fields.warranty_info,
                suggested_warranty_months=estimate_warranty_months(combined_text(subject, body)),
                brand=fields.brand,
                description=_build_description(fields.vendor, fields.warranty_info),
                email_id=raw.id,
                confidence=confidence,
            )

        counter("parser.accepted")
        log_event(
            "parser.candidate",
            email_id=redact(raw.id),
            signals=[s.value for s in classification.signals],
            date_source=fields.purchase_date_source.value,
            category=candidate.category.value,
            confidence=confidence,
        )
        return candidate


_default_parser = PurchaseEmailParser()


def parse_email(
    email: RawEmail | Mapping[str, Any], now: datetime | None = None
) -> ParsedCandidate | None:
    """Parse with the default (compiled-in tables, 12-month window) parser."""
    return _default_parser.parse_email(email, now=now)


def is_purchase_email(email: RawEmail | Mapping[str, Any]) -> bool:
    """Classify with the default parser's classifier."""
    return _default_parser.is_purchase_email(email)
