"""
Purchase classifier - decide whether an email is an order/receipt email.

Stage 1 of the parsing pipeline. Three independent signals, any one is enough:
1. Sender domain is a known e-commerce/retail domain
2. Subject or body mentions a purchase-lifecycle keyword
3. Subject + body contains an order/invoice/transaction identifier

Deliberately permissive: recall over precision, because every candidate is
reviewed by a human before it becomes a tracked product.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from warrantywatch.observability.logging import get_logger
from warrantywatch.parsing.models import RawEmail
from warrantywatch.parsing.parser_data import ECOMMERCE_DOMAINS, PURCHASE_KEYWORDS
from warrantywatch.parsing.text import combined_text, normalize_body, normalize_subject
from warrantywatch.parsing.types import ClassificationResult, PurchaseSignal
from warrantywatch.utils.email import domain_matches, extract_domain

logger = get_logger(__name__)

ORDER_NUMBER_SIGNAL_RE = re.compile(
    r"\b(order|ord|inv|txn|trans|receipt)[\s#:]*[a-z0-9-]{6,}\b", re.IGNORECASE
)


class PurchaseEmailClassifier:
    """
    Classify emails as purchase emails using domain, keyword and order-number signals.

    Lookup tables default to the compiled-in constants in parser_data.py.
    """

    def __init__(
        self,
        domains: Iterable[str] = ECOMMERCE_DOMAINS,
        keywords: Iterable[str] = PURCHASE_KEYWORDS,
    ):
        self.domains: tuple[str, ...] = tuple(d.lower() for d in domains)
        self.keywords: tuple[str, ...] = tuple(k.lower() for k in keywords)

    def classify(self, email: RawEmail | Mapping[str, Any]) -> ClassificationResult:
        """Classify a raw email (normalizes subject/body first)."""
        raw = RawEmail.coerce(email)
        return self.classify_parts(
            raw.from_address,
            normalize_subject(raw.subject),
            normalize_body(raw.body),
        )

    def classify_parts(self, from_address: str, subject: str, body: str) -> ClassificationResult:
        """
        Classify already-normalized email parts.

        Args:
            from_address: Sender header (e.g. "Amazon.com <orders@amazon.com>")
            subject: Normalized subject line
            body: Normalized body text

        Returns:
            ClassificationResult listing every signal that fired
        """
        domain = extract_domain(from_address)
        signals: list[PurchaseSignal] = []

        if self._is_known_domain(domain):
            signals.append(PurchaseSignal.DOMAIN)

        subject_lower = subject.lower()
        body_lower = body.lower()
        if any(kw in subject_lower or kw in body_lower for kw in self.keywords):
            signals.append(PurchaseSignal.KEYWORD)

        if ORDER_NUMBER_SIGNAL_RE.search(combined_text(subject, body)):
            signals.append(PurchaseSignal.ORDER_NUMBER)

        result = ClassificationResult(
            is_purchase=bool(signals),
            domain=domain,
            signals=tuple(signals),
        )
        logger.debug(
            "Classified email from domain=%s purchase=%s signals=%s",
            domain,
            result.is_purchase,
            [s.value for s in result.signals],
        )
        return result

    def is_purchase_email(self, email: RawEmail | Mapping[str, Any]) -> bool:
        return self.classify(email).is_purchase

    def _is_known_domain(self, domain: str | None) -> bool:
        if not domain:
            return False
        return any(domain_matches(domain, known) for known in self.domains)
