"""
Field Extractor - Extract a structured product record from a purchase email.

Stage 2 of the parsing pipeline. Rules only: every field has its own ordered
pattern chain (see strategies.py) and its own fallback, and no extractor
reads another extractor's output except category, which classifies the
resolved product name.

All extractors read subject + " " + body (normalized) unless noted and
return None for "unresolved" instead of raising.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

from warrantywatch.config import (
    DEFAULT_CURRENCY,
    DEFAULT_WARRANTY_MONTHS,
    NAME_MAX_LEN_EXCLUSIVE,
    NAME_MIN_LEN_EXCLUSIVE,
    PRICE_MAX_EXCLUSIVE,
    PRICE_MIN_EXCLUSIVE,
    SUBJECT_FALLBACK_MAX_WORDS,
    SUBJECT_FALLBACK_MIN_WORD_LEN,
    VENDOR_MAX_LEN_EXCLUSIVE,
    VENDOR_MIN_LEN_EXCLUSIVE,
)
from warrantywatch.observability.logging import get_logger
from warrantywatch.observability.telemetry import counter
from warrantywatch.parsing.dates import parse_date_text, parse_email_date, to_utc
from warrantywatch.parsing.models import ProductCategory, RawEmail
from warrantywatch.parsing.parser_data import (
    CATEGORY_KEYWORDS,
    CURRENCY_SYMBOLS,
    KNOWN_BRANDS,
    ORDER_LABEL_TOKENS,
    PURCHASE_KEYWORDS,
    VENDOR_DOMAIN_MAP,
)
from warrantywatch.parsing.strategies import PatternStrategy, first_match
from warrantywatch.parsing.text import combined_text
from warrantywatch.parsing.types import DateSource, ExtractedFields
from warrantywatch.parsing.warranty import compute_warranty_end_date
from warrantywatch.utils.email import domain_matches, extract_domain

logger = get_logger(__name__)

_S = PatternStrategy.compile

# A bare "ordered on ..." / "purchased from ..." names a date or vendor, not a product
_NOT_A_PRODUCT = r"(?!on\b|from\b)"

PRODUCT_NAME_STRATEGIES: tuple[PatternStrategy, ...] = (
    _S("ordered", rf"\bordered\s+{_NOT_A_PRODUCT}([^.!?\n]+)"),
    _S("purchased", rf"\bpurchased\s+{_NOT_A_PRODUCT}([^.!?\n]+)"),
    _S("bought", rf"\bbought\s+{_NOT_A_PRODUCT}([^.!?\n]+)"),
    _S("item_label", r"\bitem:\s*([^.!?\n]+)"),
    _S("product_label", r"\bproduct:\s*([^.!?\n]+)"),
    _S("description_label", r"\bdescription:\s*([^.!?\n]+)"),
    _S("has_been_ordered", r"([a-zA-Z0-9 &]+)\s+has\s+been\s+ordered"),
    _S("order_confirmation", r"([a-zA-Z0-9 &]+)\s+order\s+confirmation"),
)

VENDOR_TEXT_STRATEGIES: tuple[PatternStrategy, ...] = (
    _S("from", r"\bfrom\s+([a-zA-Z &]+)"),
    _S("ordered_from", r"\bordered\s+from\s+([a-zA-Z &]+)"),
    _S("purchased_from", r"\bpurchased\s+from\s+([a-zA-Z &]+)"),
    _S("name_order", r"([a-zA-Z &]+)\s+order\b"),
    _S("name_receipt", r"([a-zA-Z &]+)\s+receipt\b"),
)

_AMOUNT = r"([0-9][0-9,]*\.?[0-9]*)"
_SYMBOL = r"(?:[$₹€£]|rs\.?)?"

# Run against lower-cased text
PRICE_STRATEGIES: tuple[PatternStrategy, ...] = (
    _S("total", rf"total:\s*{_SYMBOL}\s*{_AMOUNT}"),
    _S("amount", rf"amount:\s*{_SYMBOL}\s*{_AMOUNT}"),
    _S("price", rf"price:\s*{_SYMBOL}\s*{_AMOUNT}"),
    _S("cost", rf"cost:\s*{_SYMBOL}\s*{_AMOUNT}"),
    _S("paid", rf"paid:\s*{_SYMBOL}\s*{_AMOUNT}"),
    _S("charged", rf"charged:\s*{_SYMBOL}\s*{_AMOUNT}"),
    _S("dollar", rf"\$\s*{_AMOUNT}"),
    _S("rupee", rf"₹\s*{_AMOUNT}"),
    _S("rs", rf"\brs\.?\s*{_AMOUNT}"),
)

DATE_CUE_STRATEGIES: tuple[PatternStrategy, ...] = (
    _S("ordered_on", r"\bordered\s+on\s+([^\n]+)"),
    _S("purchased_on", r"\bpurchased\s+on\s+([^\n]+)"),
    _S("order_date", r"\border\s+date:\s*([^\n]+)"),
    _S("purchase_date", r"\bpurchase\s+date:\s*([^\n]+)"),
    _S("date_label", r"\bdate:\s*([^\n]+)"),
)

_ORDER_LABEL = r"\b(?:order|ord|invoice|inv|transaction|txn|trans)\b\.?"
# Identifier token: letters/digits/hyphens containing at least one digit
_ORDER_TOKEN = r"((?=[a-z0-9-]*[0-9])[a-z0-9][a-z0-9-]*)"

ORDER_NUMBER_STRATEGIES: tuple[PatternStrategy, ...] = (
    _S("labelled_number", rf"{_ORDER_LABEL}\s*(?:number|no|id)\b\.?\s*[#:]?\s*{_ORDER_TOKEN}"),
    _S("hash_or_colon", rf"{_ORDER_LABEL}\s*[#:]\s*{_ORDER_TOKEN}"),
    _S("bare", rf"{_ORDER_LABEL}\s+{_ORDER_TOKEN}"),
)

WARRANTY_INFO_STRATEGIES: tuple[PatternStrategy, ...] = (
    _S("warranty_label", r"\bwarranty:\s*([^.!?\n]+)"),
    _S("guarantee_label", r"\bguarantee:\s*([^.!?\n]+)"),
    _S("coverage_label", r"\bcoverage:\s*([^.!?\n]+)"),
    _S("inline_duration", r"\b(\d+[\s-]*(?:year|month|day)s?[\s-]*warranty)"),
    _S("warranty_period", r"\bwarranty\s*period:\s*([^.!?\n]+)"),
    _S("warranty_terms", r"\bwarranty\s*terms:\s*([^.!?\n]+)"),
)

_BOILERPLATE_RE = re.compile(
    r"\b(?:order|ord|inv|txn|trans|receipt|confirmation|number|id)\b|#", re.IGNORECASE
)
_BRAND_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (brand, re.compile(rf"\b{re.escape(brand)}\b", re.IGNORECASE)) for brand in KNOWN_BRANDS
)
_SUBJECT_STOP_WORDS = frozenset(PURCHASE_KEYWORDS) | ORDER_LABEL_TOKENS


def clean_product_name(name: str) -> str:
    """Strip order/receipt boilerplate tokens and collapse whitespace."""
    return " ".join(_BOILERPLATE_RE.sub(" ", name).split())


def _accept_product_name(captured: str) -> str | None:
    candidate = captured.strip()
    if not NAME_MIN_LEN_EXCLUSIVE < len(candidate) < NAME_MAX_LEN_EXCLUSIVE:
        return None
    return clean_product_name(candidate) or None


def _accept_vendor(captured: str) -> str | None:
    candidate = captured.strip()
    if VENDOR_MIN_LEN_EXCLUSIVE < len(candidate) < VENDOR_MAX_LEN_EXCLUSIVE:
        return candidate
    return None


def _accept_price(captured: str) -> float | None:
    try:
        value = float(captured.replace(",", ""))
    except ValueError:
        return None
    if PRICE_MIN_EXCLUSIVE < value < PRICE_MAX_EXCLUSIVE:
        return value
    return None


def _accept_span(captured: str) -> str | None:
    return captured.strip() or None


def _accept_order_number(captured: str) -> str | None:
    return captured.strip("-") or None


def _window_fits(purchase_date: datetime, months: int) -> bool:
    """False when the warranty end date would fall past the calendar limit."""
    try:
        compute_warranty_end_date(purchase_date, months)
    except (ValueError, OverflowError):
        return False
    return True


class PurchaseFieldExtractor:
    """
    Extract product fields from a purchase email with independent rule chains.

    Stateless; one instance can be shared by any number of threads.
    """

    def extract(
        self,
        email: RawEmail,
        subject: str,
        body: str,
        now: datetime | None = None,
        warranty_months: int = DEFAULT_WARRANTY_MONTHS,
    ) -> ExtractedFields:
        """
        Run every extractor against the same normalized text.

        Args:
            email: Raw email (for the from/date headers)
            subject: Normalized subject
            body: Normalized body
            now: Fallback purchase date; defaults to the current UTC time
            warranty_months: Window the purchase date must leave room for

        Returns:
            ExtractedFields with None for anything unresolved
        """
        text = combined_text(subject, body)

        name = self.extract_product_name(subject, text)
        purchase_date, date_source = self.extract_purchase_date(
            email.date, text, now, warranty_months
        )

        return ExtractedFields(
            name=name,
            vendor=self.extract_vendor(email.from_address, text),
            purchase_date=purchase_date,
            purchase_date_source=date_source,
            category=self.determine_category(name),
            price=self.extract_price(text),
            currency=self.detect_currency(text),
            order_number=self.extract_order_number(text),
            warranty_info=self.extract_warranty_info(text),
            brand=self.detect_brand(text),
        )

    def extract_vendor(self, from_address: str, text: str) -> str | None:
        """
        Resolve the merchant name.

        Priority:
        1. Sender domain in the vendor map (exact, then parent domain)
        2. First DNS label of the sender domain, title-cased
        3. Text cues ("from X", "X order", "X receipt")
        """
        domain = extract_domain(from_address)
        if domain:
            mapped = VENDOR_DOMAIN_MAP.get(domain)
            if mapped is None:
                mapped = next(
                    (
                        vendor
                        for known, vendor in VENDOR_DOMAIN_MAP.items()
                        if domain_matches(domain, known)
                    ),
                    None,
                )
            if mapped:
                return mapped

            labels = [label for label in domain.split(".") if label]
            if len(labels) >= 2:
                first = labels[0]
                return first[:1].upper() + first[1:]

        found = first_match(VENDOR_TEXT_STRATEGIES, text, _accept_vendor)
        if found is None:
            return None
        vendor, strategy = found
        logger.debug("Vendor resolved from text via %s", strategy)
        return vendor

    def extract_product_name(self, subject: str, text: str) -> str | None:
        """Product label from cue patterns, falling back to subject keywords."""
        found = first_match(PRODUCT_NAME_STRATEGIES, text, _accept_product_name)
        if found is not None:
            name, strategy = found
            logger.debug("Product name resolved via %s", strategy)
            return name

        words = [
            word
            for word in subject.split()
            if len(word) >= SUBJECT_FALLBACK_MIN_WORD_LEN
            and word.lower().strip(":;,.!?#") not in _SUBJECT_STOP_WORDS
        ]
        if words:
            return " ".join(words[:SUBJECT_FALLBACK_MAX_WORDS])
        return None

    def extract_price(self, text: str) -> float | None:
        """First label-anchored, then symbol-anchored amount within (0, 100000)."""
        found = first_match(PRICE_STRATEGIES, text.lower(), _accept_price)
        return found[0] if found else None

    def detect_currency(self, text: str) -> str:
        """Currency from whichever symbol literally appears; USD by default."""
        for symbol, code in CURRENCY_SYMBOLS:
            if symbol in text:
                return code
        return DEFAULT_CURRENCY

    def extract_purchase_date(
        self,
        date_header: str | None,
        text: str,
        now: datetime | None = None,
        warranty_months: int = DEFAULT_WARRANTY_MONTHS,
    ) -> tuple[datetime, DateSource]:
        """
        Resolve the purchase date.

        Priority:
        1. The email's own date header (authoritative)
        2. Cue phrases in the text ("ordered on ...", "order date: ...")
        3. now - an explicit approximation, wall-clock dependent

        A date too late to add warranty_months to (year 9999) is skipped.
        """
        header_date = parse_email_date(date_header)
        if header_date is not None:
            if _window_fits(header_date, warranty_months):
                return header_date, DateSource.HEADER
            counter("parser.date_out_of_range")

        def accept(captured: str) -> datetime | None:
            parsed = parse_date_text(captured)
            if parsed is None or not _window_fits(parsed, warranty_months):
                return None
            return parsed

        found = first_match(DATE_CUE_STRATEGIES, text, accept)
        if found is not None:
            return found[0], DateSource.TEXT

        counter("parser.date_fallback_now")
        return to_utc(now) if now else datetime.now(UTC), DateSource.NOW

    def extract_order_number(self, text: str) -> str | None:
        found = first_match(ORDER_NUMBER_STRATEGIES, text, _accept_order_number)
        return found[0] if found else None

    def extract_warranty_info(self, text: str) -> str | None:
        """Verbatim warranty snippet; informational only."""
        found = first_match(WARRANTY_INFO_STRATEGIES, text, _accept_span)
        return found[0] if found else None

    def determine_category(self, name: str | None) -> ProductCategory:
        """First category (in declaration order) with a keyword inside the name."""
        if not name:
            return ProductCategory.OTHER
        lowered = name.lower()
        for label, keywords in CATEGORY_KEYWORDS:
            if any(keyword in lowered for keyword in keywords):
                return ProductCategory(label)
        return ProductCategory.OTHER

    def detect_brand(self, text: str) -> str | None:
        for brand, pattern in _BRAND_PATTERNS:
            if pattern.search(text):
                return brand
        return None
