"""
Module: types
Purpose: Shared result types for the parsing pipeline.
Dependencies: warrantywatch.config (DEFAULT_CURRENCY), warrantywatch.parsing.models (ProductCategory)

Leaf module so classifier, field_extractor, and parser can share types
without importing each other.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from warrantywatch.config import DEFAULT_CURRENCY
from warrantywatch.parsing.models import ProductCategory


class PurchaseSignal(str, Enum):
    """Independent classifier signals; any one marks an email as a purchase."""

    DOMAIN = "domain"
    KEYWORD = "keyword"
    ORDER_NUMBER = "order_number"


class DateSource(str, Enum):
    """Where the purchase date came from."""

    HEADER = "header"
    TEXT = "text"
    NOW = "now"


@dataclass(frozen=True)
class ClassificationResult:
    """Result of the purchase classifier."""

    is_purchase: bool
    domain: str | None
    signals: tuple[PurchaseSignal, ...] = ()


@dataclass(frozen=True)
class ExtractedFields:
    """Fields extracted from a purchase email. None means unresolved."""

    name: str | None
    vendor: str | None
    purchase_date: datetime
    purchase_date_source: DateSource
    category: ProductCategory = ProductCategory.OTHER
    price: float | None = None
    currency: str = DEFAULT_CURRENCY
    order_number: str | None = None
    warranty_info: str | None = None
    brand: str | None = None
