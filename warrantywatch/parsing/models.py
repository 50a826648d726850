"""
Domain models (Pydantic v2) for the purchase-email parser.

RawEmail is the normalized record handed over by the email-retrieval
collaborator; ParsedCandidate is the advisory product record handed to the
persistence/UI collaborator for human review. Both are frozen.

Unresolved name/vendor are represented as None inside the model; the
"Unknown Product"/"Unknown Vendor" sentinels only appear at the API boundary
(see ParsedCandidate.to_api_dict).
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from warrantywatch.config import (
    CANDIDATE_SOURCE,
    DEFAULT_CURRENCY,
    UNKNOWN_PRODUCT,
    UNKNOWN_VENDOR,
)


class ProductCategory(str, Enum):
    """Closed set of product categories.

    Extends str so JSON serialization produces the raw label (e.g. "Electronics").
    """

    ELECTRONICS = "Electronics"
    APPLIANCES = "Appliances"
    FURNITURE = "Furniture"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    SPORTS_EQUIPMENT = "Sports Equipment"
    TOOLS = "Tools"
    AUTOMOTIVE = "Automotive"
    HOME_AND_GARDEN = "Home & Garden"
    OTHER = "Other"


class RawEmail(BaseModel):
    """Email as delivered by the retrieval collaborator.

    Every field is optional; None/missing text fields become "" so the
    parser never has to guard against them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    subject: str = ""
    from_address: str = Field(default="", alias="from")
    date: str | None = None
    body: str = ""

    @field_validator("id", "subject", "from_address", "body", mode="before")
    @classmethod
    def _text_or_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("date", mode="before")
    @classmethod
    def _date_or_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        if isinstance(value, datetime):
            return value.isoformat()
        value = str(value).strip()
        return value or None

    @classmethod
    def coerce(cls, value: RawEmail | Mapping[str, Any]) -> RawEmail:
        """Accept either a RawEmail or a plain mapping (e.g. decoded JSON)."""
        if isinstance(value, RawEmail):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(f"expected RawEmail or mapping, got {type(value).__name__}")


class ParsedCandidate(BaseModel):
    """
    Unconfirmed product record extracted from a purchase email.

    Produced fresh per parse call and never mutated. Invariants:
    - warranty_end_date is at least one calendar month after purchase_date
    - confidence is within [0, 100]
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    category: ProductCategory = ProductCategory.OTHER
    vendor: str | None = None
    purchase_date: datetime
    warranty_end_date: datetime
    price: float | None = None
    currency: str = DEFAULT_CURRENCY
    order_number: str | None = None
    warranty_info: str | None = None
    # Duration mined from the email text; informational, not applied to warranty_end_date
    suggested_warranty_months: int | None = None
    brand: str | None = None
    description: str = ""
    source: str = CANDIDATE_SOURCE
    email_id: str = ""
    serial_number: str | None = None
    confidence: int = Field(default=0, ge=0, le=100)

    @model_validator(mode="after")
    def _check_warranty_window(self) -> ParsedCandidate:
        if self.warranty_end_date < self.purchase_date + relativedelta(months=1):
            raise ValueError("warranty_end_date must be at least one month after purchase_date")
        return self

    @property
    def display_name(self) -> str:
        return self.name or UNKNOWN_PRODUCT

    @property
    def display_vendor(self) -> str:
        return self.vendor or UNKNOWN_VENDOR

    def to_api_dict(self) -> dict[str, Any]:
        """
        Wire shape consumed by the products API and the review UI.

        camelCase keys, ISO 8601 dates, sentinel strings for unresolved fields.
        """
        return {
            "name": self.display_name,
            "category": self.category.value,
            "vendor": self.display_vendor,
            "purchaseDate": self.purchase_date.isoformat(),
            "warrantyEndDate": self.warranty_end_date.isoformat(),
            "price": self.price,
            "currency": self.currency,
            "serialNumber": self.serial_number,
            "description": self.description,
            "source": self.source,
            "emailId": self.email_id,
            "orderNumber": self.order_number,
            "warrantyInfo": self.warranty_info,
            "suggestedWarrantyMonths": self.suggested_warranty_months,
            "brand": self.brand,
            "confidence": self.confidence,
        }
