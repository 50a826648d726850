"""
WarrantyWatch parsing module - purchase email to candidate product record.
"""

from warrantywatch.parsing.classifier import PurchaseEmailClassifier
from warrantywatch.parsing.confidence import CONFIDENCE_WEIGHTS, score_confidence
from warrantywatch.parsing.field_extractor import PurchaseFieldExtractor
from warrantywatch.parsing.models import ParsedCandidate, ProductCategory, RawEmail
from warrantywatch.parsing.parser import PurchaseEmailParser, is_purchase_email, parse_email
from warrantywatch.parsing.types import (
    ClassificationResult,
    DateSource,
    ExtractedFields,
    PurchaseSignal,
)
from warrantywatch.parsing.warranty import compute_warranty_end_date, estimate_warranty_months

__all__ = [
    # Models
    "ParsedCandidate",
    "ProductCategory",
    "RawEmail",
    # Classifier
    "ClassificationResult",
    "PurchaseEmailClassifier",
    "PurchaseSignal",
    # Field extractor
    "DateSource",
    "ExtractedFields",
    "PurchaseFieldExtractor",
    # Warranty window
    "compute_warranty_end_date",
    "estimate_warranty_months",
    # Confidence
    "CONFIDENCE_WEIGHTS",
    "score_confidence",
    # Parser (main pipeline)
    "PurchaseEmailParser",
    "is_purchase_email",
    "parse_email",
]
