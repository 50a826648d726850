"""Centralized configuration for the WarrantyWatch parser.

Typed constants for the extraction pipeline. The log level comes from the
WARRANTYWATCH_LOG_LEVEL environment variable (see observability.logging).
The lookup tables (domains, keywords, categories) are compiled-in and live in
warrantywatch.parsing.parser_data.
"""

from __future__ import annotations

# --- App ---
APP_VERSION: str = "1.0.0"

# --- Warranty window ---
DEFAULT_WARRANTY_MONTHS: int = 12

# --- Price extraction ---
PRICE_MIN_EXCLUSIVE: float = 0.0
PRICE_MAX_EXCLUSIVE: float = 100000.0
DEFAULT_CURRENCY: str = "USD"

# --- Product name extraction ---
NAME_MIN_LEN_EXCLUSIVE: int = 3
NAME_MAX_LEN_EXCLUSIVE: int = 100
SUBJECT_FALLBACK_MAX_WORDS: int = 5
SUBJECT_FALLBACK_MIN_WORD_LEN: int = 3

# --- Vendor extraction ---
VENDOR_MIN_LEN_EXCLUSIVE: int = 2
VENDOR_MAX_LEN_EXCLUSIVE: int = 50

# --- API boundary sentinels ---
UNKNOWN_PRODUCT: str = "Unknown Product"
UNKNOWN_VENDOR: str = "Unknown Vendor"
CANDIDATE_SOURCE: str = "email"
