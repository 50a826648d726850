"""WarrantyWatch - Turn purchase emails into warranty-tracked product candidates"""

from __future__ import annotations

__version__ = "1.0.0"


# Lazy imports so lightweight modules (config, utils) load without the parser stack
def __getattr__(name: str):
    if name in ("parse_email", "is_purchase_email", "PurchaseEmailParser"):
        from warrantywatch.parsing import parser

        return getattr(parser, name)

    if name in ("ParsedCandidate", "RawEmail", "ProductCategory"):
        from warrantywatch.parsing import models

        return getattr(models, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ParsedCandidate",
    "ProductCategory",
    "PurchaseEmailParser",
    "RawEmail",
    "is_purchase_email",
    "parse_email",
]
