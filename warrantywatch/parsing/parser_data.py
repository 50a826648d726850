"""
Module: parser_data
Purpose: Domain, keyword, and category constants for the purchase-email parser.
Dependencies: None (pure data, no imports)

Separates lookup data from parsing logic. Edit this file to add/remove
domains or keywords without touching the extraction code. All tables are
immutable and built once at import.
"""

from __future__ import annotations

from types import MappingProxyType

# ---------------------------------------------------------------------------
# Known e-commerce / retail sender domains (classifier domain signal)
# Matched exactly or as a parent domain ("email.amazon.com" -> "amazon.com")
# ---------------------------------------------------------------------------

ECOMMERCE_DOMAINS: tuple[str, ...] = (
    "amazon.com",
    "amazon.in",
    "flipkart.com",
    "myntra.com",
    "snapdeal.com",
    "paytmmall.com",
    "jiomart.com",
    "bigbasket.com",
    "grofers.com",
    "apple.com",
    "samsung.com",
    "dell.com",
    "hp.com",
    "lenovo.com",
    "bestbuy.com",
    "walmart.com",
    "target.com",
    "costco.com",
    "verizon.com",
    "att.com",
    "tmobile.com",
    "sprint.com",
)

# ---------------------------------------------------------------------------
# Sender domain -> canonical vendor name
# ---------------------------------------------------------------------------

VENDOR_DOMAIN_MAP: MappingProxyType[str, str] = MappingProxyType(
    {
        "amazon.com": "Amazon",
        "amazon.in": "Amazon India",
        "flipkart.com": "Flipkart",
        "myntra.com": "Myntra",
        "snapdeal.com": "Snapdeal",
        "apple.com": "Apple",
        "samsung.com": "Samsung",
        "dell.com": "Dell",
        "hp.com": "HP",
        "lenovo.com": "Lenovo",
        "bestbuy.com": "Best Buy",
        "walmart.com": "Walmart",
        "target.com": "Target",
        "verizon.com": "Verizon",
        "att.com": "AT&T",
        "tmobile.com": "T-Mobile",
    }
)

# ---------------------------------------------------------------------------
# Purchase-lifecycle keywords (classifier keyword signal, subject fallback filter)
# ---------------------------------------------------------------------------

PURCHASE_KEYWORDS: tuple[str, ...] = (
    "order",
    "purchase",
    "receipt",
    "invoice",
    "confirmation",
    "shipped",
    "delivered",
    "payment",
    "transaction",
    "billing",
    "order confirmation",
    "purchase receipt",
    "order details",
    "shipping confirmation",
    "delivery confirmation",
)

# Label tokens that never belong in a product name
ORDER_LABEL_TOKENS: frozenset[str] = frozenset(
    {"order", "ord", "inv", "txn", "trans", "receipt", "confirmation"}
)

# ---------------------------------------------------------------------------
# Category -> keyword list. Declaration order is significant: the first
# category with a substring hit wins.
# ---------------------------------------------------------------------------

CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "Electronics",
        (
            "phone",
            "laptop",
            "computer",
            "tablet",
            "tv",
            "television",
            "camera",
            "headphone",
            "speaker",
            "printer",
            "monitor",
            "keyboard",
            "mouse",
        ),
    ),
    (
        "Appliances",
        (
            "refrigerator",
            "washing machine",
            "microwave",
            "oven",
            "dishwasher",
            "air conditioner",
            "fan",
            "heater",
            "vacuum",
            "blender",
        ),
    ),
    (
        "Furniture",
        (
            "chair",
            "table",
            "bed",
            "sofa",
            "desk",
            "cabinet",
            "shelf",
            "mattress",
            "dresser",
            "bookshelf",
        ),
    ),
    (
        "Clothing",
        (
            "shirt",
            "pants",
            "dress",
            "shoes",
            "jacket",
            "sweater",
            "jeans",
            "t-shirt",
            "hoodie",
            "coat",
        ),
    ),
    (
        "Books",
        ("book", "novel", "textbook", "magazine", "journal", "manual", "guide", "dictionary"),
    ),
    (
        "Sports Equipment",
        (
            "bicycle",
            "treadmill",
            "dumbbell",
            "yoga mat",
            "tennis racket",
            "football",
            "basketball",
            "gym equipment",
        ),
    ),
    (
        "Tools",
        ("drill", "hammer", "saw", "wrench", "screwdriver", "pliers", "toolbox", "power tool"),
    ),
    (
        "Automotive",
        ("car", "bike", "motorcycle", "tire", "battery", "oil", "filter", "brake", "engine"),
    ),
    (
        "Home & Garden",
        ("plant", "garden", "lawn mower", "shovel", "rake", "fertilizer", "seed", "pot", "soil"),
    ),
)

# ---------------------------------------------------------------------------
# Brands recognised in product text (matched as whole words)
# ---------------------------------------------------------------------------

KNOWN_BRANDS: tuple[str, ...] = (
    "Samsung",
    "Apple",
    "LG",
    "Sony",
    "Panasonic",
    "Whirlpool",
    "Bosch",
    "Philips",
    "Dell",
    "HP",
    "Lenovo",
    "Asus",
    "Acer",
    "Canon",
    "Nikon",
    "JBL",
    "Bose",
    "Sennheiser",
    "Nike",
    "Adidas",
    "Puma",
    "Reebok",
)

# ---------------------------------------------------------------------------
# Typical manufacturer warranty (months) by product keyword. Informational:
# feeds suggested_warranty_months only, never the warranty end date.
# ---------------------------------------------------------------------------

TYPICAL_WARRANTY_MONTHS: tuple[tuple[str, int], ...] = (
    ("laptop", 12),
    ("phone", 12),
    ("tablet", 12),
    ("tv", 12),
    ("refrigerator", 24),
    ("washing machine", 24),
    ("air conditioner", 12),
    ("microwave", 12),
    ("blender", 12),
    ("toaster", 12),
)

# ---------------------------------------------------------------------------
# Currency symbols -> ISO code, checked in order; USD when none appear
# ---------------------------------------------------------------------------

CURRENCY_SYMBOLS: tuple[tuple[str, str], ...] = (
    ("₹", "INR"),
    ("€", "EUR"),
    ("£", "GBP"),
)
