"""
Pytest configuration for parser tests

Provides sample emails shared across test files
"""

from datetime import UTC, datetime

import pytest

from warrantywatch.observability.telemetry import reset_metrics

FIXED_NOW = datetime(2025, 6, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clean_metrics():
    """Counters are process-global; start every test from zero."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def amazon_email() -> dict:
    """Shipping notice with price, order number and a date header."""
    return {
        "id": "msg-amazon-001",
        "subject": "Your Amazon.com order has shipped",
        "from": "orders@amazon.com",
        "date": "Thu, 20 Nov 2025 10:00:00 +0000",
        "body": "Total: $49.99\nArriving Friday.\nOrder #112-3344556",
    }


@pytest.fixture
def bestbuy_receipt() -> dict:
    """Receipt with no price, no order number and no date header."""
    return {
        "id": "msg-bestbuy-001",
        "subject": "Receipt from Best Buy",
        "from": "noreply@bestbuy.com",
        "date": None,
        "body": "Thanks for shopping with us.",
    }


@pytest.fixture
def personal_email() -> dict:
    return {
        "id": "msg-personal-001",
        "subject": "Hi there",
        "from": "friend@gmail.com",
        "date": "Mon, 02 Jun 2025 08:00:00 +0000",
        "body": "",
    }


@pytest.fixture
def warranty_email() -> dict:
    """Mentions a 2 year warranty that must not change the 12-month window."""
    return {
        "id": "msg-croma-001",
        "subject": "Order confirmation",
        "from": "Croma Store <orders@croma.com>",
        "date": "2025-03-10T09:30:00+00:00",
        "body": (
            "Item: Samsung 55 inch Smart TV\n"
            "Amount: ₹54,990\n"
            "Includes 2 year warranty on parts and labour."
        ),
    }
