"""
Unit tests for PurchaseEmailClassifier.

Tests the three independent signals (domain, keyword, order number) and
tolerance of empty input.
"""

from __future__ import annotations

import pytest

from warrantywatch.parsing.classifier import PurchaseEmailClassifier
from warrantywatch.parsing.models import RawEmail
from warrantywatch.parsing.parser_data import ECOMMERCE_DOMAINS
from warrantywatch.parsing.types import PurchaseSignal


@pytest.fixture
def classifier() -> PurchaseEmailClassifier:
    return PurchaseEmailClassifier()


class TestDomainSignal:
    @pytest.mark.parametrize("domain", ECOMMERCE_DOMAINS)
    def test_known_domain_is_purchase_regardless_of_content(self, classifier, domain):
        email = {"subject": "Hello", "from": f"news@{domain}", "body": "See you soon"}
        result = classifier.classify(email)

        assert result.is_purchase is True
        assert PurchaseSignal.DOMAIN in result.signals

    def test_subdomain_of_known_domain_matches(self, classifier):
        result = classifier.classify({"from": "Amazon <ship-confirm@email.amazon.com>"})

        assert result.is_purchase is True
        assert result.domain == "email.amazon.com"
        assert result.signals == (PurchaseSignal.DOMAIN,)

    def test_domain_match_is_case_insensitive(self, classifier):
        assert classifier.is_purchase_email({"from": "Orders@BestBuy.COM"}) is True

    def test_lookalike_domain_does_not_match(self, classifier):
        result = classifier.classify({"from": "promo@notamazon.com", "subject": "Hi"})

        assert result.is_purchase is False


class TestKeywordSignal:
    def test_invoice_from_unknown_domain_is_purchase(self, classifier):
        email = {"subject": "Your invoice", "from": "billing@tiny-shop.example", "body": ""}
        result = classifier.classify(email)

        assert result.is_purchase is True
        assert PurchaseSignal.KEYWORD in result.signals

    def test_keyword_in_body_only(self, classifier):
        email = {"subject": "Hello", "from": "a@b.example", "body": "Your package was DELIVERED"}

        assert classifier.is_purchase_email(email) is True

    def test_personal_email_is_not_purchase(self, classifier, personal_email):
        result = classifier.classify(personal_email)

        assert result.is_purchase is False
        assert result.signals == ()


class TestOrderNumberSignal:
    def test_transaction_identifier(self, classifier):
        # "txn" is not a keyword, so only the order-number pattern can fire
        email = {"subject": "Ref", "from": "x@y.example", "body": "TXN: AB12-3456"}
        result = classifier.classify(email)

        assert result.signals == (PurchaseSignal.ORDER_NUMBER,)

    def test_short_identifier_does_not_fire(self, classifier):
        email = {"subject": "Ref", "from": "x@y.example", "body": "txn 12345"}

        assert classifier.is_purchase_email(email) is False


class TestEmptyInput:
    @pytest.mark.parametrize(
        "email",
        [
            {},
            {"subject": None, "from": None, "body": None, "date": None},
            RawEmail(),
        ],
    )
    def test_empty_email_does_not_raise(self, classifier, email):
        assert classifier.is_purchase_email(email) is False

    def test_from_without_domain(self, classifier):
        result = classifier.classify({"from": "mailer-daemon", "subject": "hello"})

        assert result.domain is None
        assert result.is_purchase is False


def test_custom_tables():
    classifier = PurchaseEmailClassifier(domains=["croma.com"], keywords=["bill"])

    assert classifier.is_purchase_email({"from": "hi@croma.com"}) is True
    assert classifier.is_purchase_email({"from": "hi@amazon.com"}) is False
    assert classifier.is_purchase_email({"subject": "Your bill"}) is True
