"""
Unit tests for PurchaseFieldExtractor.

Each extractor is exercised in isolation against small text snippets.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from warrantywatch.config import DEFAULT_CURRENCY
from warrantywatch.parsing.field_extractor import (
    ORDER_NUMBER_STRATEGIES,
    PurchaseFieldExtractor,
    clean_product_name,
)
from warrantywatch.parsing.models import ProductCategory, RawEmail
from warrantywatch.parsing.strategies import first_match
from warrantywatch.parsing.types import DateSource, ExtractedFields


@pytest.fixture
def extractor() -> PurchaseFieldExtractor:
    return PurchaseFieldExtractor()


class TestVendor:
    @pytest.mark.parametrize(
        "from_address,expected",
        [
            ("orders@amazon.com", "Amazon"),
            ("noreply@bestbuy.com", "Best Buy"),
            ("Amazon.in <no-reply@amazon.in>", "Amazon India"),
            ("billing@att.com", "AT&T"),
            ("ship-confirm@email.amazon.com", "Amazon"),
            ("orders@newegg.com", "Newegg"),
        ],
    )
    def test_vendor_from_sender_domain(self, extractor, from_address, expected):
        assert extractor.extract_vendor(from_address, "") == expected

    def test_unmapped_domain_uses_first_label(self, extractor):
        assert extractor.extract_vendor("hello@shop.acme.com", "") == "Shop"

    def test_text_fallback_when_no_domain(self, extractor):
        text = "Thanks for your purchase from Crate & Barrel\nTotal: $20.00"

        assert extractor.extract_vendor("", text) == "Crate & Barrel"

    def test_single_label_domain_falls_back_to_text(self, extractor):
        assert extractor.extract_vendor("root@localhost", "Ikea receipt") == "Ikea"

    def test_overlong_text_match_is_rejected(self, extractor):
        assert extractor.extract_vendor("", "from " + "a" * 60) is None

    def test_unresolved_vendor(self, extractor):
        assert extractor.extract_vendor("", "12345") is None


class TestProductName:
    def test_ordered_cue(self, extractor):
        text = "You ordered Sony WH-1000XM4 Wireless Headphones. Thanks!"

        assert extractor.extract_product_name("", text) == "Sony WH-1000XM4 Wireless Headphones"

    def test_item_label_stops_at_line_end(self, extractor):
        text = "Receipt\nItem: Dyson V11 Vacuum Cleaner\nQty 1"

        assert extractor.extract_product_name("", text) == "Dyson V11 Vacuum Cleaner"

    def test_boilerplate_is_stripped(self, extractor):
        text = "Product: Order Number Ergonomic Desk Lamp\n"

        assert extractor.extract_product_name("", text) == "Ergonomic Desk Lamp"

    def test_too_short_capture_is_skipped(self, extractor):
        # "Pen" is not longer than 3 chars, so the subject fallback applies
        assert extractor.extract_product_name("Garden Hose Reel", "Item: Pen\n") == (
            "Garden Hose Reel"
        )

    def test_date_phrase_is_not_a_product(self, extractor):
        assert extractor.extract_product_name("", "You ordered on March 5, 2024") is None

    def test_subject_fallback_filters_keywords_and_short_words(self, extractor):
        subject = "We shipped your Kindle Paperwhite Signature Edition today"

        assert extractor.extract_product_name(subject, subject) == (
            "your Kindle Paperwhite Signature Edition"
        )

    def test_subject_fallback_ignores_trailing_punctuation(self, extractor):
        assert extractor.extract_product_name("Shipped: Bose Speaker", "") == "Bose Speaker"

    def test_unresolved_name(self, extractor):
        assert extractor.extract_product_name("Order receipt", "Order receipt") is None

    def test_clean_product_name(self):
        assert clean_product_name("Confirmation  number  Laptop   Stand #") == "Laptop Stand"


class TestPrice:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Total: $49.99", 49.99),
            ("TOTAL: $1,299.00", 1299.0),
            ("Amount: ₹54,990", 54990.0),
            ("Charged: 15", 15.0),
            ("You paid $12.50 today", 12.5),
            ("Rs. 1,250 paid", 1250.0),
        ],
    )
    def test_price_patterns(self, extractor, text, expected):
        assert extractor.extract_price(text) == pytest.approx(expected)

    def test_out_of_range_value_moves_to_next_pattern(self, extractor):
        text = "Total: $250,000.00\nPaid: $120.00"

        assert extractor.extract_price(text) == pytest.approx(120.0)

    def test_zero_is_rejected(self, extractor):
        assert extractor.extract_price("Total: $0.00") is None

    def test_no_price(self, extractor):
        assert extractor.extract_price("Thanks for shopping") is None


class TestCurrency:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Amount: ₹499", "INR"),
            ("Total: €20", "EUR"),
            ("Total: £20", "GBP"),
            ("Total: $20", "USD"),
            ("no symbol at all", "USD"),
        ],
    )
    def test_currency_from_symbol(self, extractor, text, expected):
        assert extractor.detect_currency(text) == expected

    def test_currency_independent_of_price_pattern(self, extractor):
        # Price comes from "$", currency from the first known symbol present
        assert extractor.detect_currency("Paid $10 (approx. €9)") == "EUR"


class TestPurchaseDate:
    def test_rfc2822_header(self, extractor):
        parsed, source = extractor.extract_purchase_date("Thu, 20 Nov 2025 10:00:00 +0000", "")

        assert parsed == datetime(2025, 11, 20, 10, 0, tzinfo=UTC)
        assert source == DateSource.HEADER

    def test_header_with_zone_comment(self, extractor):
        parsed, _ = extractor.extract_purchase_date("Mon, 3 Mar 2025 10:00:00 +0000 (UTC)", "")

        assert parsed == datetime(2025, 3, 3, 10, 0, tzinfo=UTC)

    def test_iso_header_is_converted_to_utc(self, extractor):
        parsed, _ = extractor.extract_purchase_date("2024-03-05T14:30:00-05:00", "")

        assert parsed == datetime(2024, 3, 5, 19, 30, tzinfo=UTC)

    def test_header_wins_over_text(self, extractor):
        parsed, source = extractor.extract_purchase_date(
            "2025-01-02T00:00:00Z", "Order date: March 5, 2024"
        )

        assert parsed.year == 2025
        assert source == DateSource.HEADER

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Order date: March 5, 2024", datetime(2024, 3, 5, tzinfo=UTC)),
            ("You ordered on 2024-01-15 at our store", datetime(2024, 1, 15, tzinfo=UTC)),
            ("Purchased on 12 Feb 2024", datetime(2024, 2, 12, tzinfo=UTC)),
            ("Purchase date: 07/04/2024", datetime(2024, 7, 4, tzinfo=UTC)),
        ],
    )
    def test_text_cues(self, extractor, text, expected):
        parsed, source = extractor.extract_purchase_date("garbage", text)

        assert parsed == expected
        assert source == DateSource.TEXT

    def test_falls_back_to_now(self, extractor, fixed_now):
        parsed, source = extractor.extract_purchase_date(None, "No dates here", now=fixed_now)

        assert parsed == fixed_now
        assert source == DateSource.NOW

    def test_naive_now_is_treated_as_utc(self, extractor):
        parsed, _ = extractor.extract_purchase_date(None, "", now=datetime(2025, 1, 1, 8, 0))

        assert parsed == datetime(2025, 1, 1, 8, 0, tzinfo=UTC)

    def test_unparseable_cue_falls_back_to_now(self, extractor, fixed_now):
        parsed, source = extractor.extract_purchase_date(
            None, "Date: to be confirmed", now=fixed_now
        )

        assert parsed == fixed_now
        assert source == DateSource.NOW

    def test_header_past_calendar_limit_moves_to_text_cue(self, extractor, fixed_now):
        parsed, source = extractor.extract_purchase_date(
            "Fri, 31 Dec 9999 10:00:00 +0000", "Order date: March 5, 2024", now=fixed_now
        )

        assert parsed == datetime(2024, 3, 5, tzinfo=UTC)
        assert source == DateSource.TEXT

    def test_cue_past_calendar_limit_moves_to_next_cue(self, extractor, fixed_now):
        text = "Ordered on 12/31/9999\nDate: 2024-05-06"

        parsed, source = extractor.extract_purchase_date(None, text, now=fixed_now)

        assert parsed == datetime(2024, 5, 6, tzinfo=UTC)
        assert source == DateSource.TEXT

    @pytest.mark.parametrize("header", ["March 5", "10:00", "Monday"])
    def test_header_without_year_is_skipped(self, extractor, fixed_now, header):
        parsed, source = extractor.extract_purchase_date(header, "", now=fixed_now)

        assert parsed == fixed_now
        assert source == DateSource.NOW

    def test_missing_day_is_filled_with_first_of_month(self, extractor):
        parsed, source = extractor.extract_purchase_date("March 2025", "")

        assert parsed == datetime(2025, 3, 1, tzinfo=UTC)
        assert source == DateSource.HEADER


class TestOrderNumber:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Your Amazon.com order has shipped Total: $49.99 ... Order #112-3344556", "112-3344556"),
            ("Order Number: AB-123456", "AB-123456"),
            ("Invoice #INV-2024-001", "INV-2024-001"),
            ("Transaction ID: TXN998877", "TXN998877"),
            ("ord: 55512", "55512"),
        ],
    )
    def test_order_number_patterns(self, extractor, text, expected):
        assert extractor.extract_order_number(text) == expected

    def test_word_after_label_is_not_an_order_number(self, extractor):
        assert extractor.extract_order_number("Your order has shipped") is None

    def test_labelled_strategy_wins_over_bare(self):
        text = "order 7 items, order number: X-99"

        assert first_match(ORDER_NUMBER_STRATEGIES, text, lambda s: s) == (
            "X-99",
            "labelled_number",
        )


class TestWarrantyInfo:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Warranty: 1 year limited manufacturer warranty.", "1 year limited manufacturer warranty"),
            ("Guarantee: lifetime replacement", "lifetime replacement"),
            ("This TV comes with a 2-year warranty", "2-year warranty"),
            ("Warranty period: 2 years\nThanks", "2 years"),
            ("Warranty terms: parts only", "parts only"),
        ],
    )
    def test_warranty_snippets(self, extractor, text, expected):
        assert extractor.extract_warranty_info(text) == expected

    def test_no_warranty_mention(self, extractor):
        assert extractor.extract_warranty_info("Thanks for your order") is None


class TestCategory:
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Samsung 55 inch Smart TV", ProductCategory.ELECTRONICS),
            ("Dyson V11 Vacuum Cleaner", ProductCategory.APPLIANCES),
            ("Ergonomic Office Chair", ProductCategory.FURNITURE),
            ("Cordless Drill Kit", ProductCategory.TOOLS),
            ("Yoga Mat Premium", ProductCategory.SPORTS_EQUIPMENT),
            ("Garden Hose", ProductCategory.HOME_AND_GARDEN),
            ("Mystery Gift", ProductCategory.OTHER),
        ],
    )
    def test_category_from_name(self, extractor, name, expected):
        assert extractor.determine_category(name) == expected

    def test_earlier_category_wins_ties(self, extractor):
        # "laptop" (Electronics) and "table" (Furniture) both match
        assert extractor.determine_category("Laptop Table") == ProductCategory.ELECTRONICS

    def test_unresolved_name_is_other(self, extractor):
        assert extractor.determine_category(None) == ProductCategory.OTHER


class TestBrand:
    def test_brand_whole_word(self, extractor):
        assert extractor.detect_brand("New LG monitor") == "LG"

    def test_brand_inside_word_is_ignored(self, extractor):
        assert extractor.detect_brand("a bulging box") is None


def test_extract_runs_every_field(extractor, fixed_now):
    email = RawEmail(
        id="m1",
        subject="Order confirmation",
        from_address="orders@dell.com",
        body="Item: Dell XPS 13 Laptop\nTotal: $999.00\nOrder #DL-778899\nWarranty: 1 year",
    )
    fields = extractor.extract(email, email.subject, email.body, now=fixed_now)

    assert fields.name == "Dell XPS 13 Laptop"
    assert fields.vendor == "Dell"
    assert fields.category == ProductCategory.ELECTRONICS
    assert fields.price == pytest.approx(999.0)
    assert fields.currency == "USD"
    assert fields.order_number == "DL-778899"
    assert fields.warranty_info == "1 year"
    assert fields.brand == "Dell"
    assert fields.purchase_date == fixed_now
    assert fields.purchase_date_source == DateSource.NOW


def test_extracted_fields_default_currency(fixed_now):
    fields = ExtractedFields(
        name=None, vendor=None, purchase_date=fixed_now, purchase_date_source=DateSource.NOW
    )

    assert fields.currency == DEFAULT_CURRENCY
