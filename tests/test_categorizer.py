"""Tests for the keyword-priority categorizer."""

import pytest

from factories import txn
from quincena.core.models import Category
from quincena.engine.categorizer import KEYWORDS, PRIORITY, categorize, categorize_transactions, keyword_matches


@pytest.mark.parametrize(
    ("description", "expected"),
    [
        ("OXXO TIENDA 123", Category.CONVENIENCE_STORE),
        ("OXXO GAS STATION", Category.GAS_TRANSPORT),
        ("UBER EATS PENDING", Category.FOOD_DELIVERY),
        ("UBER *EATS MX", Category.FOOD_DELIVERY),
        ("UBER TRIP HELP.UBER.COM", Category.RIDESHARE),
        ("DIDI FOOD", Category.FOOD_DELIVERY),
        ("RAPPI RESTAURANTES", Category.FOOD_DELIVERY),
        ("FARMACIAS GUADALAJARA SUC 12", Category.CONVENIENCE_STORE),
        ("FARMACIA SAN PABLO", Category.PHARMACY_HEALTH),
        ("COMISION POR MANEJO DE CUENTA", Category.BANK_FEE),
        ("RETIRO CAJERO BBVA", Category.CASH_WITHDRAWAL),
        ("SPEI RECIBIDO NOMINA", Category.SPEI_TRANSFER),
        ("SMARTFIT MENSUALIDAD", Category.SUBSCRIPTION_GYM),
        ("STARBUCKS REFORMA", Category.RESTAURANT_CAFE),
        ("SORIANA HIPER", Category.SUPERMARKET),
        ("AMAZON MX MARKETPLACE", Category.ECOMMERCE),
        ("COLEGIATURA JUNIO", Category.EDUCATION),
        ("PAGO MISTERIOSO", Category.OTHER),
    ],
)
def test_categorize_known_merchants(description: str, expected: Category) -> None:
    """Merchant descriptions land in the expected category."""
    result = categorize(description)
    if result is not expected:
        msg = f"Expected {description!r} -> {expected}, got {result}"
        raise AssertionError(msg)


@pytest.mark.parametrize("description", ["", "   ", "zzz", "12345", "ÑÑÑ"])
def test_categorize_unmatched_is_other(description: str) -> None:
    """Empty, blank or unknown descriptions fall back to other."""
    result = categorize(description)
    if result is not Category.OTHER:
        msg = f"Expected other for {description!r}, got {result}"
        raise AssertionError(msg)


def test_categorize_always_returns_known_label() -> None:
    """Every keyword of every category resolves to one of the fourteen labels."""
    for keywords in KEYWORDS.values():
        for keyword in keywords:
            result = categorize(keyword.lstrip("^").replace("*", " "))
            if result not in set(Category):
                msg = f"Unexpected label {result!r} for keyword {keyword!r}"
                raise AssertionError(msg)


def test_priority_covers_every_named_category_once() -> None:
    """The priority list holds the thirteen named categories, each once."""
    if len(PRIORITY) != len(set(PRIORITY)) or set(PRIORITY) != set(Category) - {Category.OTHER}:
        msg = f"Priority list is not a permutation of the named categories: {PRIORITY}"
        raise AssertionError(msg)


def test_food_delivery_beats_bare_rideshare_brand() -> None:
    """A description with both a delivery brand and a ride-share brand is food delivery."""
    result = categorize("UBER VIAJE RAPPI")
    if result is not Category.FOOD_DELIVERY:
        msg = f"Expected food_delivery, got {result}"
        raise AssertionError(msg)


def test_rideshare_excluded_when_description_looks_like_food() -> None:
    """Ride-share is skipped entirely when the description mentions eats or food."""
    result = categorize("DIDI MX FOOD SERVICES")
    if result is Category.RIDESHARE:
        msg = "Ride-share should be excluded for food-related descriptions"
        raise AssertionError(msg)


def test_anchored_keyword_only_matches_at_start() -> None:
    """'^rest ' matches at the start but not inside 'interest'."""
    if not keyword_matches("rest la playa", "^rest "):
        msg = "Anchored keyword should match at the start"
        raise AssertionError(msg)
    if keyword_matches("pago interest rate", "^rest "):
        msg = "Anchored keyword should not match mid-description"
        raise AssertionError(msg)
    if categorize("EST CIRCUITO 55") is not Category.GAS_TRANSPORT:
        msg = "'^est ' should categorize a leading 'EST ' as gas_transport"
        raise AssertionError(msg)


def test_wildcard_keyword_matches_any_infix() -> None:
    """'uber*eats' matches with arbitrary content in between, but needs both ends."""
    for description in ("uber*eats12345", "uber eats", "uber mx eats", "ubereats"):
        if not keyword_matches(description, "uber*eats"):
            msg = f"Wildcard should match {description!r}"
            raise AssertionError(msg)
    if keyword_matches("eats uber", "uber*eats"):
        msg = "Wildcard should keep the literal order"
        raise AssertionError(msg)


def test_wildcard_escapes_regex_characters() -> None:
    """Literal parts of a wildcard keyword are not treated as regex syntax."""
    if keyword_matches("disneyyy plus", "disney+*plus"):
        msg = "'+' must be literal inside a wildcard keyword"
        raise AssertionError(msg)
    if not keyword_matches("disney+ star plus", "disney+*plus"):
        msg = "Wildcard keyword with '+' should match literally"
        raise AssertionError(msg)


def test_categorize_transactions_keeps_fields() -> None:
    """Categorizing a statement keeps date, amount and description untouched."""
    raw = [txn("2025-06-02", -150.0, "OXXO TIENDA 123"), txn("2025-06-10", -90.0, "OXXO GAS STATION")]
    result = categorize_transactions(raw)
    if [t.category for t in result] != [Category.CONVENIENCE_STORE, Category.GAS_TRANSPORT]:
        msg = f"Unexpected categories: {[t.category for t in result]}"
        raise AssertionError(msg)
    if [(t.date, t.amount, t.description) for t in result] != [(t.date, t.amount, t.description) for t in raw]:
        msg = "Categorized transactions must keep the input fields"
        raise AssertionError(msg)
