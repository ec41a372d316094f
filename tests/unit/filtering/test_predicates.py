"""
Tests for per-facet vendor predicates.
"""

import pytest

from marketplace.filtering.active_filters import BudgetRange
from marketplace.filtering.predicates import (
    matches_area,
    matches_budget,
    matches_city,
    matches_experience,
    matches_rating,
    matches_services,
    matches_verified,
    vendor_matches_filter,
)
from marketplace.models.vendor import VendorRecord


@pytest.fixture
def vendor():
    return VendorRecord(
        service_ids=("catering", "decor"),
        base_price=20000,
        city="Pune",
        area="Kothrud",
        verified=True,
        rating=4.2,
        years_of_experience=6,
    )


def test_services_intersection(vendor):
    assert matches_services(vendor, frozenset({"decor", "photography"}))
    assert not matches_services(vendor, frozenset({"photography"}))
    assert matches_services(vendor, frozenset())
    assert not matches_services(VendorRecord(), frozenset({"decor"}))


def test_city_and_area(vendor):
    assert matches_city(vendor, frozenset({"Pune", "Mumbai"}))
    assert not matches_city(vendor, frozenset({"Mumbai"}))
    assert matches_area(vendor, frozenset({"Kothrud"}))
    assert not matches_area(VendorRecord(), frozenset({"Kothrud"}))
    assert matches_area(VendorRecord(), frozenset())


def test_budget_bounds_are_inclusive(vendor):
    assert matches_budget(vendor, BudgetRange(20000, 20000))
    assert matches_budget(vendor, BudgetRange(min=10000))
    assert matches_budget(vendor, BudgetRange(max=20000))
    assert not matches_budget(vendor, BudgetRange(20001, 30000))
    assert not matches_budget(vendor, BudgetRange(max=19999))


def test_budget_fails_closed_for_unknown_price():
    no_price = VendorRecord(city="Pune")

    assert not matches_budget(no_price, BudgetRange(0, float("inf")))
    assert not matches_budget(no_price, BudgetRange(max=50000))
    assert matches_budget(no_price, BudgetRange())
    assert matches_budget(no_price, None)


def test_inverted_budget_matches_nothing(vendor):
    assert not matches_budget(vendor, BudgetRange(30000, 10000))


def test_rating_and_experience_thresholds(vendor):
    assert matches_rating(vendor, 4.2)
    assert not matches_rating(vendor, 4.5)
    assert matches_rating(VendorRecord(), 0)
    assert matches_experience(vendor, 5)
    assert not matches_experience(vendor, 10)
    assert matches_experience(vendor, None)


def test_verified_matches_exactly(vendor):
    assert matches_verified(vendor, True)
    assert not matches_verified(vendor, False)
    assert matches_verified(VendorRecord(), False)
    assert matches_verified(vendor, None)


def test_malformed_thresholds_do_not_raise(vendor):
    assert not matches_rating(vendor, "high")
    assert not matches_budget(vendor, BudgetRange(min="cheap"))


def test_vendor_matches_filter(vendor):
    assert vendor_matches_filter(vendor, "services", "decor")
    assert not vendor_matches_filter(vendor, "cities", "Mumbai")
    assert vendor_matches_filter(vendor, "rating", 4.0)
    assert vendor_matches_filter(vendor, "budget", {"min": 10000, "max": 25000})
    assert vendor_matches_filter(vendor, "verified", True)
    assert vendor_matches_filter(vendor, "unknown", "anything")


def test_vendor_matches_filter_reads_verified_markers(vendor):
    assert vendor_matches_filter(vendor, "verified", "true")
    assert not vendor_matches_filter(vendor, "verified", "false")
    assert not vendor_matches_filter(vendor, "verified", "maybe")
    assert not vendor_matches_filter(vendor, "budget", "cheap")
