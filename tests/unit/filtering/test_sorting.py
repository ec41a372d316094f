"""
Tests for result sorting.
"""

from marketplace.filtering.sorting import SortKey, parse_sort_key, sort_vendors
from marketplace.models.vendor import VendorRecord


def _ids(vendors):
    return [v.vendor_id for v in vendors]


def test_price_ascending_puts_unknown_last(vendors):
    assert _ids(sort_vendors(vendors, "price-asc")) == ["v1", "v2", "v3", "v4"]


def test_price_descending_puts_unknown_last(vendors):
    assert _ids(sort_vendors(vendors, SortKey.PRICE_DESC)) == ["v3", "v2", "v1", "v4"]


def test_rating_and_experience_descending(vendors):
    assert _ids(sort_vendors(vendors, "rating")) == ["v1", "v2", "v3", "v4"]
    assert _ids(sort_vendors(vendors, "experience")) == ["v1", "v3", "v2", "v4"]


def test_distance_ascending_unknown_last(vendors):
    assert _ids(sort_vendors(vendors, "distance")) == ["v1", "v2", "v3", "v4"]


def test_relevance_keeps_received_order(vendors):
    reordered = [vendors[2], vendors[0], vendors[3], vendors[1]]

    assert sort_vendors(reordered, "relevance") == reordered
    assert sort_vendors(reordered, None) == reordered
    assert sort_vendors(reordered, "most-popular") == reordered


def test_ties_keep_input_order():
    first = VendorRecord(vendor_id="a", rating=4.5)
    second = VendorRecord(vendor_id="b", rating=4.5)
    top = VendorRecord(vendor_id="c", rating=4.9)

    assert _ids(sort_vendors([first, second, top], "rating")) == ["c", "a", "b"]
    assert _ids(sort_vendors([second, first, top], "rating")) == ["c", "b", "a"]


def test_input_is_not_mutated(vendors):
    before = list(vendors)
    result = sort_vendors(vendors, "price-desc")

    assert vendors == before
    assert result is not vendors


def test_raw_payloads_sorted_and_returned(raw_vendors):
    result = sort_vendors(raw_vendors, "price-asc")
    assert [v["_id"] for v in result] == ["v1", "v2", "v3", "v4"]


def test_empty_input():
    assert sort_vendors([], "rating") == []
    assert sort_vendors(None, "rating") == []


def test_parse_sort_key():
    assert parse_sort_key("price-asc") is SortKey.PRICE_ASC
    assert parse_sort_key(SortKey.RATING) is SortKey.RATING
    assert parse_sort_key("bogus") is SortKey.RELEVANCE
