"""
Pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from marketplace.config.settings import FilterEngineSettings, reset_settings
from marketplace.models.facets import parse_facet_descriptors
from marketplace.models.vendor import VendorRecord, normalize_vendors


@pytest.fixture(autouse=True)
def clear_cached_settings():
    """Make sure no test sees settings cached by another."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings():
    """Default settings, ignoring any local .env file."""
    return FilterEngineSettings(_env_file=None)


@pytest.fixture
def example_vendors():
    """Three vendors: Pune/20000/4.2, Mumbai/60000/4.8, Pune/unknown price/0."""
    return [
        VendorRecord(city="Pune", base_price=20000, rating=4.2),
        VendorRecord(city="Mumbai", base_price=60000, rating=4.8),
        VendorRecord(city="Pune", base_price=None, rating=0),
    ]


@pytest.fixture
def raw_vendors():
    """Provider payloads in the shapes the search API returns."""
    return [
        {
            "_id": "v1",
            "businessName": "Shubh Caterers",
            "servicesOffered": [{"taxonomyId": "catering"}, {"taxonomyId": "decor"}],
            "pricingInfo": {"basePrice": 25000},
            "location": {"city": "Pune", "area": "Kothrud"},
            "isVerified": True,
            "rating": 4.6,
            "yearsOfExperience": 12,
            "distance": 3.2,
        },
        {
            "_id": "v2",
            "businessName": "Lens & Light Studio",
            "servicesOffered": ["photography"],
            "pricingInfo": {"basePrice": "₹45,000"},
            "address": {"city": "Mumbai", "area": "Andheri"},
            "isVerified": False,
            "rating": 4.1,
            "yearsOfExperience": 5,
            "distance": 12.5,
        },
        {
            "_id": "v3",
            "businessName": "Mandap Decorators",
            "servicesOffered": [{"taxonomyId": "decor"}],
            "pricingInfo": {"basePrice": 80000},
            "location": {"city": "Pune", "area": "Baner"},
            "isVerified": True,
            "rating": 3.8,
            "yearsOfExperience": 8,
        },
        {
            "_id": "v4",
            "businessName": "New Vendor",
            "servicesOffered": [{"taxonomyId": "catering"}],
            "location": {"city": "Nashik"},
        },
    ]


@pytest.fixture
def vendors(raw_vendors):
    """Normalized raw_vendors."""
    return normalize_vendors(raw_vendors)


@pytest.fixture
def descriptors():
    """Provider facet metadata for raw_vendors."""
    return parse_facet_descriptors(
        {
            "services": [
                {"taxonomyId": "catering", "name": "Catering"},
                {"taxonomyId": "decor", "name": "Decoration"},
                {"taxonomyId": "photography", "name": "Photography"},
            ],
            "budget": {
                "ranges": [
                    {"min": 0, "max": 30000, "label": "Under ₹30K"},
                    {"min": 30000, "max": 60000, "label": "₹30K - ₹60K"},
                    {"min": 60000, "label": "Above ₹60K"},
                ]
            },
            "location": {
                "cities": [{"name": "Pune"}, {"name": "Mumbai"}, {"name": "Nashik"}],
                "areas": [{"name": "Kothrud"}, {"name": "Andheri"}, {"name": "Baner"}],
            },
            "rating": {
                "available": True,
                "filters": [
                    {"rating": 4.5, "label": "4.5★ & above"},
                    {"rating": 4.0, "label": "4★ & above"},
                ],
            },
            "verified": {"available": True},
        }
    )
