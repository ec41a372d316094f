"""
Marketplace Filter Engine
In-memory faceted filtering, facet counts and sorting for vendor search results.
"""

__version__ = "0.1.0"
