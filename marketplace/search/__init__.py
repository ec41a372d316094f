"""
Search Module
Faceted view over a search provider's result set.
"""

from .faceted_results import FacetedResults, FacetedResultsService

__all__ = ["FacetedResults", "FacetedResultsService"]
