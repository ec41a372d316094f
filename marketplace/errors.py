"""
Error Types
Exceptions raised at the engine boundaries (provider payloads and configuration).

Core filtering operations never raise: unknown facet keys, inverted budgets
and unknown sort keys all resolve to deterministic values instead.
"""

from typing import Optional


class FilterEngineError(Exception):
    """Base exception for filter engine errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidFacetDescriptorError(FilterEngineError):
    """Exception raised when a facet descriptor payload cannot be parsed."""

    def __init__(self, facet_key: str, errors: Optional[list] = None):
        super().__init__(
            message=f"Invalid facet descriptor: {facet_key}",
            details={"facet": facet_key, "errors": errors or []},
        )
        self.facet_key = facet_key


class ConfigurationError(FilterEngineError):
    """Exception raised for invalid engine settings."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message=message, details=details)
