"""
Configuration settings for the marketplace filter engine
Loads from environment variables (MARKETPLACE_FILTERS_ prefix) or a .env file
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..errors import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SORT_KEYS = ("relevance", "price-asc", "price-desc", "rating", "experience", "distance")


class FilterEngineSettings(BaseSettings):
    """Filter engine settings"""

    model_config = SettingsConfigDict(
        env_prefix="MARKETPLACE_FILTERS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Budget facet derivation
    budget_range_count: int = Field(default=5, description="Equal-width budget ranges to derive")
    currency_symbol: str = "₹"

    # Rating facet derivation (highest first)
    rating_thresholds: List[float] = Field(default_factory=lambda: [4.5, 4.0, 3.5, 3.0])

    # Location facet derivation
    max_area_options: int = 20

    # Quick filter suggestion limits
    quick_service_options: int = 5
    quick_budget_options: int = 4
    quick_rating_options: int = 3
    quick_city_options: int = 5

    # Sorting
    default_sort_key: str = "relevance"

    # Logging
    log_level: str = "INFO"

    def validate_consistency(self) -> None:
        """Validate configuration consistency."""
        if self.budget_range_count < 1:
            raise ConfigurationError(
                "budget_range_count must be >= 1",
                details={"budget_range_count": self.budget_range_count},
            )

        if self.max_area_options < 0:
            raise ConfigurationError(
                "max_area_options must be >= 0",
                details={"max_area_options": self.max_area_options},
            )

        if list(self.rating_thresholds) != sorted(self.rating_thresholds, reverse=True):
            raise ConfigurationError(
                "rating_thresholds must be sorted highest first",
                details={"rating_thresholds": list(self.rating_thresholds)},
            )

        if self.default_sort_key not in SORT_KEYS:
            raise ConfigurationError(
                f"Unknown default_sort_key: {self.default_sort_key}",
                details={"allowed": list(SORT_KEYS)},
            )

        if logging.getLevelName(self.log_level.upper()) not in (
            logging.DEBUG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
            logging.CRITICAL,
        ):
            raise ConfigurationError(f"Unknown log_level: {self.log_level}")


@lru_cache()
def get_settings() -> FilterEngineSettings:
    """Get cached, validated settings instance"""
    settings = FilterEngineSettings()
    settings.validate_consistency()
    return settings


def reset_settings() -> None:
    """Reset cached settings (useful for testing)."""
    get_settings.cache_clear()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for applications embedding the engine.

    The engine itself never calls this on import.

    Args:
        level: Log level name; defaults to the configured log_level
    """
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
