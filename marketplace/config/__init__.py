"""
Configuration Package
Settings for facet derivation, sorting defaults and logging.
"""

from .settings import FilterEngineSettings, get_settings, reset_settings, configure_logging

__all__ = [
    "FilterEngineSettings",
    "get_settings",
    "reset_settings",
    "configure_logging",
]
