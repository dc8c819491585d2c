"""
Core module for application configuration.
"""
from contesthub.core.config import check_required_settings

__all__ = [
    "check_required_settings",
]
