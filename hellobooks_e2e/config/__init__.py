"""
Configuration module exports.
"""

from hellobooks_e2e.config.settings import DEFAULT_BASE_URL, Settings, get_settings

__all__ = [
    "DEFAULT_BASE_URL",
    "Settings",
    "get_settings",
]
