"""
Configuration module for the discrete auction.

This module provides configuration management and settings
for the auction engine and its API.
"""

from .settings import Settings, get_settings, reload_settings

__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
]
