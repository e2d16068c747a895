"""
Configuration management for the SupplyGuard service.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for service configuration.
"""

from backend_supplyguard.config.settings import Settings, get_settings, load_settings  # noqa: F401

__all__ = ["Settings", "get_settings", "load_settings"]
