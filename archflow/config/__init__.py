"""Configuration package."""

from archflow.config.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
