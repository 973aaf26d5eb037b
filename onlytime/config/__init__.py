"""Configuration package."""

from onlytime.config.settings import AppSettings, get_app_settings

__all__ = [
    "AppSettings",
    "get_app_settings",
]
