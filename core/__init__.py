"""Configuration and logging helpers."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
