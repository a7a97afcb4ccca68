"""Configuration for the endpoint client transport."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
