"""Core configuration and factory components."""

from famdocs.core.config import Settings, get_settings
from famdocs.core.factory import ComponentFactory, get_factory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "get_factory",
]
