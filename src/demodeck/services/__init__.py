"""Configuration and persistence services."""

from .settings import Settings, load_settings
from .state_store import DemoStateStore

__all__ = ["Settings", "load_settings", "DemoStateStore"]
