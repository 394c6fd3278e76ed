"""Core: config and application bootstrap.

Single place for settings.
"""

from phaseboard.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
