"""Configuration management for remote_keyboard.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides.
"""

from remote_keyboard.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
