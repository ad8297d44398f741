"""Configuration management for remote_keyboard.

Loads settings from a YAML configuration file with environment variable
overrides (``REMOTE_KEYBOARD_`` prefix, ``__`` between nested names).
Supports .env files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from remote_keyboard.protocol.modes import DEFAULT_PORT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/remote_keyboard.yaml")


class HostConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    bind_address: str = Field(default="0.0.0.0")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    backend: Literal["pynput", "usb_hid"] = Field(default="pynput")
    usb_hid_device: str = Field(default="/dev/hidg0")


class ClientConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    window_title: str = Field(default="RemoteKeyboard")
    poll_interval: float = Field(default=0.01, gt=0, description="Seconds between window event pumps")


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for remote_keyboard.

    Environment variables win over values passed in from YAML, e.g.
    ``REMOTE_KEYBOARD_HOST__PORT=6000``.
    """

    model_config = {
        "env_prefix": "REMOTE_KEYBOARD_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    host: HostConfig = Field(default_factory=HostConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    return Settings(**yaml_data)
