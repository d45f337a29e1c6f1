"""Configuration management for lambdaterm.

Loads settings from a YAML configuration file with environment variable
overrides (``LAMBDATERM_`` prefix, ``__`` for nested sections). Supports
.env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/lambdaterm.yaml")


class SessionConfig(BaseModel):
    backend: Literal["file", "memory"] = Field(default="file")
    root_dir: Path = Field(
        default=Path("/tmp"), description="Scratch area holding per-identity session files"
    )
    initial_directory: Path | None = Field(
        default=None, description="Working directory for new sessions (process cwd if unset)"
    )
    max_transcript_bytes: int | None = Field(default=None, gt=0)


class ShellConfig(BaseModel):
    executable: str = Field(default="/bin/bash")
    extra_path: str = Field(
        default="/opt/bin", description="Bundled binaries directory appended to PATH"
    )


class RenderConfig(BaseModel):
    escape_transcript: bool = Field(default=False)
    input_size: int = Field(default=100, gt=0)


class EndpointConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for lambdaterm.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "LAMBDATERM_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    session: SessionConfig = Field(default_factory=SessionConfig)
    shell: ShellConfig = Field(default_factory=ShellConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    endpoint: EndpointConfig = Field(default_factory=EndpointConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    # Load .env into os.environ so it also outranks the YAML file
    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path) as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _drop_env_overridden(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _drop_env_overridden(yaml_data: dict) -> None:
    """Remove YAML values that an environment variable also sets.

    Init kwargs outrank the environment in pydantic-settings, so without
    this a YAML value would shadow ``LAMBDATERM_SECTION__FIELD``.
    """
    prefix = Settings.model_config["env_prefix"]
    for key in os.environ:
        if not key.startswith(prefix):
            continue
        section, _, field = key[len(prefix):].lower().partition("__")
        if not field:
            yaml_data.pop(section, None)
            continue
        values = yaml_data.get(section)
        if isinstance(values, dict):
            values.pop(field, None)
