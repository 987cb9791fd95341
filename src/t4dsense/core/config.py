"""
Configuration management for T4DSense.

Uses pydantic-settings for environment variable support. Encoders read
their scheme defaults from here at construction; explicit constructor
arguments always win.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

LOG_LEVELS = frozenset(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])


class Settings(BaseSettings):
    """T4DSense configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="T4DSENSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ===================
    # Unique encoder
    # ===================
    unique_oversample: float = Field(
        default=1.25,
        ge=1.0,
        le=4.0,
        description="Candidate draws per active bit; extra draws absorb collisions",
    )

    # ===================
    # Spatial encoders
    # ===================
    spatial_max_radius: int = Field(
        default=9,
        ge=0,
        le=64,
        description="Largest neighbourhood radius Linear2D grows to",
    )

    # ===================
    # Linear decode grid
    # ===================
    linear_decode_samples: int = Field(
        default=50,
        ge=1,
        le=10000,
        description="Grid divisions when the span is outside the unit-step band",
    )
    linear_unit_step_min_span: float = Field(
        default=5.0,
        ge=0.0,
        description="Unit step is used when span is strictly above this",
    )
    linear_unit_step_max_span: float = Field(
        default=250.0,
        ge=0.0,
        description="Unit step is used when span is strictly below this",
    )

    # ===================
    # Decode
    # ===================
    decode_default_n: int = Field(
        default=5,
        ge=1,
        le=10000,
        description="Default number of ranked candidates returned by decode",
    )

    # ===================
    # Logging
    # ===================
    log_level: str = Field(
        default="WARNING",
        description="Level applied to the t4dsense logger by configure_logging()",
    )

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Cross-field checks."""
        if self.linear_unit_step_min_span >= self.linear_unit_step_max_span:
            raise ValueError(
                "linear_unit_step_min_span must be < linear_unit_step_max_span "
                f"(got {self.linear_unit_step_min_span} >= {self.linear_unit_step_max_span})"
            )
        level = self.log_level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {self.log_level}")
        self.log_level = level
        return self


def _find_config_file() -> Path | None:
    """
    Find YAML config file in standard locations.

    Search order:
    1. T4DSENSE_CONFIG_FILE environment variable
    2. ./t4dsense.yaml or ./t4dsense.yml (current directory)
    3. ~/.t4dsense/config.yaml (user home)

    Returns:
        Path to config file if found, None otherwise
    """
    env_config = os.getenv("T4DSENSE_CONFIG_FILE")
    if env_config:
        path = Path(env_config).expanduser()
        if path.exists():
            return path
        logger.warning(f"Config file from T4DSENSE_CONFIG_FILE not found: {path}")

    search_paths = [
        Path("t4dsense.yaml"),
        Path("t4dsense.yml"),
        Path.home() / ".t4dsense" / "config.yaml",
    ]

    for path in search_paths:
        if path.exists():
            logger.debug(f"Found config file: {path}")
            return path

    return None


def _load_yaml_config(path: Path) -> dict:
    """
    Load configuration from YAML file.

    Raises:
        ValueError: If YAML file is invalid or not a mapping
    """
    import yaml

    try:
        with open(path) as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file {path}: {e}") from e

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a dictionary, got {type(config).__name__}")

    logger.info(f"Loaded configuration from: {path}")
    return config


def _without_env_overrides(yaml_config: dict) -> dict:
    """Drop YAML keys that have a T4DSENSE_* environment override."""
    filtered = {}
    for key, value in yaml_config.items():
        env_key = f"T4DSENSE_{key.upper()}"
        if os.getenv(env_key) is None:
            filtered[key] = value
        else:
            logger.debug(f"Skipping YAML key '{key}' - overridden by {env_key}")
    return filtered


def load_settings_from_yaml(config_path: Path | str | None = None) -> Settings:
    """
    Load Settings from YAML file with environment variable overrides.

    Env vars always take precedence over YAML values.

    Args:
        config_path: Path to YAML config file. If None, searches standard locations.

    Returns:
        Settings instance with values from YAML and env vars

    Example YAML config:
        ```yaml
        # ~/.t4dsense/config.yaml
        unique_oversample: 1.5
        spatial_max_radius: 12
        log_level: debug
        ```
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
    else:
        path = _find_config_file()

    yaml_config = _load_yaml_config(path) if path else {}
    return Settings(**_without_env_overrides(yaml_config))


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded from (in order of precedence):
    1. Environment variables (T4DSENSE_* prefix)
    2. YAML config file (if found)
    3. Default values
    """
    return load_settings_from_yaml()


def reset_settings() -> None:
    """Clear the cached settings, forcing reload on next get_settings() call."""
    get_settings.cache_clear()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply the configured level to the package logger."""
    settings = settings or get_settings()
    logging.getLogger("t4dsense").setLevel(settings.log_level)
