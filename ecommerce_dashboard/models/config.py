"""Configuration management for the e-commerce dashboard."""

import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DashboardConfig(BaseModel):
    """Dashboard configuration: retry policy and log level."""

    # Retry configuration
    max_retries: int = Field(default=3, description="Retries after the first failed attempt")
    retry_delay: float = Field(default=1.0, description="Constant delay between attempts in seconds")

    # Logging configuration
    log_level: str = Field(default="WARNING", description="Logging level for structured logs")

    @field_validator('max_retries')
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate retry count is not negative."""
        if v < 0:
            raise ValueError(f"max_retries must be non-negative, got: {v}")
        return v

    @field_validator('retry_delay')
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        """Validate retry delay is not negative."""
        if v < 0:
            raise ValueError(f"retry_delay must be non-negative, got: {v}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level

    # Environment variable overrides
    @classmethod
    def from_env(cls) -> "DashboardConfig":
        """Create configuration with environment variable overrides."""
        env_mappings = {
            "DASHBOARD_MAX_RETRIES": "max_retries",
            "DASHBOARD_RETRY_DELAY": "retry_delay",
            "DASHBOARD_LOG_LEVEL": "log_level",
        }

        values = {}
        for env_var, field_name in env_mappings.items():
            if env_var in os.environ:
                values[field_name] = os.environ[env_var]

        # pydantic coerces the string values to the declared field types
        return cls(**values)


class ConfigManager:
    """Manages configuration loading with override precedence."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or Path("config/dashboard.yaml")
        self._config: Optional[DashboardConfig] = None

    def load_config(self, cli_overrides: Optional[Dict] = None) -> DashboardConfig:
        """
        Load configuration with override precedence: CLI > ENV > YAML.

        Args:
            cli_overrides: Optional dictionary of CLI flag overrides

        Returns:
            Fully merged DashboardConfig instance

        Raises:
            pydantic.ValidationError: If configuration validation fails
        """
        config_dict = {}

        # Load from YAML file if it exists
        if self.config_file.exists():
            with open(self.config_file, 'r') as f:
                yaml_config = yaml.safe_load(f)
                if yaml_config:
                    config_dict.update(yaml_config)

        base_config = DashboardConfig(**config_dict)
        env_config = DashboardConfig.from_env()

        merged_dict = base_config.model_dump()

        # Only variables actually present in the environment override YAML
        merged_dict.update(env_config.model_dump(exclude_unset=True))

        # Apply CLI overrides (highest precedence)
        if cli_overrides:
            cli_overrides = {k: v for k, v in cli_overrides.items() if v is not None}
            merged_dict.update(cli_overrides)

        self._config = DashboardConfig(**merged_dict)
        return self._config

    @property
    def config(self) -> DashboardConfig:
        """Get the loaded configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config
