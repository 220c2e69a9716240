"""
Shared configuration management for the rules engine.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="RULES_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = "local"
    log_level: str = "info"

    # Observability
    enable_metrics: bool = True
    log_evaluations: bool = False


class EngineConfig(BaseConfig):
    """Engine-specific configuration."""

    engine_name: str = "default"


def get_config(engine_name: str = "default") -> EngineConfig:
    """Get configuration for a specific engine."""
    return EngineConfig(engine_name=engine_name)
