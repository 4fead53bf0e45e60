"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from quid_label.domain.ingredients import LossType

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    environment: str = _ENVIRONMENT
    water_declaration_threshold_percent: float = 5.0
    max_recipe_depth: int = 16
    default_loss_type: str = LossType.DRYING.value
    log_level: str = "INFO"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
