# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "homebuy"
    DEBUG: bool = False
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level applied at startup.",
    )

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:5173"]

    # -- Calculator --
    GST_RATE: float = Field(
        default=0.05,
        ge=0,
        le=1,
        description="Goods and services tax applied to new construction.",
    )
    ANNUAL_INTEREST_RATE: float = Field(
        default=0.05,
        ge=0,
        le=1,
        description="Nominal annual rate used for the monthly payment estimate.",
    )
    DEFAULT_AMORTIZATION: int = Field(
        default=25,
        ge=1,
        le=35,
        description="Amortization (years) of a fresh calculator session.",
    )
    PRINCIPAL_INCLUDE_RESALE_PRICE: bool = Field(
        default=False,
        description=(
            "When False the principal keeps the legacy formula, which multiplies the "
            "price by 0 for resale properties. When True resale properties use the "
            "full price."
        ),
    )


settings = Settings()
