# src/quotebook/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and an optional .env file with validation.

Files that USE this module:
- quotebook.app (builds the workbench from settings)
- quotebook.shared.language (default label language)

Files that this module USES:
- quotebook.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from quotebook.shared.validators import (
    validate_bot_token,  # Validate Telegram bot token format
    validate_channel_id,  # Validate Telegram chat ID format
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Persistence ---
    budgets_file: Path = Field(default=Path("./data/budgets.json"), alias="BUDGETS_FILE")
    currency_file: Path = Field(default=Path("./data/currency.json"), alias="CURRENCY_FILE")
    costs_file: Path = Field(default=Path("./data/costs.json"), alias="COSTS_FILE")
    export_dir: Path = Field(default=Path("./exports"), alias="EXPORT_DIR")

    # --- Pricing ---
    default_exchange_rate: float = Field(default=36.5, alias="DEFAULT_EXCHANGE_RATE", gt=0.0)
    tax_rate: float = Field(default=0.16, alias="TAX_RATE", ge=0.0, le=1.0)
    sequence_digits: int = Field(default=4, alias="SEQUENCE_DIGITS", ge=1, le=12)

    # --- Documents ---
    default_product_name: str = Field(default="Malla Viford Pro", alias="DEFAULT_PRODUCT_NAME")
    fallback_company_name: str = Field(default="EMPRESA VIFORD PRO C.A.", alias="FALLBACK_COMPANY_NAME")
    default_language: str = Field(default="es", alias="DEFAULT_LANGUAGE")

    # --- Telegram share sink (optional) ---
    telegram_bot_token: str = Field(default="", alias="TELEGRAM_BOT_TOKEN")
    telegram_chat_id: str = Field(default="", alias="TELEGRAM_CHAT_ID")

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="QUOTEBOOK_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def telegram_enabled(self) -> bool:
        """True when both the bot token and the target chat are configured."""
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @field_validator("telegram_bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate bot token format."""
        if v and not validate_bot_token(v):
            raise ValueError("Invalid TELEGRAM_BOT_TOKEN format")
        return v

    @field_validator("telegram_chat_id")
    @classmethod
    def validate_chat_id(cls, v: str) -> str:
        """Validate chat ID format."""
        if v and not validate_channel_id(v):
            raise ValueError("Invalid TELEGRAM_CHAT_ID format")
        return v

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate language code."""
        if v not in ["es", "en"]:
            raise ValueError("DEFAULT_LANGUAGE must be 'es' or 'en'")
        return v


# Global settings instance
settings = Settings()
