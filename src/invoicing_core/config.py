"""invoicing-core configuration.

Settings are read from ``INVOICING_*`` environment variables (or a ``.env``
file) and validated once at import time.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have defaults suitable for development and tests.
    """

    # ── Runtime ───────────────────────────────────────────────────────────
    # production/staging render JSON logs; anything else renders for a console
    environment: str = Field(default="development")

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        return v.strip().lower()

    # ── Invoice numbering ─────────────────────────────────────────────────
    # Numbers look like INV-2025-0001: <prefix>-<year>-<zero-padded sequence>
    invoice_number_prefix: str = Field(default="INV", pattern=r"^[A-Z]{1,10}$")
    invoice_number_width: int = Field(default=4, ge=1, le=12)

    # ── Invoices ──────────────────────────────────────────────────────────
    # Due date used when an invoice is created without one
    default_payment_terms_days: int = Field(default=30, ge=0, le=365)

    model_config = SettingsConfigDict(
        env_prefix="INVOICING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment in {"production", "staging"}


# Singleton instance, imported by the composition root and logging setup
settings = Settings()
