"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from invoicing_core.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in (
            "INVOICING_ENVIRONMENT",
            "INVOICING_LOG_LEVEL",
            "INVOICING_INVOICE_NUMBER_PREFIX",
            "INVOICING_INVOICE_NUMBER_WIDTH",
            "INVOICING_DEFAULT_PAYMENT_TERMS_DAYS",
        ):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.invoice_number_prefix == "INV"
        assert settings.invoice_number_width == 4
        assert settings.default_payment_terms_days == 30
        assert not settings.is_production

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INVOICING_INVOICE_NUMBER_PREFIX", "BILL")
        monkeypatch.setenv("INVOICING_DEFAULT_PAYMENT_TERMS_DAYS", "14")
        monkeypatch.setenv("INVOICING_ENVIRONMENT", " Production ")

        settings = Settings(_env_file=None)

        assert settings.invoice_number_prefix == "BILL"
        assert settings.default_payment_terms_days == 14
        assert settings.environment == "production"
        assert settings.is_production

    def test_log_level_is_normalized(self) -> None:
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="verbose")

    @pytest.mark.parametrize("prefix", ["inv", "INV-", "", "ABCDEFGHIJK"])
    def test_invalid_prefix(self, prefix: str) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, invoice_number_prefix=prefix)

    def test_invalid_width(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, invoice_number_width=0)
