"""Tests for settings and logging setup."""

from loguru import logger

from combo_builder.config import Settings, get_settings
from combo_builder.logging import setup_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("STORAGE_DIR", "STORAGE_KEY", "CURRENCY_CODE", "CURRENCY_SYMBOL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.storage_key == "combo_products"
        assert settings.currency_code == "GHS"
        assert settings.currency_symbol == "₵"
        assert settings.storage_dir.endswith("data")

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("STORAGE_KEY", "bakery_combos")
        monkeypatch.setenv("CURRENCY_CODE", "USD")
        settings = Settings(_env_file=None)
        assert settings.storage_key == "bakery_combos"
        assert settings.currency_code == "USD"

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestLogging:
    def test_file_sink_written(self, tmp_path):
        setup_logging(level="INFO", log_dir=tmp_path)
        logger.info("combo logging check")
        logger.complete()
        log_file = tmp_path / "combo_builder.log"
        assert log_file.exists()
        assert "combo logging check" in log_file.read_text(encoding="utf-8")
        setup_logging(level="INFO", log_dir=None)
