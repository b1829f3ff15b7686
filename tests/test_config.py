import logging

import pytest
from pydantic import ValidationError

from calculators.persistence import JsonFileStore, MemoryStore
from config import LOGGER_NAME, Settings, configure_logging, get_settings


def test_defaults(monkeypatch):
    for name in ("TAXDASH_DATA_DIR", "TAXDASH_TAX_YEAR", "TAXDASH_LOG_LEVEL", "TAXDASH_STORAGE"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.tax_year == 2025
    assert settings.log_level == "INFO"
    assert settings.storage == "file"
    assert isinstance(settings.blob_store(), JsonFileStore)


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TAXDASH_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TAXDASH_TAX_YEAR", "2024")
    monkeypatch.setenv("TAXDASH_LOG_LEVEL", "debug")
    monkeypatch.setenv("TAXDASH_STORAGE", "MEMORY")
    get_settings.cache_clear()
    settings = get_settings()
    assert settings.data_dir == str(tmp_path)
    assert settings.tax_year == 2024
    assert settings.log_level == "DEBUG"
    assert isinstance(settings.blob_store(), MemoryStore)
    get_settings.cache_clear()


def test_unknown_storage_falls_back_to_file(monkeypatch):
    monkeypatch.setenv("TAXDASH_STORAGE", "redis")
    assert Settings().storage == "file"


def test_year_without_table_is_rejected(monkeypatch):
    monkeypatch.setenv("TAXDASH_TAX_YEAR", "1999")
    with pytest.raises(ValidationError):
        Settings()


def test_bad_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("TAXDASH_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()


def test_configure_logging_is_idempotent(monkeypatch):
    monkeypatch.delenv("TAXDASH_LOG_LEVEL", raising=False)
    logger = configure_logging(Settings())
    handlers = len(logger.handlers)
    configure_logging(Settings())
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == handlers


def test_non_numeric_year_is_rejected(monkeypatch):
    monkeypatch.setenv("TAXDASH_TAX_YEAR", "abc")
    with pytest.raises(ValidationError):
        Settings()
