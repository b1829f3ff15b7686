"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

from calculators.brackets import available_years
from calculators.persistence import BlobStore, JsonFileStore, MemoryStore

LOGGER_NAME = "tax_dashboard"


def _env_storage() -> Literal["file", "memory"]:
    value = os.getenv("TAXDASH_STORAGE", "file").lower()
    return cast(Literal["file", "memory"], value if value in {"file", "memory"} else "file")


class Settings(BaseModel):
    data_dir: str = Field(default_factory=lambda: os.getenv("TAXDASH_DATA_DIR", "data"))
    tax_year: int = Field(default_factory=lambda: os.getenv("TAXDASH_TAX_YEAR", "2025"))
    log_level: str = Field(default_factory=lambda: os.getenv("TAXDASH_LOG_LEVEL", "INFO"))
    storage: Literal["file", "memory"] = Field(default_factory=_env_storage)

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("tax_year")
    @classmethod
    def _known_year(cls, value: int) -> int:
        years = available_years()
        if value not in years:
            raise ValueError(f"TAXDASH_TAX_YEAR must be one of {years}, got {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        upper = (value or "INFO").upper()
        if not isinstance(logging.getLevelName(upper), int):
            raise ValueError(f"Unknown TAXDASH_LOG_LEVEL {value}")
        return upper

    def blob_store(self) -> BlobStore:
        if self.storage == "memory":
            return MemoryStore()
        return JsonFileStore(Path(self.data_dir))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(settings.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s"))
        logger.addHandler(handler)
    return logger


__all__ = ["LOGGER_NAME", "Settings", "get_settings", "configure_logging"]
