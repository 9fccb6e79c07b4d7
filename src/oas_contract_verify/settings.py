"""Runtime settings loaded from environment variables (and an optional .env)."""

import os
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from oas_contract_verify.errors import SettingsError

ENV_PREFIX = "OAS_VERIFY_"


class Settings(BaseModel):
    """Typed runtime configuration. CLI flags take precedence over these."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    LOG_LEVEL: str = "WARNING"
    FORMAT: str = "text"
    RELAXED_BOUNDS: bool = False

    @field_validator("LOG_LEVEL")
    @classmethod
    def _check_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {value!r}")
        return value

    @field_validator("FORMAT")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("text", "json"):
            raise ValueError(f"unknown report format {value!r}")
        return value


def load_settings(*, load_env: bool = True) -> Settings:
    """Build settings from ``OAS_VERIFY_*`` environment variables."""
    if load_env:
        load_dotenv(find_dotenv(usecwd=True), override=False)

    raw = {
        key[len(ENV_PREFIX):]: value
        for key, value in os.environ.items()
        if key.startswith(ENV_PREFIX)
    }
    try:
        return Settings(**raw)
    except ValidationError as exc:
        raise SettingsError(f"Invalid {ENV_PREFIX}* environment: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
