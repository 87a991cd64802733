from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AlphaVantageSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOCKCALC_ALPHA_VANTAGE_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "ALPHA_VANTAGE_API_KEY", "STOCKCALC_ALPHA_VANTAGE_API_KEY"
        ),
    )
    base_url: str = "https://www.alphavantage.co"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="STOCKCALC_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    user_agent: str = "Stock-Calculator/1.0"
    upstream_timeout_seconds: float | None = None
    cache_max_age_seconds: int = 300

    alpha_vantage: AlphaVantageSettings = Field(default_factory=AlphaVantageSettings)


settings = Settings()
