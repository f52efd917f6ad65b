# backend/estatemls/core/settings.py
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # unknown env vars are ignored
    )

    # DB (shared by web, scripts and alembic)
    SYNC_DATABASE_URL: str | None = Field(None, alias="SYNC_DATABASE_URL")

    # CORS
    ESTATE_API_ALLOWED_ORIGINS: str = Field("", alias="ESTATE_API_ALLOWED_ORIGINS")
    ESTATE_API_ALLOW_ALL: bool = Field(False, alias="ESTATE_API_ALLOW_ALL")

    # identity provider edge -> signed subject headers
    IDENTITY_SIGNING_SECRET: str = Field("", alias="IDENTITY_SIGNING_SECRET")
    IDENTITY_MAX_SKEW_SECONDS: int = Field(300, alias="IDENTITY_MAX_SKEW_SECONDS")
    IDENTITY_BYPASS_VERIFY: bool = Field(False, alias="IDENTITY_BYPASS_VERIFY")

    # logging
    LOG_LEVEL: str = Field("INFO", alias="LOG_LEVEL")
    LOG_FORMAT: str = Field("json", alias="LOG_FORMAT")
    LOG_SLOW_REQUEST_MS: int = Field(1000, alias="LOG_SLOW_REQUEST_MS")

    # invoice branding
    COMPANY_NAME: str = Field("Estate MLS", alias="COMPANY_NAME")
    COMPANY_LEGAL_NAME: str = Field("Estate MLS Inc.", alias="COMPANY_LEGAL_NAME")
    COMPANY_ADDRESS_LINE: str = Field("123 Real Estate Blvd", alias="COMPANY_ADDRESS_LINE")
    COMPANY_CITY: str = Field("Lusaka, Zambia", alias="COMPANY_CITY")
    COMPANY_EMAIL: str = Field("info@estatemls.com", alias="COMPANY_EMAIL")
    CURRENCY_CODE: str = Field("ZMW", alias="CURRENCY_CODE")

    def cors_origins(self) -> List[str]:
        raw = self.ESTATE_API_ALLOWED_ORIGINS.strip()
        if raw:
            return [o.strip() for o in raw.split(",") if o.strip()]
        # local dev frontends
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]


settings = Settings()
