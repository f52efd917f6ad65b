"""Tests for environment and .env configuration."""

import pytest

from estatemls.core.settings import Settings


@pytest.mark.unit
def test_env_file_is_read(tmp_path, monkeypatch):
    monkeypatch.delenv("COMPANY_NAME", raising=False)
    monkeypatch.delenv("ESTATE_API_ALLOWED_ORIGINS", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "COMPANY_NAME=Copperbelt Realty\n"
        "ESTATE_API_ALLOWED_ORIGINS=https://a.example, https://b.example\n",
        encoding="utf-8",
    )

    settings = Settings(_env_file=env_file)

    assert settings.COMPANY_NAME == "Copperbelt Realty"
    assert settings.cors_origins() == ["https://a.example", "https://b.example"]


@pytest.mark.unit
def test_environment_overrides_env_file(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    assert Settings(_env_file=env_file).LOG_LEVEL == "WARNING"
