from __future__ import annotations

from pathlib import Path

from safetriage.api.core.config import Settings


def test_defaults(monkeypatch):
    for name in ("SAFETRIAGE_CATALOG_PATH", "LOG_LEVEL", "CORS_ALLOW_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.catalog_path is None
    assert settings.log_level == "INFO"
    assert settings.cors_origins == ["*"]


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SAFETRIAGE_CATALOG_PATH", "/srv/catalogs/red_flags.yml")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example,")
    settings = Settings(_env_file=None)
    assert settings.catalog_path == Path("/srv/catalogs/red_flags.yml")
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("SAFETRIAGE_CATALOG_PATH", "")
    settings = Settings(_env_file=None)
    assert settings.catalog_path is None
