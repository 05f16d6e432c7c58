from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from listschema.exceptions import SettingsError
from listschema.settings import Settings, ensure_env_file_exists, get_settings

if TYPE_CHECKING:
    from pathlib import Path


def test_settings_load_from_env_file(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_payload = (
        f"APP_ENV={'test'}\n"
        f"LOG_LEVEL={'DEBUG'}\n"
        f"LOG_JSON={'false'}\n"
        f"STRICT_VISIBILITY_ORDER={'true'}\n"
        f"MAX_SCHEMA_BYTES={4096}\n"
    )
    env_file.write_text(
        env_payload,
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.app_env == "test"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False
    assert settings.strict_visibility_order is True
    assert settings.max_schema_bytes == 4096


def test_settings_rejects_non_positive_size_limit(monkeypatch) -> None:
    monkeypatch.setenv("MAX_SCHEMA_BYTES", "0")
    with pytest.raises(ValidationError, match="greater than 0"):
        Settings()


def test_get_settings_uses_environment(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("APP_ENV", "ci")

    settings = get_settings()
    assert settings.app_env == "ci"

    get_settings.cache_clear()


def test_get_settings_wraps_invalid_values(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("MAX_SCHEMA_BYTES", "lots")

    with pytest.raises(SettingsError):
        get_settings()

    get_settings.cache_clear()


def test_get_settings_retries_after_env_template_on_missing(monkeypatch) -> None:
    get_settings.cache_clear()

    attempts = {"count": 0}

    class _DummySettings:
        app_env = "ci"

    def _fake_settings():
        attempts["count"] += 1
        if attempts["count"] == 1:
            raise ValueError("missing")
        return _DummySettings()

    copied = {"done": 0}

    def _mark_env_copied(**kwargs: object) -> None:
        _ = kwargs
        copied["done"] += 1

    monkeypatch.setattr("listschema.settings.Settings", _fake_settings)
    monkeypatch.setattr("listschema.settings._is_missing_settings_error", lambda exc: True)
    monkeypatch.setattr("listschema.settings.ensure_env_file_exists", _mark_env_copied)

    settings = get_settings()
    assert copied["done"] == 1
    assert attempts["count"] == 2
    assert settings.app_env == "ci"

    get_settings.cache_clear()


def test_get_settings_wraps_env_copy_error_on_missing(monkeypatch) -> None:
    get_settings.cache_clear()

    def _fake_settings():
        raise ValueError("missing")

    def _raise_io_error(**kwargs: object) -> None:
        _ = kwargs
        raise OSError("cannot write .env")

    monkeypatch.setattr("listschema.settings.Settings", _fake_settings)
    monkeypatch.setattr("listschema.settings._is_missing_settings_error", lambda exc: True)
    monkeypatch.setattr("listschema.settings.ensure_env_file_exists", _raise_io_error)

    with pytest.raises(SettingsError):
        get_settings()

    get_settings.cache_clear()


def test_ensure_env_file_exists_copies_template(tmp_path: Path) -> None:
    template = tmp_path / ".env.template"
    template.write_text("APP_ENV=dev\n", encoding="utf-8")
    env_path = tmp_path / ".env"

    ensure_env_file_exists(env_path=env_path, template_path=template)
    env_path.write_text("APP_ENV=prod\n", encoding="utf-8")
    ensure_env_file_exists(env_path=env_path, template_path=template)

    assert env_path.read_text(encoding="utf-8") == "APP_ENV=prod\n"
