from __future__ import annotations

import json

from listschema import logger as package_logger
from listschema.logging import configure_logging, get_logger
from listschema.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_json_logs_use_message_key_and_app_env(capsys) -> None:
    configure_logging(settings=Settings(log_json=True, log_level="INFO", app_env="ci"), force=True)
    get_logger("tests").info("schema checked")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["message"] == "schema checked"
    assert payload["app_env"] == "ci"
    assert "event" not in payload


def test_explicit_level_overrides_settings(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), level="WARNING", force=True)
    get_logger("tests").info("quiet")

    assert "quiet" not in capsys.readouterr().err


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))
