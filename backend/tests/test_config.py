from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from gestao_colaboradores.config import Settings
from gestao_colaboradores.logging_config import JSONFormatter, setup_logging

if TYPE_CHECKING:
    import pytest


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.environment == "development"
    assert settings.is_development
    assert settings.rate_limit_window_ms == 900_000
    assert settings.rate_limit_max == 100
    assert settings.cors_origins == ["*"]


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("RATE_LIMIT_MAX", "5")
    monkeypatch.setenv("CORS_ORIGINS", '["https://rh.empresa.com"]')
    settings = Settings(_env_file=None)
    assert settings.environment == "production"
    assert not settings.is_development
    assert settings.port == 8080
    assert settings.rate_limit_max == 5
    assert settings.cors_origins == ["https://rh.empresa.com"]


def test_json_formatter_includes_request_extras() -> None:
    record = logging.LogRecord("test", logging.WARNING, __file__, 1, "GET %s", ("/x",), None)
    record.status = 404
    record.method = "GET"
    line = json.loads(JSONFormatter().format(record))
    assert line["message"] == "GET /x"
    assert line["level"] == "WARNING"
    assert line["status"] == 404
    assert line["method"] == "GET"
    assert "client" not in line


def test_setup_logging_does_not_stack_handlers() -> None:
    root = logging.getLogger()
    setup_logging("DEBUG", "json")
    setup_logging("INFO", "text")
    ours = [h for h in root.handlers if getattr(h, "_gestao_colaboradores", False)]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JSONFormatter)
    assert root.level == logging.INFO
