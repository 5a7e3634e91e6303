"""
API startup tests.

The lifespan handler validates configuration before serving any request.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.api import deps
from src.api.main import app

GOOD_SECRET = "startup-test-secret-0123456789abcdef"


def _exit_code(exc: BaseException) -> object:
    # The portal may wrap the lifespan's SystemExit in an exception group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    assert isinstance(exc, SystemExit)
    return exc.code


@pytest.fixture
def fresh_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("TRADELOG_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("TRADELOG_RULES_PATH", raising=False)
    deps.get_settings.cache_clear()
    deps.get_rules.cache_clear()
    yield
    deps.get_settings.cache_clear()
    deps.get_rules.cache_clear()


@pytest.mark.parametrize("secret", ["changeme", "dev-secret-unsafe", ""])
def test_unusable_secret_stops_startup(fresh_settings, monkeypatch, secret):
    monkeypatch.setenv("TRADELOG_SECRET_KEY", secret)

    with pytest.raises((SystemExit, BaseExceptionGroup)) as exc_info:
        with TestClient(app):
            pass

    assert _exit_code(exc_info.value) == 1


def test_missing_secret_stops_startup(fresh_settings, monkeypatch):
    monkeypatch.delenv("TRADELOG_SECRET_KEY", raising=False)

    with pytest.raises((SystemExit, BaseExceptionGroup)) as exc_info:
        with TestClient(app):
            pass

    assert _exit_code(exc_info.value) == 1


def test_valid_configuration_serves(fresh_settings, monkeypatch, tmp_path):
    monkeypatch.setenv("TRADELOG_SECRET_KEY", GOOD_SECRET)

    with TestClient(app) as client:
        resp = client.get("/health")

    assert resp.status_code == 200
    assert (tmp_path / "data" / "tradelog.db").exists()
