import importlib
import logging

from fastapi.testclient import TestClient


def test_lifespan_initializes_app_successfully():
    app_module = importlib.reload(importlib.import_module("api.app"))

    with TestClient(app_module.app) as client:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


def test_lifespan_warms_catalog(caplog):
    with caplog.at_level(logging.INFO):
        app_module = importlib.reload(importlib.import_module("api.app"))
        with TestClient(app_module.app):
            pass

    assert "Loaded catalog:" in caplog.text


def test_lifespan_skips_collaborator_logging_when_disabled(monkeypatch, caplog):
    app_module = importlib.import_module("api.app")
    monkeypatch.setattr(app_module.settings, "enable_llm_analysis", False)
    monkeypatch.setattr(app_module.settings, "enable_civic_lookup", False)

    with caplog.at_level(logging.INFO):
        with TestClient(app_module.app):
            pass

    assert "LLM priority analysis enabled" not in caplog.text
    assert "Civic representative lookup enabled" not in caplog.text
