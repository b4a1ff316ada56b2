"""Tests for the server entrypoint."""

import logging

import pytest
from fastapi import FastAPI

from webprint import main as entrypoint


def _has_webprint_handler() -> bool:
    return any(getattr(h, "_webprint", False) for h in logging.getLogger().handlers)


@pytest.fixture
def root_logger():
    """Strip our handler for the test and restore the root logger afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    root.handlers[:] = [h for h in handlers if not getattr(h, "_webprint", False)]
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def served(monkeypatch, root_logger) -> list[dict]:
    """Capture uvicorn.run calls instead of starting a server."""
    calls: list[dict] = []

    def fake_run(app, **kwargs):
        calls.append({"app": app, "logging_ready": _has_webprint_handler(), **kwargs})

    monkeypatch.setattr(entrypoint.uvicorn, "run", fake_run)
    return calls


def test_main_serves_configured_host_and_port(settings, served) -> None:
    entrypoint.main()

    assert len(served) == 1
    assert isinstance(served[0]["app"], FastAPI)
    assert served[0]["host"] == settings.host
    assert served[0]["port"] == settings.port
    assert served[0]["log_level"] == "debug"


def test_main_configures_logging_before_serving(settings, served, root_logger) -> None:
    assert not _has_webprint_handler()

    entrypoint.main()

    assert served[0]["logging_ready"]
    assert served[0]["log_config"] is None
    assert root_logger.level == logging.DEBUG
