"""
Unit tests for logging configuration.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import logging

import pytest

from fairway.common import logging as logging_module


def test_configure_logging_applies_level_once(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging_module, "_LOGGING_CONFIGURED", False)
    monkeypatch.setattr(logging_module.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    logging_module.configure_logging("debug")
    logging_module.configure_logging("error")

    assert calls == [{"level": logging.DEBUG, "format": logging_module.LOG_FORMAT}]


def test_unknown_level_falls_back_to_info(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging_module, "_LOGGING_CONFIGURED", False)
    monkeypatch.setattr(logging_module.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    logging_module.configure_logging("chatty")

    assert calls[0]["level"] == logging.INFO
