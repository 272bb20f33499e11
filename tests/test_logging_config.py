import logging

import pytest

from blogcorpus import logging_config
from blogcorpus.settings import settings


@pytest.mark.parametrize(
    "name,expected",
    [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("nonsense", logging.INFO),
        ("", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_resolve_level(name, expected):
    assert logging_config.resolve_level(name) == expected


def test_configure_logging_uses_settings_level(monkeypatch):
    captured = {}
    monkeypatch.setattr(settings, "LOG_LEVEL", "ERROR")
    monkeypatch.setattr(
        logging_config.logging, "basicConfig", lambda **kw: captured.update(kw)
    )

    logging_config.configure_logging()

    assert captured == {"level": logging.ERROR, "format": logging_config.LOG_FORMAT}


def test_configure_logging_explicit_level_wins(monkeypatch):
    captured = {}
    monkeypatch.setattr(
        logging_config.logging, "basicConfig", lambda **kw: captured.update(kw)
    )

    logging_config.configure_logging("debug")

    assert captured["level"] == logging.DEBUG
