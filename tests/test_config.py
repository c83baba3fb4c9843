import importlib

import pytest
from loguru import logger

from flownet.config import DEFAULT_BALANCE_TOLERANCE, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("FLOWNET_LOG_LEVEL", raising=False)
    monkeypatch.delenv("FLOWNET_BALANCE_TOLERANCE", raising=False)
    settings = Settings.from_env()
    assert settings.log_level == "INFO"
    assert settings.balance_tolerance == DEFAULT_BALANCE_TOLERANCE


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("FLOWNET_LOG_LEVEL", "debug")
    monkeypatch.setenv("FLOWNET_BALANCE_TOLERANCE", "0.5")
    settings = Settings.from_env()
    assert settings.log_level == "DEBUG"
    assert settings.balance_tolerance == 0.5


@pytest.mark.parametrize("raw", ["abc", "-1"])
def test_rejects_bad_tolerance(monkeypatch, raw):
    monkeypatch.setenv("FLOWNET_BALANCE_TOLERANCE", raw)
    with pytest.raises(ValueError):
        Settings.from_env()


def test_importing_app_keeps_existing_sinks():
    import flownet.main

    messages = []
    sink_id = logger.add(messages.append)
    importlib.reload(flownet.main)
    # raises ValueError if the sink was removed by the import
    logger.remove(sink_id)
