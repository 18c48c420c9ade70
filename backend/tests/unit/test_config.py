import logging

import pytest

from backend.src.services import config as config_module


@pytest.fixture(autouse=True)
def restore_config_cache():
    """
    Ensure configuration cache is cleared between tests.
    """
    config_module.reload_config()
    yield
    config_module.reload_config()


def test_get_config_defaults(monkeypatch) -> None:
    for key in ("DB_URL", "DB_NAME", "DB_COLLECTION_DICTIONARY_ENTRIES", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    cfg = config_module.reload_config()

    assert cfg.db_url == config_module.DEFAULT_DB_URL
    assert cfg.db_name == "webonary"
    assert cfg.entries_collection == "webonaryEntries"
    assert cfg.log_level == "INFO"


def test_get_config_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("DB_URL", "mongodb+srv://cluster.example.net")
    monkeypatch.setenv("DB_NAME", "dictionaries")
    monkeypatch.setenv("DB_SERVER_SELECTION_TIMEOUT_MS", "1500")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    cfg = config_module.reload_config()

    assert cfg.db_url == "mongodb+srv://cluster.example.net"
    assert cfg.db_name == "dictionaries"
    assert cfg.server_selection_timeout_ms == 1500
    assert cfg.log_level == "DEBUG"


def test_get_config_rejects_non_mongo_url(monkeypatch) -> None:
    monkeypatch.setenv("DB_URL", "postgres://localhost/db")

    with pytest.raises(ValueError):
        config_module.reload_config()


def test_get_config_rejects_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValueError):
        config_module.reload_config()


def test_configure_logging_uses_configured_level(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    root = logging.getLogger()
    previous = root.level

    try:
        config_module.configure_logging(config_module.reload_config())

        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
