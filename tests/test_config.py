import pytest

from dealdesk.adapters.config import AppConfig
from dealdesk.adapters.memory_store import InMemoryKeyValueStore
from dealdesk.adapters.sql_store import SqlKeyValueStore, build_store


def test_env_prefix_and_backend_normalization(monkeypatch):
    monkeypatch.setenv("DEALDESK_STORE_BACKEND", " Memory ")
    monkeypatch.setenv("DEALDESK_LOG_LEVEL", "debug")

    cfg = AppConfig()

    assert cfg.STORE_BACKEND == "memory"
    assert cfg.LOG_LEVEL == "DEBUG"
    assert isinstance(build_store(cfg), InMemoryKeyValueStore)


def test_unknown_backend_rejected(monkeypatch):
    monkeypatch.setenv("DEALDESK_STORE_BACKEND", "redis")

    with pytest.raises(ValueError):
        AppConfig()


def test_sql_backend_uses_db_uri(monkeypatch, tmp_path):
    monkeypatch.setenv("DEALDESK_STORE_BACKEND", "sql")
    monkeypatch.setenv("DEALDESK_DB_URI", f"sqlite:///{tmp_path}/cfg.db")

    assert isinstance(build_store(AppConfig()), SqlKeyValueStore)
