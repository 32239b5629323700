from __future__ import annotations

import os

import pytest

from errchain.config import DEFAULT_HARNESS_MODULES, DEFAULT_SKIP_MODULES, TraceConfig


def test_defaults_filter_runtime_and_harness() -> None:
    config = TraceConfig()

    assert config.is_skipped("threading")
    assert config.is_skipped("concurrent.futures.thread")
    assert config.is_skipped("errchain.node")
    assert config.is_harness("_pytest.python")
    assert config.is_harness("unittest.case")
    assert not config.is_skipped("errchainx")
    assert not config.is_harness("pytestish")
    assert not config.is_skipped("myapp.threading")


def test_from_env_reads_root_and_extra_modules(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_SKIP_MODULES", "sqlalchemy.engine, tenacity ,")
    monkeypatch.delenv("ERRCHAIN_SHOW_ALL", raising=False)

    config = TraceConfig.from_env()

    assert config.root == os.getcwd()
    assert config.skip_modules == DEFAULT_SKIP_MODULES + ("sqlalchemy.engine", "tenacity")
    assert config.harness_modules == DEFAULT_HARNESS_MODULES
    assert config.show_all is False
    assert config.is_skipped("tenacity.retry")


@pytest.mark.parametrize("raw", ["1", "true", "YES"])
def test_from_env_show_all(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("ERRCHAIN_SHOW_ALL", raw)

    assert TraceConfig.from_env().show_all is True


def test_from_env_rejects_unparseable_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERRCHAIN_SHOW_ALL", "maybe")

    with pytest.raises(ValueError, match="ERRCHAIN_SHOW_ALL"):
        TraceConfig.from_env()


def test_with_root_returns_new_config() -> None:
    config = TraceConfig(root="/srv/app")
    moved = config.with_root(None)

    assert config.root == "/srv/app"
    assert moved.root is None
    assert moved.skip_modules == config.skip_modules
