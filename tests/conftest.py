# tests/conftest.py
from __future__ import annotations
import pytest

from tagshelf.common.settings import DBConfig, Settings
from tagshelf.database.store import ArticleTagStore


@pytest.fixture()
def settings(tmp_path) -> Settings:
    # One throwaway SQLite file per test; nothing leaks between tests
    return Settings(
        app_env="test",
        log_level="DEBUG",
        db=DBConfig(path=tmp_path / "tagshelf.db"),
    )


@pytest.fixture()
def store(settings) -> ArticleTagStore:
    s = ArticleTagStore(settings)
    s.init()
    try:
        yield s
    finally:
        s.close()
