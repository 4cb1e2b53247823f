# tests/database/test_store_lifecycle.py
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import inspect

from tagshelf.common.settings import DBConfig, Settings
from tagshelf.database.core.main import build_engine
from tagshelf.database.store import ArticleTagStore, open_store
from tagshelf.domain.entities.article import Article
from tagshelf.domain.entities.tag import Tag
from tagshelf.domain.errors import SchemaInitError, StoreClosedError
from tagshelf.domain.ports.store import ArticleTagStorePort


def test_init_creates_tables_and_index(store):
    insp = inspect(store._engine)
    assert {"article", "tag", "article_tag"} <= set(insp.get_table_names())
    assert "tag_name_index" in {ix["name"] for ix in insp.get_indexes("tag")}


def test_init_is_idempotent_and_keeps_data(settings):
    with ArticleTagStore(settings) as s:
        s.init()
        s.add_article(Article(url="https://example.com/a", platform="web"))

    with ArticleTagStore(settings) as s:
        s.init()
        s.init()
        assert [a.url for a in s.get_articles()] == ["https://example.com/a"]


def test_closed_store_rejects_calls(settings):
    s = ArticleTagStore(settings)
    s.init()
    s.close()
    s.close()  # idempotent
    assert s.closed
    with pytest.raises(StoreClosedError):
        s.get_articles()
    with pytest.raises(StoreClosedError):
        s.add_tags([Tag("go")])


def test_open_store_returns_ready_store(settings):
    s = open_store(settings)
    try:
        assert s.get_tag_list() == []
    finally:
        s.close()


def test_open_store_schema_failure_is_fatal(tmp_path):
    # a directory where the database file should be cannot be opened
    bad = tmp_path / "not_a_file.db"
    bad.mkdir()
    cfg = Settings(app_env="test", db=DBConfig(path=bad))
    with pytest.raises(SchemaInitError):
        open_store(cfg)


def test_in_memory_database_is_shared_across_threads():
    cfg = Settings(app_env="test", db=DBConfig(url="sqlite://"))
    with ArticleTagStore(cfg) as s:
        s.init()
        s.add_article(Article(url="https://example.com/a", platform="web"))
        with ThreadPoolExecutor(max_workers=2) as pool:
            got = pool.submit(s.get_articles).result()
        assert [a.url for a in got] == ["https://example.com/a"]


def test_concurrent_attach_and_query(store):
    n_articles = 8
    articles = [
        store.add_article(Article(url=f"https://example.com/{i}", platform="web"))
        for i in range(n_articles)
    ]

    def _attach(a: Article):
        # every writer races to create the same shared tags
        store.attach_tags_to_article(a.id, [Tag("shared"), Tag("common"), Tag(f"own-{a.id}")])
        return store.get_articles_by_tags([("shared", 0), ("common", 0)])

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(_attach, articles))

    assert all(len(r) >= 1 for r in results)
    final = store.get_articles_by_tags([("shared", 0), ("common", 0)])
    assert [a.id for a in final] == [a.id for a in articles]
    # shared tags were created exactly once
    names = [t.name for t in store.get_tag_list()]
    assert names.count("shared") == 1 and names.count("common") == 1
    assert len(names) == 2 + n_articles


def test_store_satisfies_port(store):
    assert isinstance(store, ArticleTagStorePort)


def test_stores_can_share_one_engine(settings):
    engine = build_engine(settings)
    first = ArticleTagStore(settings, engine=engine)
    first.init()
    first.add_article(Article(url="https://example.com/a", platform="web"))

    second = ArticleTagStore(settings, engine=engine)
    try:
        assert second._engine is engine
        assert [a.url for a in second.get_articles()] == ["https://example.com/a"]
    finally:
        second.close()
        first.close()


def test_log_level_applies_to_package_loggers(settings):
    pkg = logging.getLogger("tagshelf")
    before = pkg.level
    try:
        ArticleTagStore(settings.model_copy(update={"log_level": "warning"})).close()
        assert pkg.level == logging.WARNING
        repo_logger = logging.getLogger("tagshelf.database.repos.tag_repo")
        assert repo_logger.getEffectiveLevel() == logging.WARNING
    finally:
        pkg.setLevel(before)
