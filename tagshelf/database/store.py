# tagshelf/database/store.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from tagshelf.common.concurrency.rwlock import ReadWriteLock
from tagshelf.common.logging import get_logger
from tagshelf.common.settings import Settings, get_settings
from tagshelf.database.core.main import build_engine, make_session_factory
from tagshelf.database.models import Base
from tagshelf.database.core.transaction import transactional
from tagshelf.database.repos.article_query import ArticleQueryRepo
from tagshelf.database.repos.article_repo import SqlAlchemyArticleRepo
from tagshelf.database.repos.tag_repo import TagRepo
from tagshelf.domain.entities.article import Article
from tagshelf.domain.entities.tag import Tag
from tagshelf.domain.errors import (
    ConstraintViolationError,
    SchemaInitError,
    StorageError,
    StoreClosedError,
)

TagKey = Union[Tag, Tuple[str, int]]


class ArticleTagStore:
    """
    Storage service for articles, tags and their links. Satisfies
    ArticleTagStorePort via structural typing.

    Build one at startup and hand it to whoever needs it. All access goes
    through a single ReadWriteLock:

    - reads share the lock
    - writes (add_article, add_tags, reconcile_tags, attach_tags_to_article)
      hold it exclusively, each inside one transaction, so reconciliation's
      insert-then-lookup cannot interleave with another writer

    Every public call is its own transaction; nothing spans calls.
    Errors surface as StorageError subclasses with the driver error chained.
    """

    def __init__(self, settings: Optional[Settings] = None, *, engine: Optional[Engine] = None) -> None:
        self._settings = settings or get_settings()
        self._engine = engine or build_engine(self._settings)
        self._sessions = make_session_factory(self._engine)
        self._lock = ReadWriteLock()
        self._closed = False
        self._batch_size = self._settings.store.insert_batch_size
        self._max_criteria = self._settings.store.max_criteria
        # level goes on the package logger so the repo loggers follow it
        get_logger("tagshelf", self._settings.log_level)
        self.log = get_logger(__name__)

    # -------------------------
    # Lifecycle
    # -------------------------
    def init(self) -> None:
        """Create tables and the tag-name index if missing. Safe on every start."""
        with self._lock.write_locked():
            self._ensure_open()
            try:
                Base.metadata.create_all(self._engine, checkfirst=True)
            except SQLAlchemyError as exc:
                self.log.exception("schema init failed for %s", self._engine.url)
                raise SchemaInitError(f"schema init failed: {exc}") from exc
        self.log.info("store ready at %s", self._engine.url)

    def close(self) -> None:
        """Dispose the engine once no reader or writer holds the lock. Idempotent."""
        with self._lock.write_locked():
            if self._closed:
                return
            self._closed = True
            self._engine.dispose()
        self.log.info("store closed")

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ArticleTagStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -------------------------
    # Plumbing
    # -------------------------
    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError("store is closed")

    def _queries(self, db: Session) -> ArticleQueryRepo:
        return ArticleQueryRepo(db, max_criteria=self._max_criteria)

    @contextmanager
    def _session(self, *, write: bool) -> Iterator[Session]:
        guard = self._lock.write_locked if write else self._lock.read_locked
        with guard():
            self._ensure_open()
            try:
                with self._sessions() as db, transactional(db):
                    yield db
            except StorageError:
                raise
            except IntegrityError as exc:
                raise ConstraintViolationError(str(exc.orig)) from exc
            except SQLAlchemyError as exc:
                raise StorageError(str(exc)) from exc

    # -------------------------
    # Articles
    # -------------------------
    def get_articles(self) -> list[Article]:
        with self._session(write=False) as db:
            return SqlAlchemyArticleRepo(db).list_articles()

    def add_article(self, article: Article) -> Article:
        """Insert `article`; returns a copy carrying the generated id."""
        with self._session(write=True) as db:
            return SqlAlchemyArticleRepo(db).add_article(article)

    def get_articles_by_tags(self, tags: Iterable[TagKey]) -> list[Article]:
        with self._session(write=False) as db:
            return self._queries(db).by_tags(tags)

    def get_articles_by_tag_name(self, names: Iterable[str]) -> list[Article]:
        with self._session(write=False) as db:
            return self._queries(db).by_tag_names(names)

    def get_articles_by_tag_id(self, tag_ids: Iterable[int]) -> list[Article]:
        with self._session(write=False) as db:
            return self._queries(db).by_tag_ids(tag_ids)

    # -------------------------
    # Tags
    # -------------------------
    def get_tag_list(self) -> list[Tag]:
        with self._session(write=False) as db:
            return TagRepo(db).list_tags()

    def add_tags(self, tags: Sequence[Tag]) -> None:
        with self._session(write=True) as db:
            TagRepo(db, batch_size=self._batch_size).add_tags(tags)

    def reconcile_tags(self, tags: Sequence[Tag]) -> list[Tag]:
        with self._session(write=True) as db:
            return TagRepo(db, batch_size=self._batch_size).reconcile(tags)

    def get_tags_containing(self, substr: str) -> list[Tag]:
        with self._session(write=False) as db:
            return TagRepo(db).search(substr)

    # -------------------------
    # Article <-> Tag
    # -------------------------
    def get_tag_of_article(self, article_id: int) -> list[Tag]:
        with self._session(write=False) as db:
            return TagRepo(db).list_for_article(article_id)

    def attach_tags_to_article(self, article_id: int, tags: Sequence[Tag]) -> list[Tag]:
        """Reconcile `tags` and link them to the article; returns the resolved tags."""
        with self._session(write=True) as db:
            return TagRepo(db, batch_size=self._batch_size).attach(article_id, tags)


def open_store(settings: Optional[Settings] = None) -> ArticleTagStore:
    """
    Process entry point: build the store and create its schema.
    A SchemaInitError is logged and re-raised; the caller decides to abort.
    """
    store = ArticleTagStore(settings)
    try:
        store.init()
    except SchemaInitError:
        store.log.error("cannot start without a schema; closing store")
        store.close()
        raise
    return store
