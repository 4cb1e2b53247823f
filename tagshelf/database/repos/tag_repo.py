# tagshelf/database/repos/tag_repo.py
from __future__ import annotations
from typing import Iterable, Sequence, Tuple, Dict, List

from sqlalchemy import select, tuple_
from sqlalchemy.orm import Session

from tagshelf.database.models import Tag as DBTag, ArticleTag as DBArticleTag
from tagshelf.domain.entities.tag import Tag
from tagshelf.domain.entities.links.article_tag_link import ArticleTagLink
from tagshelf.domain.errors import ReconciliationError
from tagshelf.common.iter import chunked, unique
from tagshelf.common.logging import get_logger
from tagshelf.database.repos._dialect import insert_ignore
from tagshelf.database.repos._mapping import to_domain_tag

logger = get_logger(__name__)

TagKey = Tuple[str, int]


class TagRepo:
    def __init__(self, db: Session, *, batch_size: int = 400) -> None:
        self.db = db
        self.batch_size = batch_size

    # ----- reads -----
    def list_tags(self) -> List[Tag]:
        stmt = select(DBTag).order_by(DBTag.id.asc())
        return [to_domain_tag(r) for r in self.db.execute(stmt).scalars().all()]

    def search(self, substr: str) -> List[Tag]:
        """
        Tags whose name contains `substr`. The text is bound as a parameter and
        LIKE wildcards in it are escaped, so '%' or '_' only match themselves.
        """
        stmt = (
            select(DBTag)
            .where(DBTag.name.contains(substr or "", autoescape=True))
            .order_by(DBTag.id.asc())
        )
        return [to_domain_tag(r) for r in self.db.execute(stmt).scalars().all()]

    def list_for_article(self, article_id: int) -> List[Tag]:
        stmt = (
            select(DBTag)
            .join(DBArticleTag, DBArticleTag.tag_id == DBTag.id)
            .where(DBArticleTag.article_id == article_id)
            .order_by(DBTag.id.asc())
        )
        return [to_domain_tag(r) for r in self.db.execute(stmt).scalars().all()]

    def lookup(self, keys: Sequence[TagKey]) -> Dict[TagKey, Tag]:
        """Map (name, type) -> stored Tag for every key that exists."""
        out: Dict[TagKey, Tag] = {}
        for batch in chunked(keys, self.batch_size):
            stmt = select(DBTag).where(tuple_(DBTag.name, DBTag.type).in_(batch))
            for row in self.db.execute(stmt).scalars().all():
                tag = to_domain_tag(row)
                out[tag.as_key()] = tag
        return out

    # ----- writes -----
    def _insert_ignore(self, table, rows: List[dict]) -> None:
        dialect = self.db.get_bind().dialect.name
        for batch in chunked(rows, self.batch_size):
            self.db.execute(insert_ignore(table, dialect).values(batch))

    def add_tags(self, tags: Iterable[Tag]) -> None:
        """Insert every (name, type) not stored yet; existing pairs are skipped."""
        keys = unique(t.as_key() for t in tags)
        if not keys:
            return
        self._insert_ignore(DBTag.__table__, [{"name": n, "type": t} for (n, t) in keys])
        logger.debug("add_tags: %d distinct (name, type) pairs submitted", len(keys))

    def reconcile(self, tags: Sequence[Tag]) -> List[Tag]:
        """
        Make sure every candidate exists and return one Tag per input, in
        input order, each carrying its id.

        Candidates that already have an id pass through untouched. The rest are
        inserted (duplicates ignored) and looked up again by (name, type) in the
        same transaction; every pair inserted must come back, otherwise
        ReconciliationError.
        """
        pending = [t for t in tags if not t.resolved]
        if not pending:
            return list(tags)

        keys = unique(t.as_key() for t in pending)
        self._insert_ignore(DBTag.__table__, [{"name": n, "type": t} for (n, t) in keys])
        found = self.lookup(keys)

        if len(found) != len(keys):
            missing = [k for k in keys if k not in found]
            logger.error(
                "tag reconciliation mismatch: submitted=%d found=%d missing=%r",
                len(keys), len(found), missing[:10],
            )
            raise ReconciliationError(
                f"tag reconciliation failed: {len(found)} of {len(keys)} tags found after insert"
            )

        return [t if t.resolved else found[t.as_key()] for t in tags]

    def attach(self, article_id: int, tags: Sequence[Tag]) -> List[Tag]:
        """
        Reconcile `tags`, then link each to the article. Links that already
        exist are skipped, so attaching twice is a no-op.
        """
        if not tags:
            return []
        resolved = self.reconcile(tags)
        links = unique(ArticleTagLink(article_id=article_id, tag_id=t.id) for t in resolved)
        self._insert_ignore(DBArticleTag.__table__, [link.as_row() for link in links])
        logger.debug("attach: article_id=%s links=%d", article_id, len(links))
        return resolved
