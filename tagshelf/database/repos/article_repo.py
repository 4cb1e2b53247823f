# tagshelf/database/repos/article_repo.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from tagshelf.database.models import Article as DBArticle
from tagshelf.domain.entities.article import Article as DomainArticle
from tagshelf.common.logging import get_logger
from tagshelf.database.repos._mapping import to_domain_article


logger = get_logger(__name__)


class SqlAlchemyArticleRepo:
    """
    Article reads and inserts. Articles are never updated or deleted.
    URL uniqueness is left to the `uq_article_url` constraint: a duplicate
    insert raises IntegrityError at flush, it is not silently skipped.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_articles(self) -> list[DomainArticle]:
        stmt = select(DBArticle).order_by(DBArticle.id.asc())
        return [to_domain_article(r) for r in self.db.execute(stmt).scalars().all()]

    def add_article(self, article: DomainArticle) -> DomainArticle:
        orm = DBArticle(
            url=article.url,
            platform=article.platform,
            description=article.description,
            thumbnail_url=article.thumbnail_url,
        )
        self.db.add(orm)
        self.db.flush()  # assigns orm.id
        logger.debug("inserted article id=%s url=%s", orm.id, orm.url)
        return article.with_id(orm.id)
