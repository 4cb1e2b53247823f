# tagshelf/database/repos/article_query.py
from __future__ import annotations
from typing import Iterable, List, Optional, Tuple, Union

from sqlalchemy import select, func, tuple_
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from tagshelf.database.models import (
    Article as DBArticle,
    Tag as DBTag,
    ArticleTag as DBArticleTag,
)
from tagshelf.domain.entities.article import Article as DomainArticle
from tagshelf.domain.entities.tag import Tag
from tagshelf.domain.errors import InvalidCriteriaError
from tagshelf.common.iter import unique
from tagshelf.common.logging import get_logger
from tagshelf.database.repos._mapping import to_domain_article

logger = get_logger(__name__)

TagKey = Tuple[str, int]


def _as_key(value: Union[Tag, TagKey]) -> TagKey:
    if isinstance(value, Tag):
        return value.as_key()
    try:
        name, type_ = value
    except (TypeError, ValueError):
        raise InvalidCriteriaError(f"expected Tag or (name, type) pair, got {value!r}") from None
    if not isinstance(name, str) or not name:
        raise InvalidCriteriaError(f"tag name must be a non-empty string, got {name!r}")
    if not isinstance(type_, int) or isinstance(type_, bool):
        raise InvalidCriteriaError(f"tag type must be an int, got {type_!r}")
    return (name, type_)


def _as_name(value: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidCriteriaError(f"tag name must be a non-empty string, got {value!r}")
    return value


def _as_id(value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidCriteriaError(f"tag id must be an int, got {value!r}")
    return value


def _require(values: list, what: str) -> list:
    if not values:
        raise InvalidCriteriaError(f"at least one {what} is required")
    return values


class ArticleQueryRepo:
    """
    Tag-intersection lookups: articles carrying *all* requested tags.

    Every variant builds the same shape:

        SELECT article.* FROM article
        JOIN (SELECT article_id AS id FROM article_tag [JOIN tag]
              WHERE <criterion> GROUP BY article_id
              HAVING <count> >= :n) subq
        ON article.id = subq.id

    Articles carrying extra tags still match. Criteria are de-duplicated before
    `n` is taken, and an empty criteria set is rejected before touching the DB.
    By-name lookups count distinct names, so a name stored under several types
    still counts once per article.

    Criteria are bound as a single IN list and are not chunked, so more than
    `max_criteria` of them is rejected with InvalidCriteriaError instead of
    running into the driver's bound-parameter limit.
    """

    def __init__(self, session: Session, *, max_criteria: int = 500) -> None:
        self.session = session
        self.max_criteria = max_criteria

    def _require(self, values: list, what: str) -> list:
        values = _require(values, what)
        if len(values) > self.max_criteria:
            raise InvalidCriteriaError(
                f"too many {what} criteria: {len(values)} > {self.max_criteria}"
            )
        return values

    def _matching_all(
        self,
        criterion: ColumnElement[bool],
        n: int,
        *,
        join_tag: bool,
        count: Optional[ColumnElement[int]] = None,
    ) -> List[DomainArticle]:
        sub = select(DBArticleTag.article_id.label("id"))
        if join_tag:
            sub = sub.join(DBTag, DBArticleTag.tag_id == DBTag.id)
        subq = (
            sub.where(criterion)
            .group_by(DBArticleTag.article_id)
            .having((count if count is not None else func.count()) >= n)
            .subquery("subq")
        )
        stmt = (
            select(DBArticle)
            .join(subq, DBArticle.id == subq.c.id)
            .order_by(DBArticle.id.asc())
        )
        rows = self.session.execute(stmt).scalars().all()
        return [to_domain_article(r) for r in rows]

    def by_tags(self, tags: Iterable[Union[Tag, TagKey]]) -> List[DomainArticle]:
        keys = self._require(unique(_as_key(t) for t in tags), "(name, type) pair")
        logger.debug("by_tags: %d pairs", len(keys))
        return self._matching_all(tuple_(DBTag.name, DBTag.type).in_(keys), len(keys), join_tag=True)

    def by_tag_names(self, names: Iterable[str]) -> List[DomainArticle]:
        if isinstance(names, str):
            names = [names]
        names = self._require(unique(_as_name(n) for n in names), "tag name")
        logger.debug("by_tag_names: %d names", len(names))
        return self._matching_all(
            DBTag.name.in_(names),
            len(names),
            join_tag=True,
            count=func.count(DBTag.name.distinct()),
        )

    def by_tag_ids(self, tag_ids: Iterable[int]) -> List[DomainArticle]:
        ids = self._require(unique(_as_id(i) for i in tag_ids), "tag id")
        logger.debug("by_tag_ids: %d ids", len(ids))
        return self._matching_all(DBArticleTag.tag_id.in_(ids), len(ids), join_tag=False)
