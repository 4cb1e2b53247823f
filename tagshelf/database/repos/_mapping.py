# tagshelf/database/repos/_mapping.py
from __future__ import annotations
from tagshelf.database.models import Article as DBArticle, Tag as DBTag
from tagshelf.domain.entities.article import Article as DomainArticle
from tagshelf.domain.entities.tag import Tag as DomainTag

def to_domain_article(row: DBArticle) -> DomainArticle:
    return DomainArticle(
        id=row.id,
        url=row.url,
        platform=row.platform,
        description=row.description,
        thumbnail_url=row.thumbnail_url,
    )

def to_domain_tag(row: DBTag) -> DomainTag:
    return DomainTag(id=row.id, name=row.name, type=int(row.type or 0))
