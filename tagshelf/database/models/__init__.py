# tagshelf/database/models/__init__.py

from tagshelf.database.core.main import Base
from tagshelf.database.models.article import Article
from tagshelf.database.models.taxonomy import (
    Tag,
    ArticleTag,
)

__all__ = [
    "Base",
    "Article",
    "Tag",
    "ArticleTag",
]
