from tagshelf.services.schemas.article import (
    ArticleRead,
    ArticleCreate,
)
from tagshelf.services.schemas.tags import (
    TagRead,
    TagCreate,
)
__all__ = [
    "ArticleRead",
    "ArticleCreate",
    "TagRead",
    "TagCreate",
]
