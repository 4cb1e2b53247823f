# tagshelf/domain/entities/article.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class Article:
    """
    A bookmarked article. `id` is assigned by storage on insert and is None
    for articles that have not been stored yet.

    `description` and `thumbnail_url` are tri-state: None (absent), "" (present
    but empty) and a non-empty string are all distinct values.
    """
    url: str = ""               # required, globally unique
    platform: str = ""          # required
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        if not self.url or not self.url.strip():
            raise ValueError("Article.url is required")
        if not self.platform or not self.platform.strip():
            raise ValueError("Article.platform is required")
        if self.id is not None and self.id < 1:
            raise ValueError("Article.id must be >= 1 when set")

    def with_id(self, article_id: int) -> "Article":
        return replace(self, id=article_id)
