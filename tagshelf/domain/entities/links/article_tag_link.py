# tagshelf/domain/entities/links/article_tag_link.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ArticleTagLink:
    """
    Join entity connecting an Article and a Tag.
    The DB enforces that (article_id, tag_id) is unique.
    """
    article_id: int
    tag_id: int

    def as_row(self) -> dict:
        return {"article_id": self.article_id, "tag_id": self.tag_id}

    def as_key(self) -> Tuple[int, int]:
        return (self.article_id, self.tag_id)
