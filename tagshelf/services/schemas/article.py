from __future__ import annotations
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from tagshelf.domain.entities.article import Article


def unwrap_nullable_string(v: Any) -> Any:
    """
    Accept the legacy {"String": "...", "Valid": bool} object form for nullable
    text fields. Valid=false means absent. Anything else is left for normal
    validation (str or None).
    """
    if isinstance(v, dict) and "Valid" in v and set(v) <= {"String", "Valid"}:
        if not v.get("Valid"):
            return None
        return v.get("String", "")
    return v


# Article
class ArticleBase(BaseModel):
    url: str
    platform: str
    # None -> JSON null (absent); "" stays "" (present but empty)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None

    @field_validator("description", "thumbnail_url", mode="before")
    @classmethod
    def _unwrap_nullable(cls, v):
        return unwrap_nullable_string(v)


class ArticleCreate(ArticleBase):
    def to_domain(self) -> Article:
        return Article(
            url=self.url,
            platform=self.platform,
            description=self.description,
            thumbnail_url=self.thumbnail_url,
        )


class ArticleRead(ArticleBase):
    id: int
    model_config = ConfigDict(from_attributes=True)
