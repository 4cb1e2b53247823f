from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tagshelf.domain.entities.tag import Tag

# Tag
class TagBase(BaseModel):
    name: str = Field(min_length=1)
    type: int = 0

class TagCreate(TagBase):
    # set when the caller already looked the tag up
    id: Optional[int] = Field(default=None, ge=1)

    def to_domain(self) -> Tag:
        return Tag(name=self.name, type=self.type, id=self.id)

class TagRead(TagBase):
    id: int
    model_config = ConfigDict(from_attributes=True)
