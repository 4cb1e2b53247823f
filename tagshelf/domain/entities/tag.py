# tagshelf/domain/entities/tag.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Tag:
    """
    A tag is a (name, type) pair; `type` is a free integer category (default 0).
    The same name may exist under several types, never twice within one type.

    `id is None` marks an *unresolved* candidate: it has not been looked up in
    storage yet. Reconciliation replaces it with a copy that carries the id.
    """
    name: str
    type: int = 0
    id: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Tag.name is required")
        if not isinstance(self.type, int) or isinstance(self.type, bool):
            raise ValueError("Tag.type must be an int")
        if self.id is not None and (not isinstance(self.id, int) or self.id < 1):
            raise ValueError("Tag.id must be a positive int when set")

    @property
    def resolved(self) -> bool:
        return self.id is not None

    def as_key(self) -> Tuple[str, int]:
        return (self.name, self.type)
