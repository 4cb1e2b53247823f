# tagshelf/common/iter.py
from __future__ import annotations

from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


def chunked(it: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield fixed-size lists from an iterable (last chunk may be smaller)."""
    if size < 1:
        raise ValueError("chunk size must be >= 1")
    buf: list[T] = []
    for x in it:
        buf.append(x)
        if len(buf) >= size:
            yield buf
            buf = []
    if buf:
        yield buf


def unique(it: Iterable[T]) -> list[T]:
    """De-duplicate while keeping first-seen order (items must be hashable)."""
    seen: set[T] = set()
    out: list[T] = []
    for x in it:
        if x in seen:
            continue
        seen.add(x)
        out.append(x)
    return out
