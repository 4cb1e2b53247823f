from __future__ import annotations
from typing import Iterable, Protocol, runtime_checkable, Sequence, Tuple, Union

from tagshelf.domain.entities.article import Article
from tagshelf.domain.entities.tag import Tag

TagKey = Union[Tag, Tuple[str, int]]


@runtime_checkable
class ArticleTagStorePort(Protocol):
    def init(self) -> None: ...
    def close(self) -> None: ...

    # articles
    def get_articles(self) -> list[Article]: ...
    def add_article(self, article: Article) -> Article: ...
    def get_articles_by_tags(self, tags: Iterable[TagKey]) -> list[Article]: ...
    def get_articles_by_tag_name(self, names: Iterable[str]) -> list[Article]: ...
    def get_articles_by_tag_id(self, tag_ids: Iterable[int]) -> list[Article]: ...

    # tags
    def get_tag_list(self) -> list[Tag]: ...
    def add_tags(self, tags: Sequence[Tag]) -> None: ...
    def reconcile_tags(self, tags: Sequence[Tag]) -> list[Tag]: ...
    def get_tags_containing(self, substr: str) -> list[Tag]: ...

    # links
    def get_tag_of_article(self, article_id: int) -> list[Tag]: ...
    def attach_tags_to_article(self, article_id: int, tags: Sequence[Tag]) -> list[Tag]: ...
