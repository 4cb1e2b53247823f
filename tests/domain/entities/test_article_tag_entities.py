import pytest

from tagshelf.domain.entities.article import Article
from tagshelf.domain.entities.tag import Tag
from tagshelf.domain.entities.links.article_tag_link import ArticleTagLink


def test_article_minimal():
    a = Article(url="https://example.com/a", platform="web")
    assert a.id is None
    assert a.description is None and a.thumbnail_url is None


@pytest.mark.parametrize("bad_url", ["", "   ", None])
def test_article_requires_url(bad_url):
    with pytest.raises(ValueError):
        Article(url=bad_url, platform="web")  # type: ignore[arg-type]


def test_article_requires_platform():
    with pytest.raises(ValueError):
        Article(url="https://example.com/a", platform="")


def test_article_with_id_is_a_copy():
    a = Article(url="https://example.com/a", platform="web", description="")
    b = a.with_id(7)
    assert b.id == 7 and a.id is None
    assert b.description == ""


def test_tag_defaults_unresolved():
    t = Tag("go")
    assert t.type == 0
    assert t.id is None and not t.resolved
    assert t.as_key() == ("go", 0)


def test_tag_resolved():
    assert Tag("go", 1, id=3).resolved


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": ""},
        {"name": "go", "type": "0"},
        {"name": "go", "type": True},
        {"name": "go", "id": 0},
    ],
)
def test_tag_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        Tag(**kwargs)


def test_tag_is_hashable_by_value():
    assert len({Tag("go"), Tag("go"), Tag("go", 1)}) == 2


def test_link_row_shape():
    link = ArticleTagLink(article_id=1, tag_id=2)
    assert link.as_row() == {"article_id": 1, "tag_id": 2}
    assert link.as_key() == (1, 2)
