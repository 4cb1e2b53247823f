# tagshelf/database/models/taxonomy.py
from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Index, text
from sqlalchemy.orm import Mapped, mapped_column

from tagshelf.database.core.main import Base


# =======================
# Tags
# =======================
class Tag(Base):
    __tablename__ = "tag"
    __table_args__ = (
        UniqueConstraint("name", "type", name="uq_tag_name_type"),
        Index("tag_name_index", "name"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default=text("0"))


# =======================
# Article <-> Tag
# =======================
class ArticleTag(Base):
    __tablename__ = "article_tag"
    __table_args__ = (
        UniqueConstraint("article_id", "tag_id", name="uq_article_tag_article_tag"),
    )

    # no ondelete: rows are never deleted
    article_id: Mapped[int] = mapped_column(ForeignKey("article.id"), primary_key=True)
    tag_id: Mapped[int] = mapped_column(ForeignKey("tag.id"), primary_key=True)
