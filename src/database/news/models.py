"""SQLAlchemy ORM model for news posts."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from src.database.core import Base


class NewsPost(Base):
    """ORM model for news_posts table."""

    __tablename__ = "news_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    published: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (
        Index("idx_news_posts_slug", "slug"),
        Index("idx_news_posts_published_created_at", "published", "created_at"),
    )

    def __repr__(self) -> str:
        """Return string representation of the news post."""
        return f"<NewsPost(id={self.id}, slug={self.slug!r}, published={self.published})>"
