from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import (
    String,
    Float,
    Text,
    Boolean,
    Integer,
    DateTime,
    UniqueConstraint,
)
from sqlalchemy.orm import mapped_column, Mapped
from .base import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    movie_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    comment: Mapped[str] = mapped_column(Text, nullable=False)
    has_rating: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="unique_user_movie_review"),
    )

    @classmethod
    def default_order_by(cls):
        return [cls.created_at.desc(), cls.id.desc()]

    def __repr__(self):
        return (
            f"<Review(user_id='{self.user_id}', movie_id='{self.movie_id}', "
            f"rating={self.rating}, has_rating={self.has_rating})>"
        )


class RatingSummary(Base):
    __tablename__ = "rating_summaries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    average_rating: Mapped[float] = mapped_column(Float, nullable=False)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now
    )

    def __repr__(self):
        return (
            f"<RatingSummary(movie_id='{self.movie_id}', "
            f"average_rating={self.average_rating}, total_reviews={self.total_reviews})>"
        )
