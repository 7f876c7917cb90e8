import logging
from typing import Any, Mapping, Optional, Sequence
from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from src.database.models import Review, RatingSummary
from src.database.models.reviews import utc_now
from src.database import reviews_validators
from src.exceptions import (
    DuplicateReviewError,
    ReviewNotFoundError,
    ReviewStoreError,
    ValidationError,
)
from src.storages.interfaces import ReviewStoreInterface, SummaryStoreInterface

logger = logging.getLogger(__name__)

UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ReviewStore(ReviewStoreInterface):
    """
    Review rows keyed by (user_id, movie_id).

    The pair is unique at the table level, so concurrent creates for the same
    user and movie end in an IntegrityError for all but one writer. This store
    never touches rating summaries.
    """

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _store_error(
        self,
        operation: str,
        error: SQLAlchemyError,
        movie_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> ReviewStoreError:
        await self._db.rollback()
        logger.error(
            "Review store %s failed for movie_id=%s user_id=%s: %s",
            operation,
            movie_id,
            user_id,
            error,
        )
        return ReviewStoreError(
            f"Failed to {operation.replace('_', ' ')}.",
            operation=operation,
            movie_id=movie_id,
            user_id=user_id,
        )

    async def add_review(
        self,
        user_id: str,
        movie_id: str,
        author_name: str,
        rating: Optional[float],
        comment: str,
    ) -> Review:
        try:
            reviews_validators.validate_required_text(movie_id, "movie_id")
            reviews_validators.validate_required_text(comment, "comment")
            reviews_validators.validate_required_text(author_name, "author_name")
        except ValueError as e:
            raise ValidationError(
                str(e), operation="add_review", movie_id=movie_id, user_id=user_id
            )

        normalized_rating = reviews_validators.normalize_rating(rating)
        review = Review(
            user_id=user_id,
            movie_id=movie_id,
            author_name=author_name,
            rating=normalized_rating,
            comment=comment,
            has_rating=normalized_rating is not None,
            created_at=utc_now(),
        )
        self._db.add(review)

        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            # Only the (user_id, movie_id) constraint means a duplicate
            if await self.get_review(user_id, movie_id) is None:
                raise await self._store_error("add_review", e, movie_id, user_id) from e
            raise DuplicateReviewError(
                operation="add_review", movie_id=movie_id, user_id=user_id
            ) from e
        except SQLAlchemyError as e:
            raise await self._store_error("add_review", e, movie_id, user_id) from e

        logger.info("Review added for movie_id=%s by user_id=%s", movie_id, user_id)
        return review

    async def get_review(self, user_id: str, movie_id: str) -> Optional[Review]:
        stmt = select(Review).where(
            Review.user_id == user_id, Review.movie_id == movie_id
        )
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            raise await self._store_error("get_review", e, movie_id, user_id) from e
        return result.scalar_one_or_none()

    async def list_reviews(self, movie_id: str) -> Sequence[Review]:
        stmt = (
            select(Review)
            .where(Review.movie_id == movie_id)
            .order_by(*Review.default_order_by())
        )
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            raise await self._store_error("list_reviews", e, movie_id) from e
        return result.scalars().all()

    async def list_rated_reviews(self, movie_id: str) -> Sequence[Review]:
        stmt = select(Review).where(
            Review.movie_id == movie_id, Review.has_rating.is_(True)
        )
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            raise await self._store_error("list_rated_reviews", e, movie_id) from e
        return result.scalars().all()

    async def update_review(
        self, movie_id: str, user_id: str, changes: Mapping[str, Any]
    ) -> Review:
        review = await self.get_review(user_id, movie_id)
        if review is None:
            raise ReviewNotFoundError(
                operation="update_review", movie_id=movie_id, user_id=user_id
            )

        if "comment" in changes:
            try:
                review.comment = reviews_validators.validate_required_text(
                    changes["comment"], "comment"
                )
            except ValueError as e:
                raise ValidationError(
                    str(e), operation="update_review", movie_id=movie_id, user_id=user_id
                )

        # An explicit None clears the rating; a missing key keeps it
        if "rating" in changes:
            review.rating = reviews_validators.normalize_rating(changes["rating"])
            review.has_rating = review.rating is not None

        try:
            await self._db.commit()
        except SQLAlchemyError as e:
            raise await self._store_error("update_review", e, movie_id, user_id) from e

        logger.info("Review updated for movie_id=%s by user_id=%s", movie_id, user_id)
        return review

    async def delete_review(self, movie_id: str, user_id: str) -> Review:
        review = await self.get_review(user_id, movie_id)
        if review is None:
            raise ReviewNotFoundError(
                operation="delete_review", movie_id=movie_id, user_id=user_id
            )

        try:
            await self._db.delete(review)
            await self._db.commit()
        except SQLAlchemyError as e:
            raise await self._store_error("delete_review", e, movie_id, user_id) from e

        logger.info("Review deleted for movie_id=%s by user_id=%s", movie_id, user_id)
        return review


class SummaryStore(SummaryStoreInterface):
    """One RatingSummary row per movie, written only by the aggregator."""

    def __init__(self, db: AsyncSession):
        self._db = db

    def _insert(self):
        dialect_name = self._db.get_bind().dialect.name
        try:
            return UPSERT_INSERTS[dialect_name]
        except KeyError:
            raise ReviewStoreError(
                f"Summary upsert is not supported on '{dialect_name}'.",
                operation="upsert_summary",
            )

    async def get_summary(self, movie_id: str) -> Optional[RatingSummary]:
        stmt = select(RatingSummary).where(RatingSummary.movie_id == movie_id)
        try:
            result = await self._db.execute(stmt)
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise ReviewStoreError(
                "Failed to get summary.", operation="get_summary", movie_id=movie_id
            ) from e
        return result.scalar_one_or_none()

    async def upsert_summary(
        self, movie_id: str, average_rating: float, total_reviews: int
    ) -> RatingSummary:
        stmt = self._insert()(RatingSummary).values(
            movie_id=movie_id,
            average_rating=average_rating,
            total_reviews=total_reviews,
            updated_at=utc_now(),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["movie_id"],
            set_={
                "average_rating": stmt.excluded.average_rating,
                "total_reviews": stmt.excluded.total_reviews,
                "updated_at": stmt.excluded.updated_at,
            },
        ).returning(RatingSummary)

        try:
            result = await self._db.scalars(
                stmt, execution_options={"populate_existing": True}
            )
            summary = result.one()
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise ReviewStoreError(
                "Failed to upsert summary.",
                operation="upsert_summary",
                movie_id=movie_id,
            ) from e
        return summary

    async def delete_summary(self, movie_id: str) -> None:
        try:
            await self._db.execute(
                delete(RatingSummary).where(RatingSummary.movie_id == movie_id)
            )
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise ReviewStoreError(
                "Failed to delete summary.",
                operation="delete_summary",
                movie_id=movie_id,
            ) from e
