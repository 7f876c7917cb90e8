import logging
from typing import Optional
from src.database.models import RatingSummary
from src.exceptions import (
    AggregationFailure,
    ReviewStoreError,
    SummaryNotFoundError,
)
from src.storages.interfaces import ReviewStoreInterface, SummaryStoreInterface

logger = logging.getLogger(__name__)


class AverageAggregator:
    """
    Keeps one RatingSummary per movie in line with its rating-bearing reviews.

    Every recomputation re-reads the full set of rated reviews instead of
    applying a delta, so a summary left stale by a failed or interleaved run
    converges on the next mutation for the same movie.
    """

    def __init__(
        self,
        review_store: ReviewStoreInterface,
        summary_store: SummaryStoreInterface,
    ):
        self._review_store = review_store
        self._summary_store = summary_store

    async def recompute_average(self, movie_id: str) -> Optional[RatingSummary]:
        """
        Recompute and persist the summary for ``movie_id``.

        Returns the upserted summary, or ``None`` when the movie has no
        rating-bearing reviews left and its summary was removed.

        :raises AggregationFailure: if a store call fails or a rated review
            carries no rating value.
        """
        try:
            reviews = await self._review_store.list_rated_reviews(movie_id)
            if not reviews:
                await self._summary_store.delete_summary(movie_id)
                logger.info("Removed rating summary for movie_id=%s", movie_id)
                return None

            ratings = [review.rating for review in reviews]
            if any(rating is None for rating in ratings):
                raise AggregationFailure(
                    "Rated review without a rating value.",
                    operation="recompute_average",
                    movie_id=movie_id,
                )

            average_rating = sum(ratings) / len(ratings)
            summary = await self._summary_store.upsert_summary(
                movie_id, average_rating, len(ratings)
            )
        except AggregationFailure as e:
            logger.error(
                "Average recompute for movie_id=%s needs reconciliation: %s",
                movie_id,
                e,
            )
            raise
        except ReviewStoreError as e:
            logger.error(
                "Average recompute for movie_id=%s needs reconciliation: %s",
                movie_id,
                e,
            )
            raise AggregationFailure(
                f"Error updating average for movie: {e}",
                operation="recompute_average",
                movie_id=movie_id,
            ) from e

        logger.info(
            "Rating summary for movie_id=%s: average=%s total=%s",
            movie_id,
            summary.average_rating,
            summary.total_reviews,
        )
        return summary

    async def get_summary(self, movie_id: str) -> RatingSummary:
        summary = await self._summary_store.get_summary(movie_id)
        if summary is None:
            raise SummaryNotFoundError(operation="get_summary", movie_id=movie_id)
        return summary
