import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence
from src.database.models import Review, RatingSummary
from src.exceptions import AggregationFailure, ReviewNotFoundError
from src.schemas.reviews import ReviewSchema
from src.services.aggregation import AverageAggregator
from src.storages.interfaces import ReviewStoreInterface

logger = logging.getLogger(__name__)


@dataclass
class ReviewMutationResult:
    review: ReviewSchema
    summary: Optional[RatingSummary] = None
    aggregation_error: Optional[AggregationFailure] = None
    recomputed: bool = False


class ReviewService:
    """
    Review mutations followed by a synchronous average recompute.

    A recompute failure never undoes the review write: it is returned on the
    result as ``aggregation_error`` and the summary is left for the next
    mutation to repair. The review is returned as a ``ReviewSchema`` snapshot
    taken before recomputing, so it stays readable after a failed summary
    write rolls the session back.
    """

    def __init__(self, review_store: ReviewStoreInterface, aggregator: AverageAggregator):
        self._review_store = review_store
        self._aggregator = aggregator

    async def _recompute(self, result: ReviewMutationResult) -> ReviewMutationResult:
        result.recomputed = True
        try:
            result.summary = await self._aggregator.recompute_average(
                result.review.movie_id
            )
        except AggregationFailure as e:
            result.aggregation_error = e
        return result

    async def add_review(
        self,
        user_id: str,
        movie_id: str,
        author_name: str,
        comment: str,
        rating: Optional[float] = None,
    ) -> ReviewMutationResult:
        review = await self._review_store.add_review(
            user_id, movie_id, author_name, rating, comment
        )
        result = ReviewMutationResult(review=ReviewSchema.model_validate(review))
        if review.has_rating:
            await self._recompute(result)
        return result

    async def list_reviews(self, movie_id: str) -> Sequence[Review]:
        return await self._review_store.list_reviews(movie_id)

    async def update_review(
        self, movie_id: str, user_id: str, changes: Mapping[str, Any]
    ) -> ReviewMutationResult:
        existing = await self._review_store.get_review(user_id, movie_id)
        if existing is None:
            raise ReviewNotFoundError(
                operation="update_review", movie_id=movie_id, user_id=user_id
            )
        had_rating = existing.has_rating

        review = await self._review_store.update_review(movie_id, user_id, changes)
        result = ReviewMutationResult(review=ReviewSchema.model_validate(review))
        if had_rating or review.has_rating:
            await self._recompute(result)
        return result

    async def delete_review(self, movie_id: str, user_id: str) -> ReviewMutationResult:
        review = await self._review_store.delete_review(movie_id, user_id)
        result = ReviewMutationResult(review=ReviewSchema.model_validate(review))
        if review.has_rating:
            await self._recompute(result)
        return result
