from typing import Optional


class BaseReviewError(Exception):
    """
    Base class for review and rating summary errors.

    Carries the operation name and target identifiers so the HTTP layer and
    the logs can tell which call failed without inspecting driver errors.
    """

    default_message = "A review error occurred."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        operation: Optional[str] = None,
        movie_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ):
        self.operation = operation
        self.movie_id = movie_id
        self.user_id = user_id
        super().__init__(message or self.default_message)


class ValidationError(BaseReviewError):
    default_message = "Missing required review data."


class DuplicateReviewError(BaseReviewError):
    default_message = "You have already reviewed this movie."


class NotFoundError(BaseReviewError):
    default_message = "Requested record was not found."


class ReviewNotFoundError(NotFoundError):
    default_message = "Review not found or it does not belong to you."


class SummaryNotFoundError(NotFoundError):
    default_message = "No ratings found for this movie."


class ReviewStoreError(BaseReviewError):
    default_message = "The review store is unavailable."


class AggregationFailure(BaseReviewError):
    default_message = "Failed to recompute the average rating."
