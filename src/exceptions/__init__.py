from .security import BaseSecurityError, InvalidTokenError, TokenExpiredError
from .reviews import (
    BaseReviewError,
    ValidationError,
    DuplicateReviewError,
    NotFoundError,
    ReviewNotFoundError,
    SummaryNotFoundError,
    ReviewStoreError,
    AggregationFailure,
)
