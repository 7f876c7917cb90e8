from .reviews import (
    ReviewSchema,
    ReviewCreateSchema,
    ReviewUpdateSchema,
    RatingSummarySchema,
    ReviewMutationResponseSchema,
    ReviewListResponseSchema,
)
