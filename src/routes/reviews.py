import logging
from fastapi import APIRouter, Depends, HTTPException, status
from src.config import get_current_user_id
from src.exceptions import (
    DuplicateReviewError,
    NotFoundError,
    ReviewStoreError,
    ValidationError,
)
from src.schemas.reviews import (
    RatingSummarySchema,
    ReviewCreateSchema,
    ReviewListResponseSchema,
    ReviewMutationResponseSchema,
    ReviewSchema,
    ReviewUpdateSchema,
)
from src.services.dependencies import get_review_service
from src.services.reviews import ReviewMutationResult, ReviewService

logger = logging.getLogger(__name__)

router = APIRouter()

STALE_AVERAGE_WARNING = (
    "Your review was saved, but displayed ratings may be briefly stale."
)


def build_mutation_response(
    message: str, result: ReviewMutationResult
) -> ReviewMutationResponseSchema:
    warning = None
    if result.aggregation_error is not None:
        logger.warning(
            "Review for movie_id=%s saved with stale average: %s",
            result.review.movie_id,
            result.aggregation_error,
        )
        warning = STALE_AVERAGE_WARNING

    return ReviewMutationResponseSchema(
        message=message,
        review=result.review,
        average=(
            RatingSummarySchema.model_validate(result.summary)
            if result.summary is not None
            else None
        ),
        warning=warning,
    )


@router.post(
    "/",
    response_model=ReviewMutationResponseSchema,
    summary="Add a review",
    description=(
        "Create the authenticated user's review for a movie. A user can leave "
        "one review per movie; the rating is optional and only rated reviews "
        "count towards the movie's average."
    ),
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Bad Request - Required review data is missing.",
            "content": {
                "application/json": {
                    "example": {"detail": "The 'comment' field is required."}
                }
            },
        },
        409: {
            "description": "Conflict - The user already reviewed this movie.",
            "content": {
                "application/json": {
                    "example": {"detail": "You have already reviewed this movie."}
                }
            },
        },
    },
)
async def add_review(
    review_data: ReviewCreateSchema,
    user_id: str = Depends(get_current_user_id),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewMutationResponseSchema:
    try:
        result = await review_service.add_review(
            user_id=user_id,
            movie_id=review_data.movie_id,
            author_name=review_data.author_name,
            comment=review_data.comment,
            rating=review_data.rating,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateReviewError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ReviewStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while creating the review.",
        )

    return build_mutation_response("Review created successfully.", result)


@router.get(
    "/{movie_id}/",
    response_model=ReviewListResponseSchema,
    summary="Get reviews for a movie",
    description="Retrieve every review left for a movie, newest first.",
)
async def get_reviews(
    movie_id: str,
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewListResponseSchema:
    try:
        reviews = await review_service.list_reviews(movie_id)
    except ReviewStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving the reviews.",
        )

    return ReviewListResponseSchema(
        reviews=[ReviewSchema.model_validate(review) for review in reviews],
        total_items=len(reviews),
    )


@router.put(
    "/{movie_id}/",
    response_model=ReviewMutationResponseSchema,
    summary="Update your review",
    description=(
        "Update the comment and/or rating of the authenticated user's review. "
        "Send `rating: null` to turn a rated review into a comment-only one."
    ),
    responses={
        404: {
            "description": "Not Found - The review does not exist or belongs to someone else.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Review not found or it does not belong to you."
                    }
                }
            },
        },
    },
)
async def update_review(
    movie_id: str,
    review_data: ReviewUpdateSchema,
    user_id: str = Depends(get_current_user_id),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewMutationResponseSchema:
    try:
        result = await review_service.update_review(
            movie_id, user_id, review_data.model_dump(exclude_unset=True)
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ReviewStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while updating the review.",
        )

    return build_mutation_response("Review updated successfully.", result)


@router.delete(
    "/{movie_id}/",
    response_model=ReviewMutationResponseSchema,
    summary="Delete your review",
    description="Delete the authenticated user's review for a movie.",
    responses={
        404: {
            "description": "Not Found - The review does not exist or belongs to someone else.",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "Review not found or it does not belong to you."
                    }
                }
            },
        },
    },
)
async def delete_review(
    movie_id: str,
    user_id: str = Depends(get_current_user_id),
    review_service: ReviewService = Depends(get_review_service),
) -> ReviewMutationResponseSchema:
    try:
        result = await review_service.delete_review(movie_id, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ReviewStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while deleting the review.",
        )

    return build_mutation_response("Review deleted successfully.", result)
