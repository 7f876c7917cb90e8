from fastapi import APIRouter, Depends, HTTPException, status
from src.config import BaseAppSettings, get_settings
from src.exceptions import ReviewStoreError, SummaryNotFoundError
from src.schemas.reviews import RatingSummarySchema
from src.services.aggregation import AverageAggregator
from src.services.dependencies import get_average_aggregator

router = APIRouter()


@router.get(
    "/{movie_id}/",
    response_model=RatingSummarySchema,
    summary="Get the average rating of a movie",
    description=(
        "Return the average rating and the number of rated reviews for a movie. "
        "The average is rounded for display; comment-only reviews are not counted."
    ),
    responses={
        404: {
            "description": "Not Found - The movie has no rated reviews.",
            "content": {
                "application/json": {
                    "example": {"detail": "No ratings found for this movie."}
                }
            },
        },
    },
)
async def get_average(
    movie_id: str,
    aggregator: AverageAggregator = Depends(get_average_aggregator),
    settings: BaseAppSettings = Depends(get_settings),
) -> RatingSummarySchema:
    try:
        summary = await aggregator.get_summary(movie_id)
    except SummaryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ReviewStoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while retrieving the average.",
        )

    return RatingSummarySchema(
        movie_id=summary.movie_id,
        average_rating=round(
            summary.average_rating, settings.AVERAGE_DISPLAY_PRECISION
        ),
        total_reviews=summary.total_reviews,
        updated_at=summary.updated_at,
    )
