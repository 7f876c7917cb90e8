from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from src.database import get_db
from src.services.aggregation import AverageAggregator
from src.services.reviews import ReviewService
from src.storages import (
    ReviewStore,
    ReviewStoreInterface,
    SummaryStore,
    SummaryStoreInterface,
)


def get_review_store(db: AsyncSession = Depends(get_db)) -> ReviewStoreInterface:
    return ReviewStore(db)


def get_summary_store(db: AsyncSession = Depends(get_db)) -> SummaryStoreInterface:
    return SummaryStore(db)


def get_average_aggregator(
    review_store: ReviewStoreInterface = Depends(get_review_store),
    summary_store: SummaryStoreInterface = Depends(get_summary_store),
) -> AverageAggregator:
    return AverageAggregator(review_store=review_store, summary_store=summary_store)


def get_review_service(
    review_store: ReviewStoreInterface = Depends(get_review_store),
    aggregator: AverageAggregator = Depends(get_average_aggregator),
) -> ReviewService:
    return ReviewService(review_store=review_store, aggregator=aggregator)
