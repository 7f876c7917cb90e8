"""
Tests for the review mutation workflow and when it recomputes averages.
Scenarios A-E walk one movie through its whole rating lifecycle.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from src.exceptions import (
    AggregationFailure,
    DuplicateReviewError,
    ReviewNotFoundError,
    ReviewStoreError,
    SummaryNotFoundError,
)
from src.services import AverageAggregator, ReviewService


async def test_rating_lifecycle_scenarios(review_service, aggregator):
    # A: first rated review
    result = await review_service.add_review("u1", "42", "Ana", "ok", rating=4)
    assert result.summary.movie_id == "42"
    assert result.summary.average_rating == pytest.approx(4)
    assert result.summary.total_reviews == 1

    # B: second rated review
    result = await review_service.add_review("u2", "42", "Ben", "meh", rating=2)
    assert result.summary.average_rating == pytest.approx(3)
    assert result.summary.total_reviews == 2

    # C: u1 deletes
    result = await review_service.delete_review("42", "u1")
    assert result.summary.average_rating == pytest.approx(2)
    assert result.summary.total_reviews == 1

    # D: comment-only review leaves the summary alone
    result = await review_service.add_review("u3", "42", "Cy", "no opinion")
    assert result.recomputed is False
    summary = await aggregator.get_summary("42")
    assert summary.average_rating == pytest.approx(2)
    assert summary.total_reviews == 1

    # E: last rated review deleted
    result = await review_service.delete_review("42", "u2")
    assert result.summary is None
    with pytest.raises(SummaryNotFoundError):
        await aggregator.get_summary("42")


async def test_duplicate_add(review_service):
    await review_service.add_review("u1", "42", "Ana", "ok", rating=4)

    with pytest.raises(DuplicateReviewError):
        await review_service.add_review("u1", "42", "Ana", "again", rating=1)


async def test_update_recomputes_changed_rating(review_service):
    await review_service.add_review("u1", "42", "Ana", "ok", rating=4)
    await review_service.add_review("u2", "42", "Ben", "meh", rating=2)

    result = await review_service.update_review("42", "u2", {"rating": 5})

    assert result.summary.average_rating == pytest.approx(4.5)
    assert result.summary.total_reviews == 2


async def test_update_removing_last_rating_deletes_summary(review_service, aggregator):
    await review_service.add_review("u1", "42", "Ana", "ok", rating=4)

    result = await review_service.update_review("42", "u1", {"rating": None})

    assert result.recomputed is True
    assert result.summary is None
    with pytest.raises(SummaryNotFoundError):
        await aggregator.get_summary("42")


async def test_update_adding_rating_creates_summary(review_service):
    await review_service.add_review("u1", "42", "Ana", "no opinion")

    result = await review_service.update_review("42", "u1", {"rating": 3})

    assert result.summary.total_reviews == 1
    assert result.summary.average_rating == pytest.approx(3)


async def test_update_comment_only_skips_recompute(review_service):
    await review_service.add_review("u1", "42", "Ana", "no opinion")

    result = await review_service.update_review("42", "u1", {"comment": "still none"})

    assert result.recomputed is False
    assert result.review.comment == "still none"


async def test_update_missing_review(review_service):
    with pytest.raises(ReviewNotFoundError):
        await review_service.update_review("42", "u1", {"comment": "x"})


async def test_delete_comment_only_skips_recompute(review_service):
    await review_service.add_review("u1", "42", "Ana", "ok", rating=4)
    await review_service.add_review("u2", "42", "Ben", "no opinion")

    result = await review_service.delete_review("42", "u2")

    assert result.recomputed is False


async def test_aggregation_failure_keeps_review(review_store):
    """A failed recompute is reported but the review stays saved."""
    summary_store = AsyncMock()
    summary_store.upsert_summary.side_effect = ReviewStoreError(
        operation="upsert_summary", movie_id="42"
    )
    service = ReviewService(
        review_store=review_store,
        aggregator=AverageAggregator(review_store=review_store, summary_store=summary_store),
    )

    result = await service.add_review("u1", "42", "Ana", "ok", rating=4)

    assert isinstance(result.aggregation_error, AggregationFailure)
    assert result.summary is None
    assert (await review_store.get_review("u1", "42")).has_rating is True


async def test_failed_summary_write_keeps_review_readable(
    review_service, review_store, db_session, monkeypatch
):
    """A rolled-back summary upsert must not break the returned review."""
    monkeypatch.setattr(
        db_session,
        "scalars",
        AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("database is locked"))
        ),
    )

    result = await review_service.add_review("u1", "42", "Ana", "ok", rating=4)

    assert isinstance(result.aggregation_error, AggregationFailure)
    assert result.summary is None
    assert result.review.movie_id == "42"
    assert result.review.rating == 4.0
    assert (await review_store.get_review("u1", "42")) is not None


async def test_failed_summary_write_on_update_keeps_review_readable(
    review_service, db_session, monkeypatch
):
    await review_service.add_review("u1", "42", "Ana", "ok", rating=4)
    monkeypatch.setattr(
        db_session,
        "scalars",
        AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("database is locked"))
        ),
    )

    result = await review_service.update_review("42", "u1", {"rating": 2})

    assert isinstance(result.aggregation_error, AggregationFailure)
    assert result.review.rating == 2.0
    assert result.review.comment == "ok"


async def test_list_reviews(review_service):
    await review_service.add_review("u1", "42", "Ana", "ok", rating=4)
    await review_service.add_review("u2", "42", "Ben", "no opinion")

    reviews = await review_service.list_reviews("42")

    assert len(reviews) == 2
