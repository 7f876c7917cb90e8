from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence
from src.database.models import Review, RatingSummary


class ReviewStoreInterface(ABC):

    @abstractmethod
    async def add_review(
        self,
        user_id: str,
        movie_id: str,
        author_name: str,
        rating: Optional[float],
        comment: str,
    ) -> Review:
        pass

    @abstractmethod
    async def get_review(self, user_id: str, movie_id: str) -> Optional[Review]:
        pass

    @abstractmethod
    async def list_reviews(self, movie_id: str) -> Sequence[Review]:
        pass

    @abstractmethod
    async def list_rated_reviews(self, movie_id: str) -> Sequence[Review]:
        pass

    @abstractmethod
    async def update_review(
        self, movie_id: str, user_id: str, changes: Mapping[str, Any]
    ) -> Review:
        pass

    @abstractmethod
    async def delete_review(self, movie_id: str, user_id: str) -> Review:
        pass


class SummaryStoreInterface(ABC):

    @abstractmethod
    async def get_summary(self, movie_id: str) -> Optional[RatingSummary]:
        pass

    @abstractmethod
    async def upsert_summary(
        self, movie_id: str, average_rating: float, total_reviews: int
    ) -> RatingSummary:
        pass

    @abstractmethod
    async def delete_summary(self, movie_id: str) -> None:
        pass
