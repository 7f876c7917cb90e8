from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, ConfigDict


class ReviewSchema(BaseModel):
    id: int
    user_id: str
    movie_id: str
    author_name: str
    rating: Optional[float] = None
    comment: str
    has_rating: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewCreateSchema(BaseModel):
    movie_id: str = Field(..., min_length=1)
    author_name: str = Field(..., min_length=1, max_length=255)
    comment: str = Field(..., min_length=1)
    rating: Optional[float] = Field(None, ge=0)

    @field_validator("movie_id", "comment", "author_name")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Field must not be blank.")
        return value.strip()


class ReviewUpdateSchema(BaseModel):
    comment: Optional[str] = Field(None, min_length=1)
    rating: Optional[float] = Field(None, ge=0)

    @field_validator("comment")
    @classmethod
    def validate_comment(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Comment must not be blank.")
        return value


class RatingSummarySchema(BaseModel):
    movie_id: str
    average_rating: float
    total_reviews: int
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewMutationResponseSchema(BaseModel):
    message: str
    review: ReviewSchema
    average: Optional[RatingSummarySchema] = None
    warning: Optional[str] = None


class ReviewListResponseSchema(BaseModel):
    reviews: List[ReviewSchema]
    total_items: int
