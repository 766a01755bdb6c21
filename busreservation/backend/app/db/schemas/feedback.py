from datetime import datetime
from pydantic import Field
from .base import CamelModel


class FeedbackCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    rating: int = Field(ge=1, le=5)
    comment: str = Field(min_length=1)


class Feedback(CamelModel):
    id: int
    name: str
    email: str
    rating: int
    comment: str
    created_at: datetime | None = None


class FeedbackList(CamelModel):
    feedback: list[Feedback]
