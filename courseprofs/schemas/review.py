# courseprofs/schemas/review.py
"""
Review Pydantic Schemas
Request/response models with validation
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from courseprofs.config import settings

RATING_MIN = settings.MIN_RATING
RATING_MAX = settings.MAX_RATING
SUBJECT_SCORE_MIN = 0.0
SUBJECT_SCORE_MAX = 10.0
COMMENTS_MAX_LENGTH = settings.MAX_COMMENT_LENGTH


class AddReviewDto(BaseModel):
    """Body of POST /review/Add"""
    apps_id: int = Field(..., description="External application identity")
    token: str = Field(..., min_length=1, description="Token issued with the AppsId")
    course_id: int
    professor_id: int
    rating: int = Field(..., ge=RATING_MIN, le=RATING_MAX, description=f"Rating from {RATING_MIN} to {RATING_MAX}")
    users_subject_score: Optional[float] = Field(
        None, ge=SUBJECT_SCORE_MIN, le=SUBJECT_SCORE_MAX, description="Reviewer's grade in the course"
    )
    comments: Optional[str] = Field(None, max_length=COMMENTS_MAX_LENGTH)

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    @field_validator("comments")
    @classmethod
    def validate_comments(cls, v):
        """Blank comments are stored as no comment"""
        if v is None:
            return None
        return v.strip() or None


class ReviewDto(BaseModel):
    id: int
    professor_id: int
    professor_name: Optional[str] = None
    course_id: int
    course_name: Optional[str] = None
    rating: int
    users_subject_score: Optional[float] = None
    comments: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class RatingRecalculationResponse(BaseModel):
    """Response after recalculating all ratings"""
    total_professors: int
    updated_count: int
    message: str

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)
