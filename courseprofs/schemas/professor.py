# courseprofs/schemas/professor.py
"""
Professor Pydantic Schemas
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal


class AddProfessorDto(BaseModel):
    """Body of POST/PUT /api/professor"""
    full_name: str = Field(..., min_length=1, max_length=150)
    mail: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    office: Optional[str] = Field(None, max_length=100)
    e_office: Optional[str] = Field(None, max_length=255)

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, v):
        if v.strip() == "":
            raise ValueError("FullName cannot be empty or just whitespace")
        return v.strip()


class ProfessorDto(BaseModel):
    id: int
    full_name: str
    mail: Optional[str] = None
    phone: Optional[str] = None
    office: Optional[str] = None
    e_office: Optional[str] = None
    average_rating: float = Field(..., description="Mean review rating, -1 when unrated")

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, from_attributes=True)


class ProfessorRatingSummary(BaseModel):
    """Rating breakdown for one professor"""
    professor_id: int
    average_rating: float
    total_reviews: int
    rating_distribution: Dict[int, int]
    rating_distribution_percentage: Dict[int, float]
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)
