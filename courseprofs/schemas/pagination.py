# courseprofs/schemas/pagination.py
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal

T = TypeVar("T")


class PagedResult(BaseModel, Generic[T]):
    """Envelope returned by every list endpoint"""
    results: List[T]
    page: int
    total_pages: int
    total_elements: int

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)
