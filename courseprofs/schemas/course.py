# courseprofs/schemas/course.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

from courseprofs.models.course import CourseType


class AddCourseDto(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: CourseType = CourseType.COMPULSORY

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


class CourseDto(BaseModel):
    id: int
    name: str
    type: CourseType

    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, from_attributes=True)
