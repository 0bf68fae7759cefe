# courseprofs/schemas/__init__.py

from .pagination import PagedResult
from .professor import AddProfessorDto, ProfessorDto, ProfessorRatingSummary
from .course import AddCourseDto, CourseDto
from .review import AddReviewDto, ReviewDto, RatingRecalculationResponse

__all__ = [
    "PagedResult",
    "AddProfessorDto",
    "ProfessorDto",
    "ProfessorRatingSummary",
    "AddCourseDto",
    "CourseDto",
    "AddReviewDto",
    "ReviewDto",
    "RatingRecalculationResponse",
]
