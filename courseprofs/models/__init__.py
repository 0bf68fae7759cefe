# courseprofs/models/__init__.py
# Import models in dependency order
from .professor import Professor, NO_RATING
from .course import Course, CourseType
from .user_auth import UserAuth
from .review import Review  # Import Review LAST

__all__ = ["Professor", "NO_RATING", "Course", "CourseType", "UserAuth", "Review"]
