# courseprofs/crud/course.py
from typing import Optional

from sqlalchemy.orm import Session, Query

from courseprofs.models import Course
from courseprofs.schemas.course import AddCourseDto


def get_course(db: Session, course_id: int) -> Optional[Course]:
    return db.query(Course).filter(Course.id == course_id).first()


def courses_query(db: Session) -> Query:
    return db.query(Course).order_by(Course.id)


def create_course(db: Session, dto: AddCourseDto) -> Course:
    course = Course(name=dto.name, type=dto.type)
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


def delete_course(db: Session, course: Course) -> None:
    """Delete a course and its reviews. The caller recomputes ratings and commits."""
    db.delete(course)
    db.flush()
