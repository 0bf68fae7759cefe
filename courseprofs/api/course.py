# courseprofs/api/course.py
"""
Course API Router

Endpoints:
- GET /api/course - Paged list of courses
- GET /api/course/{id} - Single course
- POST /api/course - Add a course
- DELETE /api/course?id= - Delete a course and its reviews
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from courseprofs.config import settings
from courseprofs.crud import course as course_crud
from courseprofs.database import get_db
from courseprofs.errors import NotFound
from courseprofs.schemas.course import AddCourseDto, CourseDto
from courseprofs.schemas.pagination import PagedResult
from courseprofs.services import review_service
from courseprofs.utils import log_templates
from courseprofs.utils.pagination import paged_query

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/course", tags=["courses"])


@router.get("", response_model=PagedResult[CourseDto])
def get_courses(
    items_per_page: int = Query(
        settings.DEFAULT_ITEMS_PER_PAGE, alias="itemsPerPage", le=settings.MAX_ITEMS_PER_PAGE
    ),
    page: int = Query(1),
    db: Session = Depends(get_db)
):
    courses, window, total = paged_query(course_crud.courses_query(db), page, items_per_page)

    return PagedResult[CourseDto](
        results=[CourseDto.model_validate(c) for c in courses],
        page=page,
        total_pages=window.total_pages,
        total_elements=total,
    )


@router.get("/{course_id}", response_model=CourseDto)
def get_course(course_id: int, db: Session = Depends(get_db)):
    course = course_crud.get_course(db, course_id)
    if course is None:
        logger.warning(log_templates.NOT_FOUND, "Course", course_id)
        raise NotFound("Course", course_id)
    return CourseDto.model_validate(course)


@router.post("", response_model=CourseDto, status_code=status.HTTP_201_CREATED)
def add_course(dto: AddCourseDto, db: Session = Depends(get_db)):
    course = course_crud.create_course(db, dto)
    logger.info(log_templates.CREATED_ENTITY, "Course", course.id)
    return CourseDto.model_validate(course)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_course(course_id: int = Query(..., alias="id"), db: Session = Depends(get_db)):
    """Deleting a course removes its reviews and refreshes affected professor ratings."""
    review_service.remove_course(db, course_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
