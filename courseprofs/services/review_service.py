# courseprofs/services/review_service.py
"""
Review Service Layer
Business logic for review submission, removal and listing

Adding or removing a review goes through the same steps:
validate -> resolve caller -> check uniqueness -> persist -> aggregate -> commit.
The professor's average_rating is recomputed after the in-memory review set
has been changed and before the commit, so the stored average always
matches the stored reviews.
"""

import logging
from typing import Any, Dict, Mapping, Union

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from courseprofs.crud import course as course_crud
from courseprofs.crud import professor as professor_crud
from courseprofs.crud import review as review_crud
from courseprofs.errors import Conflict, NotFound, validation_error_from
from courseprofs.models import Review
from courseprofs.schemas.pagination import PagedResult
from courseprofs.schemas.professor import ProfessorDto
from courseprofs.schemas.review import AddReviewDto, ReviewDto
from courseprofs.services import rating
from courseprofs.utils import log_templates
from courseprofs.utils.pagination import paged_query
from courseprofs.utils.security import CallerCredentials, CallerResolver

logger = logging.getLogger(__name__)

REVIEW_ADDED_MESSAGE = "Review was added successfully"


def to_review_dto(review: Review) -> ReviewDto:
    return ReviewDto(
        id=review.id,
        professor_id=review.professor_id,
        professor_name=review.professor.full_name if review.professor else None,
        course_id=review.course_id,
        course_name=review.course.name if review.course else None,
        rating=review.rating,
        users_subject_score=review.users_subject_score,
        comments=review.comments,
        created_at=review.created_at,
    )


# ======================
# REVIEW SUBMISSION
# ======================

def add_review(
    db: Session,
    payload: Union[AddReviewDto, Mapping[str, Any]],
    resolver: CallerResolver
) -> Dict[str, Any]:
    """
    Add a review and update the professor's average rating.

    Args:
        db: Database session
        payload: AddReviewDto or a mapping with the same fields
        resolver: Resolves AppsId/Token to the authoring UserAuth

    Returns:
        Dictionary with acknowledgment message, review id and new average

    Raises:
        ValidationError: If the payload is malformed or out of bounds
        Unauthorized: If the credentials do not resolve
        NotFound: If the course or professor does not exist
        Conflict: If the user already reviewed this professor for this course
    """
    # Validating
    if isinstance(payload, AddReviewDto):
        dto = payload
    else:
        try:
            dto = AddReviewDto.model_validate(payload)
        except PydanticValidationError as e:
            raise validation_error_from(e.errors()) from e

    # Resolve caller
    user_auth = resolver.resolve_caller(CallerCredentials(apps_id=dto.apps_id, token=dto.token))

    course = course_crud.get_course(db, dto.course_id)
    if course is None:
        logger.warning(log_templates.NOT_FOUND, "Course", dto.course_id)
        raise NotFound("Course", dto.course_id)

    try:
        # Lock the professor row before reading its reviews
        professor = professor_crud.get_professor_for_update(db, dto.professor_id)
        if professor is None:
            logger.warning(log_templates.NOT_FOUND, "Professor", dto.professor_id)
            raise NotFound("Professor", dto.professor_id)
        reviews = review_crud.get_reviews_for_professor(db, professor.id)

        # Uniqueness
        if review_crud.find_review(db, user_auth.id, professor.id, course.id) is not None:
            logger.info(
                log_templates.REJECTED, "Review",
                f"AppsId {dto.apps_id} already reviewed professor {professor.id} for course {course.id}"
            )
            raise Conflict("User has already reviewed the professor and course.")

        # Persisting
        review = review_crud.create_review(
            db=db,
            professor_id=professor.id,
            course_id=course.id,
            user_auth_id=user_auth.id,
            rating=dto.rating,
            users_subject_score=dto.users_subject_score,
            comments=dto.comments
        )
        reviews.append(review)

        # Aggregating
        new_average = rating.apply_rating(professor, reviews)

        db.flush()
        review_id = review.id
        db.commit()

    except IntegrityError as e:
        # A concurrent request inserted the same (author, professor, course)
        db.rollback()
        raise Conflict("User has already reviewed the professor and course.") from e
    except Exception:
        db.rollback()
        raise

    logger.info(log_templates.CREATED_ENTITY, "Review", review_id)

    return {
        "message": REVIEW_ADDED_MESSAGE,
        "review_id": review_id,
        "professor_average": new_average,
    }


# ======================
# REVIEW REMOVAL
# ======================

def remove_review(db: Session, review_id: int) -> None:
    """
    Remove a review and update the professor's average rating.

    Args:
        db: Database session
        review_id: Review identifier

    Raises:
        NotFound: If the review does not exist
    """
    review = review_crud.get_review_by_id(db, review_id)
    if review is None:
        logger.warning(log_templates.NOT_FOUND, "Review", review_id)
        raise NotFound("Review", review_id, message="No review found.")

    try:
        professor = professor_crud.get_professor_for_update(db, review.professor_id)
        reviews = review_crud.get_reviews_for_professor(db, professor.id)

        # Another request may have removed it while we waited for the lock
        if all(r.id != review.id for r in reviews):
            logger.warning(log_templates.NOT_FOUND, "Review", review_id)
            raise NotFound("Review", review_id, message="No review found.")

        remaining = [r for r in reviews if r.id != review.id]
        rating.apply_rating(professor, remaining)

        review_crud.delete_review(db, review)
        db.commit()

    except Exception:
        db.rollback()
        raise

    logger.info(log_templates.DELETED, "Review", review_id)


def remove_course(db: Session, course_id: int) -> None:
    """
    Delete a course together with its reviews and refresh the averages of
    every professor that lost a review.

    Raises:
        NotFound: If the course does not exist
    """
    course = course_crud.get_course(db, course_id)
    if course is None:
        logger.warning(log_templates.NOT_FOUND, "Course", course_id)
        raise NotFound("Course", course_id)

    try:
        professor_ids = review_crud.get_professor_ids_for_course(db, course_id)
        course_crud.delete_course(db, course)
        for professor_id in professor_ids:
            rating.refresh_professor_rating(db, professor_id)
        db.commit()

    except Exception:
        db.rollback()
        raise

    logger.info(log_templates.DELETED, "Course", course_id)


# ======================
# REVIEW RETRIEVAL
# ======================

def get_review(db: Session, review_id: int) -> ReviewDto:
    review = review_crud.get_review_by_id(db, review_id)
    if review is None:
        logger.warning(log_templates.NOT_FOUND, "Review", review_id)
        raise NotFound("Review", review_id)
    logger.info(log_templates.REQUEST_ENTITY, "Review", review_id)
    return to_review_dto(review)


def top_rated_professors(db: Session, page: int, items_per_page: int) -> PagedResult[ProfessorDto]:
    """Professors that have reviews, highest average first."""
    professors, window, total = paged_query(
        professor_crud.rated_professors_query(db), page, items_per_page
    )

    return PagedResult[ProfessorDto](
        results=[ProfessorDto.model_validate(p) for p in professors],
        page=page,
        total_pages=window.total_pages,
        total_elements=total,
    )


def professor_reviews(db: Session, professor_id: int, page: int, items_per_page: int) -> PagedResult[ReviewDto]:
    """
    Reviews of one professor, oldest first.

    Raises:
        NotFound: If the professor has no reviews
        InvalidPage: If page is beyond the last page
    """
    query = review_crud.reviews_by_professor_query(db, professor_id)
    return _paged_reviews(query, page, items_per_page)


def student_reviews(db: Session, apps_id: int, page: int, items_per_page: int) -> PagedResult[ReviewDto]:
    """
    Reviews written by one user, oldest first.

    Raises:
        NotFound: If the user has no reviews
        InvalidPage: If page is beyond the last page
    """
    query = review_crud.reviews_by_author_query(db, apps_id)
    return _paged_reviews(query, page, items_per_page)


def _paged_reviews(query, page: int, items_per_page: int) -> PagedResult[ReviewDto]:
    if query.order_by(None).count() == 0:
        raise NotFound("Review", message="No ratings found.")

    reviews, window, total = paged_query(query, page, items_per_page)

    return PagedResult[ReviewDto](
        results=[to_review_dto(r) for r in reviews],
        page=page,
        total_pages=window.total_pages,
        total_elements=total,
    )
