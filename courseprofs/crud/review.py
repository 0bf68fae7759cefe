# courseprofs/crud/review.py
"""
Review CRUD Operations
Core database operations for reviews and professor ratings
"""

from typing import Optional, List

from sqlalchemy.orm import Session, Query, joinedload

from courseprofs.models import Review, UserAuth


# ======================
# REVIEW CRUD
# ======================

def create_review(
    db: Session,
    professor_id: int,
    course_id: int,
    user_auth_id: int,
    rating: int,
    users_subject_score: Optional[float] = None,
    comments: Optional[str] = None
) -> Review:
    """
    Stage a new review for insertion.

    Args:
        db: Database session
        professor_id: Reviewed professor
        course_id: Course the review refers to
        user_auth_id: Authoring UserAuth record
        rating: Rating value (1-5)
        users_subject_score: Reviewer's grade in the course
        comments: Optional text comment

    Returns:
        Review object (not yet flushed)
    """
    review = Review(
        professor_id=professor_id,
        course_id=course_id,
        user_auth_id=user_auth_id,
        rating=rating,
        users_subject_score=users_subject_score,
        comments=comments
    )

    db.add(review)
    return review


def get_review_by_id(db: Session, review_id: int) -> Optional[Review]:
    return (
        db.query(Review)
        .options(joinedload(Review.professor), joinedload(Review.course))
        .filter(Review.id == review_id)
        .first()
    )


def find_review(
    db: Session,
    user_auth_id: int,
    professor_id: int,
    course_id: int
) -> Optional[Review]:
    """
    Get the review a user left for a professor and course, if any.

    Args:
        db: Database session
        user_auth_id: Author
        professor_id: Professor identifier
        course_id: Course identifier

    Returns:
        Review object or None
    """
    return db.query(Review).filter(
        Review.user_auth_id == user_auth_id,
        Review.professor_id == professor_id,
        Review.course_id == course_id
    ).first()


def get_reviews_for_professor(db: Session, professor_id: int) -> List[Review]:
    """Full current review set of a professor, used for aggregation."""
    return db.query(Review).filter(Review.professor_id == professor_id).all()


def delete_review(db: Session, review: Review) -> None:
    db.delete(review)


def get_professor_ids_for_course(db: Session, course_id: int) -> List[int]:
    rows = db.query(Review.professor_id).filter(
        Review.course_id == course_id
    ).distinct().all()
    return [row[0] for row in rows]


# ======================
# LISTING QUERIES
# ======================

def reviews_by_professor_query(db: Session, professor_id: int) -> Query:
    """Reviews of a professor, oldest first."""
    return (
        db.query(Review)
        .options(joinedload(Review.professor), joinedload(Review.course))
        .filter(Review.professor_id == professor_id)
        .order_by(Review.created_at.asc(), Review.id.asc())
    )


def reviews_by_author_query(db: Session, apps_id: int) -> Query:
    """Reviews written by the user with the given AppsId, oldest first."""
    return (
        db.query(Review)
        .join(UserAuth, Review.user_auth_id == UserAuth.id)
        .options(joinedload(Review.professor), joinedload(Review.course))
        .filter(UserAuth.apps_id == apps_id)
        .order_by(Review.created_at.asc(), Review.id.asc())
    )
