# courseprofs/api/review.py
"""
Review API Router

Endpoints:
- GET /review/AllProfessorsReviews - Rated professors, best first
- GET /review/ProfessorsReviews - Reviews of a professor
- GET /review/StudentsReviews - Reviews written by a user
- GET /review/{reviewId} - Single review
- POST /review/Add - Submit a review
- DELETE /review/delete - Remove a review
- POST /review/admin/recalculate - Recompute every professor's rating
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from courseprofs.config import settings
from courseprofs.database import get_db
from courseprofs.schemas.pagination import PagedResult
from courseprofs.schemas.professor import ProfessorDto
from courseprofs.schemas.review import AddReviewDto, ReviewDto, RatingRecalculationResponse
from courseprofs.services import rating, review_service
from courseprofs.utils.security import CallerResolver, get_caller_resolver

router = APIRouter(prefix="/review", tags=["reviews"])


# ======================
# LISTINGS
# ======================
@router.get("/AllProfessorsReviews", response_model=PagedResult[ProfessorDto])
def get_all_professors_reviews(
    items_per_page: int = Query(
        settings.DEFAULT_ITEMS_PER_PAGE, alias="itemsPerPage", le=settings.MAX_ITEMS_PER_PAGE
    ),
    page: int = Query(1),
    db: Session = Depends(get_db)
):
    """
    Professors that have at least one review, ordered by average rating
    (highest first).
    """
    return review_service.top_rated_professors(db, page, items_per_page)


@router.get("/ProfessorsReviews", response_model=PagedResult[ReviewDto])
def get_professors_reviews(
    professor_id: int = Query(..., alias="profId"),
    items_per_page: int = Query(
        settings.DEFAULT_ITEMS_PER_PAGE, alias="itemsPerPage", le=settings.MAX_ITEMS_PER_PAGE
    ),
    page: int = Query(1),
    db: Session = Depends(get_db)
):
    """Reviews of one professor, oldest first. 404 when there are none."""
    return review_service.professor_reviews(db, professor_id, page, items_per_page)


@router.get("/StudentsReviews", response_model=PagedResult[ReviewDto])
def get_students_reviews(
    apps_id: int = Query(..., alias="appsId"),
    items_per_page: int = Query(
        settings.DEFAULT_ITEMS_PER_PAGE, alias="itemsPerPage", le=settings.MAX_ITEMS_PER_PAGE
    ),
    page: int = Query(1),
    db: Session = Depends(get_db)
):
    """Reviews written by the user with this AppsId, oldest first. 404 when there are none."""
    return review_service.student_reviews(db, apps_id, page, items_per_page)


@router.get("/{review_id}", response_model=ReviewDto)
def get_review(review_id: int, db: Session = Depends(get_db)):
    return review_service.get_review(db, review_id)


# ======================
# SUBMIT / REMOVE
# ======================
@router.post("/Add", response_model=str)
def add_review(
    dto: AddReviewDto,
    resolver: CallerResolver = Depends(get_caller_resolver),
    db: Session = Depends(get_db)
):
    """
    Submit a review for a professor and course.

    Requirements:
    - AppsId/Token must match a registered user
    - Course and professor must exist
    - One review per user, professor and course
    - Rating must be 1-5
    """
    result = review_service.add_review(db, dto, resolver)
    return result["message"]


@router.delete("/delete", status_code=status.HTTP_204_NO_CONTENT)
def remove_review(review_id: int = Query(..., alias="reviewId"), db: Session = Depends(get_db)):
    review_service.remove_review(db, review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ======================
# ADMIN: RECALCULATE ALL RATINGS
# ======================
@router.post("/admin/recalculate", response_model=RatingRecalculationResponse)
def recalculate_all_ratings(db: Session = Depends(get_db)):
    """Recompute every professor's average from its stored reviews."""
    return RatingRecalculationResponse(**rating.recalculate_all(db))
