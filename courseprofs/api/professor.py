# courseprofs/api/professor.py
"""
Professor API Router

Endpoints:
- GET /api/professor - Paged list of professors
- GET /api/professor/{id} - Single professor
- GET /api/professor/{id}/rating - Rating summary of a professor
- POST /api/professor - Add a professor
- PUT /api/professor/{id} - Update a professor's details
- DELETE /api/professor?id= - Delete a professor and its reviews
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from courseprofs.config import settings
from courseprofs.crud import professor as professor_crud
from courseprofs.crud import review as review_crud
from courseprofs.database import get_db
from courseprofs.errors import NotFound
from courseprofs.models import Professor
from courseprofs.schemas.pagination import PagedResult
from courseprofs.schemas.professor import AddProfessorDto, ProfessorDto, ProfessorRatingSummary
from courseprofs.services import rating
from courseprofs.utils import log_templates
from courseprofs.utils.pagination import paged_query

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/professor", tags=["professors"])


def _get_or_404(db: Session, professor_id: int) -> Professor:
    professor = professor_crud.get_professor(db, professor_id)
    if professor is None:
        logger.warning(log_templates.NOT_FOUND, "Professor", professor_id)
        raise NotFound("Professor", professor_id)
    return professor


@router.get("", response_model=PagedResult[ProfessorDto])
def get_professors(
    items_per_page: int = Query(
        settings.DEFAULT_ITEMS_PER_PAGE, alias="itemsPerPage", le=settings.MAX_ITEMS_PER_PAGE
    ),
    page: int = Query(1),
    db: Session = Depends(get_db)
):
    """
    Returns all professors ordered by id.

    Args:
        itemsPerPage: How many professors a page holds
        page: Which page of the results to return
    """
    professors, window, total = paged_query(
        professor_crud.professors_query(db), page, items_per_page
    )

    return PagedResult[ProfessorDto](
        results=[ProfessorDto.model_validate(p) for p in professors],
        page=page,
        total_pages=window.total_pages,
        total_elements=total,
    )


@router.get("/{professor_id}", response_model=ProfessorDto)
def get_professor(professor_id: int, db: Session = Depends(get_db)):
    professor = _get_or_404(db, professor_id)
    logger.info(log_templates.REQUEST_ENTITY, "Professor", professor_id)
    return ProfessorDto.model_validate(professor)


@router.get("/{professor_id}/rating", response_model=ProfessorRatingSummary)
def get_professor_rating(professor_id: int, db: Session = Depends(get_db)):
    """Average, review count and per-star distribution for a professor."""
    professor = _get_or_404(db, professor_id)
    reviews = review_crud.get_reviews_for_professor(db, professor_id)
    return ProfessorRatingSummary(**rating.rating_summary(professor, reviews))


@router.post("", response_model=ProfessorDto, status_code=status.HTTP_201_CREATED)
def add_professor(dto: AddProfessorDto, response: Response, db: Session = Depends(get_db)):
    professor = professor_crud.create_professor(db, dto)
    logger.info(log_templates.CREATED_ENTITY, "Professor", professor.id)
    response.headers["Location"] = router.url_path_for("get_professor", professor_id=professor.id)
    return ProfessorDto.model_validate(professor)


@router.put("/{professor_id}", response_model=ProfessorDto)
def update_professor(professor_id: int, dto: AddProfessorDto, db: Session = Depends(get_db)):
    """Updates contact details. The average rating is not client-writable."""
    professor = _get_or_404(db, professor_id)
    professor = professor_crud.update_professor(db, professor, dto)
    logger.info(log_templates.UPDATED, "Professor", professor_id)
    return ProfessorDto.model_validate(professor)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def delete_professor(professor_id: int = Query(..., alias="id"), db: Session = Depends(get_db)):
    professor = _get_or_404(db, professor_id)
    professor_crud.delete_professor(db, professor)
    logger.info(log_templates.DELETED, "Professor", professor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
