# courseprofs/crud/professor.py
"""
Professor CRUD Operations
"""

from typing import Optional

from sqlalchemy.orm import Session, Query

from courseprofs.models import Professor, NO_RATING
from courseprofs.schemas.professor import AddProfessorDto


def get_professor(db: Session, professor_id: int) -> Optional[Professor]:
    return db.query(Professor).filter(Professor.id == professor_id).first()


def get_professor_for_update(db: Session, professor_id: int) -> Optional[Professor]:
    """
    Load a professor and lock its row until the transaction ends.

    Serializes concurrent rating updates for the same professor. Backends
    without row locks (SQLite) ignore FOR UPDATE.
    """
    return (
        db.query(Professor)
        .filter(Professor.id == professor_id)
        .with_for_update()
        .populate_existing()
        .first()
    )


def professors_query(db: Session) -> Query:
    return db.query(Professor).order_by(Professor.id)


def rated_professors_query(db: Session) -> Query:
    """Professors with at least one review, best rated first."""
    return (
        db.query(Professor)
        .filter(Professor.average_rating != NO_RATING)
        .order_by(Professor.average_rating.desc(), Professor.id)
    )


def create_professor(db: Session, dto: AddProfessorDto) -> Professor:
    professor = Professor(
        full_name=dto.full_name,
        mail=dto.mail,
        phone=dto.phone,
        office=dto.office,
        e_office=dto.e_office,
        average_rating=NO_RATING,
    )
    db.add(professor)
    db.commit()
    db.refresh(professor)
    return professor


def update_professor(db: Session, professor: Professor, dto: AddProfessorDto) -> Professor:
    # Contact fields only; average_rating belongs to the review service
    professor.full_name = dto.full_name
    professor.mail = dto.mail
    professor.phone = dto.phone
    professor.office = dto.office
    professor.e_office = dto.e_office
    db.commit()
    db.refresh(professor)
    return professor


def delete_professor(db: Session, professor: Professor) -> None:
    db.delete(professor)
    db.commit()
