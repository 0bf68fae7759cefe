# courseprofs/services/rating.py
"""
Professor rating aggregation.

A professor's average_rating is stored on the professor row and recomputed
from the full post-mutation review set every time a review is added or
removed, inside the same transaction. It is never computed lazily on read.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Sequence

from sqlalchemy.orm import Session

from courseprofs.crud import professor as professor_crud
from courseprofs.crud import review as review_crud
from courseprofs.models import Professor, NO_RATING
from courseprofs.schemas.review import RATING_MIN, RATING_MAX

logger = logging.getLogger(__name__)


def recompute(reviews: Sequence[Any]) -> float:
    """
    Average rating of a review set.

    Args:
        reviews: Current reviews of one professor (anything with ``.rating``)

    Returns:
        Mean rating as float, or NO_RATING (-1) for an empty set
    """
    if not reviews:
        return NO_RATING

    average = sum(r.rating for r in reviews) / len(reviews)
    if not math.isfinite(average):
        return NO_RATING
    return float(average)


def apply_rating(professor: Professor, reviews: Sequence[Any]) -> float:
    """Store the recomputed average on the professor and return it."""
    previous = professor.average_rating
    professor.average_rating = recompute(reviews)
    logger.debug(
        "Professor %s rating %s -> %s over %d reviews",
        professor.id, previous, professor.average_rating, len(reviews)
    )
    return professor.average_rating


def rating_distribution(reviews: Iterable[Any]) -> Dict[int, int]:
    """Count of reviews per star value: {1: n, ..., 5: n}"""
    distribution = {star: 0 for star in range(RATING_MIN, RATING_MAX + 1)}
    for review in reviews:
        distribution[review.rating] = distribution.get(review.rating, 0) + 1
    return distribution


def rating_summary(professor: Professor, reviews: List[Any]) -> Dict[str, Any]:
    """
    Rating breakdown for one professor.

    Args:
        professor: Professor row
        reviews: The professor's current reviews

    Returns:
        Dictionary with average, total, distribution and percentages
    """
    distribution = rating_distribution(reviews)
    total = len(reviews)

    return {
        "professor_id": professor.id,
        "average_rating": professor.average_rating,
        "total_reviews": total,
        "rating_distribution": distribution,
        "rating_distribution_percentage": {
            star: round(count / total * 100, 1) if total > 0 else 0.0
            for star, count in distribution.items()
        },
        "updated_at": professor.updated_at,
    }


def refresh_professor_rating(db: Session, professor_id: int) -> float:
    """
    Lock a professor, reload its stored reviews and recompute its average.

    Used when reviews disappear as a side effect (e.g. a course is deleted).
    The caller commits.
    """
    professor = professor_crud.get_professor_for_update(db, professor_id)
    if professor is None:
        return NO_RATING
    reviews = review_crud.get_reviews_for_professor(db, professor_id)
    return apply_rating(professor, reviews)


def recalculate_all(db: Session) -> Dict[str, Any]:
    """
    Recompute every professor's average from stored reviews.

    Maintenance path for data written outside the review service.

    Returns:
        Dictionary with recalculation statistics
    """
    professor_ids = [row[0] for row in db.query(Professor.id).order_by(Professor.id).all()]
    updated_count = 0

    try:
        for professor_id in professor_ids:
            professor = professor_crud.get_professor_for_update(db, professor_id)
            before = professor.average_rating
            reviews = review_crud.get_reviews_for_professor(db, professor_id)
            if apply_rating(professor, reviews) != before:
                updated_count += 1
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Recalculated ratings for %d professors, %d changed", len(professor_ids), updated_count)

    return {
        "total_professors": len(professor_ids),
        "updated_count": updated_count,
        "message": "Rating recalculation complete",
    }
