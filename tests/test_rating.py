from types import SimpleNamespace

import pytest

from courseprofs.models import NO_RATING, Professor
from courseprofs.services import rating


def _reviews(*ratings):
    return [SimpleNamespace(rating=r) for r in ratings]


def test_empty_review_set_returns_sentinel():
    assert rating.recompute([]) == NO_RATING == -1


def test_average_is_float_mean():
    assert rating.recompute(_reviews(5, 4, 5, 3, 4)) == pytest.approx(4.2)
    assert isinstance(rating.recompute(_reviews(3, 4)), float)
    assert rating.recompute(_reviews(3, 4)) == 3.5


def test_non_finite_average_falls_back_to_sentinel():
    assert rating.recompute(_reviews(float("inf"))) == NO_RATING
    assert rating.recompute(_reviews(float("nan"))) == NO_RATING


def test_apply_rating_stores_average_on_professor():
    professor = Professor(id=7, full_name="Edsger Dijkstra", average_rating=NO_RATING)

    assert rating.apply_rating(professor, _reviews(2, 3)) == 2.5
    assert professor.average_rating == 2.5

    assert rating.apply_rating(professor, []) == NO_RATING
    assert professor.average_rating == NO_RATING


def test_rating_distribution_counts_every_star():
    distribution = rating.rating_distribution(_reviews(5, 5, 4, 4, 4, 3, 3, 2, 1))
    assert distribution == {1: 1, 2: 1, 3: 2, 4: 3, 5: 2}


def test_rating_summary_without_reviews():
    professor = Professor(id=3, full_name="Barbara Liskov", average_rating=NO_RATING)

    summary = rating.rating_summary(professor, [])

    assert summary["total_reviews"] == 0
    assert summary["average_rating"] == NO_RATING
    assert all(count == 0 for count in summary["rating_distribution"].values())
    assert all(pct == 0.0 for pct in summary["rating_distribution_percentage"].values())


def test_rating_summary_percentages():
    professor = Professor(id=3, full_name="Barbara Liskov", average_rating=4.0)

    summary = rating.rating_summary(professor, _reviews(5, 4, 3))

    assert summary["total_reviews"] == 3
    assert summary["rating_distribution_percentage"][5] == 33.3
    assert summary["rating_distribution_percentage"][1] == 0.0
