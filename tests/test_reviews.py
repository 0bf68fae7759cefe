# tests/test_reviews.py
"""
Review lifecycle and rating aggregation tests
Service layer against an in-memory database
"""

import random
from statistics import mean

import pytest

from courseprofs.config import settings
from courseprofs.crud import professor as professor_crud
from courseprofs.crud import review as review_crud
from courseprofs.errors import Conflict, InvalidPage, NotFound, Unauthorized, ValidationError
from courseprofs.models import Course, CourseType, NO_RATING, Professor, Review
from courseprofs.services import rating, review_service
from courseprofs.utils.security import issue_user_auth


def _average(db_session, professor_id=1):
    return db_session.get(Professor, professor_id).average_rating


def _stored_ratings(db_session, professor_id=1):
    return [r.rating for r in db_session.query(Review).filter(Review.professor_id == professor_id)]


# ======================
# ADD REVIEW
# ======================

def test_add_review_success(db_session, setup_data, resolver, review_payload):
    result = review_service.add_review(db_session, review_payload(Rating=5), resolver)

    assert result["message"] == "Review was added successfully"
    assert result["review_id"] is not None
    assert result["professor_average"] == 5.0

    review = db_session.get(Review, result["review_id"])
    assert review.professor_id == 1
    assert review.course_id == 1
    assert review.user_auth_id == setup_data["student"].id
    assert review.users_subject_score == 8.5
    assert review.comments == "Clear lectures"
    assert _average(db_session) == 5.0


def test_average_includes_every_review(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(Rating=5), resolver)
    review_service.add_review(
        db_session, review_payload(AppsId=1002, Token="student-two-token", Rating=2), resolver
    )
    review_service.add_review(db_session, review_payload(CourseId=2, Rating=4), resolver)

    assert _average(db_session) == pytest.approx(11 / 3)
    assert _average(db_session, professor_id=2) == NO_RATING


def test_blank_comment_stored_as_none(db_session, setup_data, resolver, review_payload):
    result = review_service.add_review(db_session, review_payload(Comments="   "), resolver)

    assert db_session.get(Review, result["review_id"]).comments is None


def test_duplicate_review_rejected(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(Rating=5), resolver)

    with pytest.raises(Conflict):
        review_service.add_review(db_session, review_payload(Rating=1), resolver)

    # First review and its average are untouched
    assert _stored_ratings(db_session) == [5]
    assert _average(db_session) == 5.0


def test_concurrent_duplicate_rejected_by_unique_constraint(
    monkeypatch, db_session, setup_data, resolver, review_payload
):
    review_service.add_review(db_session, review_payload(Rating=5), resolver)
    # Second submission slips past the lookup, as if both raced it
    monkeypatch.setattr(review_crud, "find_review", lambda *args, **kwargs: None)

    with pytest.raises(Conflict):
        review_service.add_review(db_session, review_payload(Rating=1), resolver)

    assert _stored_ratings(db_session) == [5]
    assert _average(db_session) == 5.0


def test_same_user_may_review_other_course_or_professor(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(), resolver)
    review_service.add_review(db_session, review_payload(CourseId=2), resolver)
    review_service.add_review(db_session, review_payload(ProfessorId=2), resolver)

    assert db_session.query(Review).count() == 3


def test_wrong_token_unauthorized(db_session, setup_data, resolver, review_payload):
    with pytest.raises(Unauthorized):
        review_service.add_review(db_session, review_payload(Token="not-the-token"), resolver)

    assert db_session.query(Review).count() == 0


def test_unknown_apps_id_unauthorized(db_session, setup_data, resolver, review_payload):
    with pytest.raises(Unauthorized):
        review_service.add_review(db_session, review_payload(AppsId=4242), resolver)


def test_missing_course_not_found(db_session, setup_data, resolver, review_payload):
    with pytest.raises(NotFound) as exc_info:
        review_service.add_review(db_session, review_payload(CourseId=99), resolver)

    assert exc_info.value.entity == "Course"


def test_missing_professor_not_found(db_session, setup_data, resolver, review_payload):
    with pytest.raises(NotFound) as exc_info:
        review_service.add_review(db_session, review_payload(ProfessorId=99), resolver)

    assert exc_info.value.entity == "Professor"


@pytest.mark.parametrize("bad_rating", [0, 6])
def test_rating_out_of_bounds_rejected(db_session, setup_data, resolver, review_payload, bad_rating):
    with pytest.raises(ValidationError) as exc_info:
        review_service.add_review(db_session, review_payload(Rating=bad_rating), resolver)

    assert exc_info.value.fields == ["Rating"]
    assert _average(db_session) == NO_RATING


def test_missing_fields_listed(db_session, setup_data, resolver, review_payload):
    payload = review_payload()
    del payload["CourseId"]
    del payload["Token"]

    with pytest.raises(ValidationError) as exc_info:
        review_service.add_review(db_session, payload, resolver)

    assert set(exc_info.value.fields) == {"CourseId", "Token"}


def test_long_comment_rejected(db_session, setup_data, resolver, review_payload):
    with pytest.raises(ValidationError) as exc_info:
        review_service.add_review(db_session, review_payload(Comments="x" * 1001), resolver)

    assert exc_info.value.fields == ["Comments"]


def test_rating_bounds_follow_settings(db_session, setup_data, resolver, review_payload):
    check = next(c for c in Review.__table__.constraints if c.name == "check_rating_range")
    assert str(check.sqltext) == f"rating >= {settings.MIN_RATING} AND rating <= {settings.MAX_RATING}"
    assert list(rating.rating_distribution([])) == list(range(settings.MIN_RATING, settings.MAX_RATING + 1))

    with pytest.raises(ValidationError):
        review_service.add_review(db_session, review_payload(Rating=settings.MAX_RATING + 1), resolver)
    with pytest.raises(ValidationError):
        review_service.add_review(
            db_session, review_payload(Comments="x" * (settings.MAX_COMMENT_LENGTH + 1)), resolver
        )

    result = review_service.add_review(
        db_session,
        review_payload(Rating=settings.MAX_RATING, Comments="x" * settings.MAX_COMMENT_LENGTH),
        resolver,
    )
    assert result["professor_average"] == settings.MAX_RATING


# ======================
# REMOVE REVIEW
# ======================

def test_remove_only_review_resets_sentinel(db_session, setup_data, resolver, review_payload):
    result = review_service.add_review(db_session, review_payload(Rating=3), resolver)

    review_service.remove_review(db_session, result["review_id"])

    assert db_session.get(Review, result["review_id"]) is None
    assert _average(db_session) == NO_RATING


def test_add_then_remove_restores_average(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(Rating=5), resolver)
    review_service.add_review(
        db_session, review_payload(AppsId=1002, Token="student-two-token", Rating=2), resolver
    )
    before = _average(db_session)

    added = review_service.add_review(db_session, review_payload(CourseId=2, Rating=1), resolver)
    assert _average(db_session) != before

    review_service.remove_review(db_session, added["review_id"])
    assert _average(db_session) == pytest.approx(before)


def test_remove_missing_review_not_found(db_session, setup_data):
    with pytest.raises(NotFound):
        review_service.remove_review(db_session, 12345)


def test_remove_review_deleted_while_waiting_for_lock(
    monkeypatch, session_factory, db_session, setup_data, resolver, review_payload
):
    review_service.add_review(db_session, review_payload(Rating=5), resolver)
    result = review_service.add_review(db_session, review_payload(CourseId=2, Rating=1), resolver)
    review_id = result["review_id"]
    lock_professor = professor_crud.get_professor_for_update

    def delete_then_lock(db, professor_id):
        # A concurrent request removes the review before the lock is granted
        other = session_factory()
        try:
            other.query(Review).filter(Review.id == review_id).delete()
            other.commit()
        finally:
            other.close()
        return lock_professor(db, professor_id)

    monkeypatch.setattr(professor_crud, "get_professor_for_update", delete_then_lock)

    with pytest.raises(NotFound) as exc_info:
        review_service.remove_review(db_session, review_id)

    assert exc_info.value.entity == "Review"
    assert _stored_ratings(db_session) == [5]


def test_average_matches_stored_reviews_after_mixed_sequence(db_session, setup_data, resolver):
    extra_courses = [Course(id=10 + i, name=f"Course {i}", type=CourseType.ELECTIVE) for i in range(3)]
    db_session.add_all(extra_courses)
    students = [(2000 + i, f"student-token-{i}") for i in range(4)]
    for apps_id, token in students:
        issue_user_auth(db_session, apps_id=apps_id, token=token)
    db_session.commit()

    rng = random.Random(7)
    live_review_ids = []
    for step in range(30):
        if live_review_ids and rng.random() < 0.35:
            review_id = live_review_ids.pop(rng.randrange(len(live_review_ids)))
            review_service.remove_review(db_session, review_id)
        else:
            apps_id, token = rng.choice(students)
            payload = {
                "AppsId": apps_id,
                "Token": token,
                "CourseId": rng.choice(extra_courses).id,
                "ProfessorId": rng.choice([1, 2]),
                "Rating": rng.randint(1, 5),
            }
            try:
                result = review_service.add_review(db_session, payload, resolver)
            except Conflict:
                continue
            live_review_ids.append(result["review_id"])

        for professor_id in (1, 2):
            ratings = _stored_ratings(db_session, professor_id)
            expected = mean(ratings) if ratings else NO_RATING
            assert _average(db_session, professor_id) == pytest.approx(expected)


# ======================
# COURSE REMOVAL
# ======================

def test_remove_course_refreshes_professor_ratings(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(Rating=5), resolver)
    review_service.add_review(db_session, review_payload(CourseId=2, Rating=1), resolver)
    review_service.add_review(db_session, review_payload(ProfessorId=2, Rating=2), resolver)

    review_service.remove_course(db_session, 1)

    assert db_session.get(Course, 1) is None
    assert _average(db_session, 1) == 1.0
    assert _average(db_session, 2) == NO_RATING


def test_remove_missing_course_not_found(db_session, setup_data):
    with pytest.raises(NotFound):
        review_service.remove_course(db_session, 99)


# ======================
# LISTINGS
# ======================

def test_professor_reviews_oldest_first(db_session, setup_data, resolver, review_payload):
    first = review_service.add_review(db_session, review_payload(Rating=5), resolver)
    second = review_service.add_review(db_session, review_payload(CourseId=2, Rating=3), resolver)

    page = review_service.professor_reviews(db_session, 1, page=1, items_per_page=20)

    assert [r.id for r in page.results] == [first["review_id"], second["review_id"]]
    assert page.results[0].professor_name == "Ada Lovelace"
    assert page.results[1].course_name == "Compilers"
    assert page.total_elements == 2
    assert page.total_pages == 1


def test_professor_without_reviews_not_found(db_session, setup_data):
    with pytest.raises(NotFound):
        review_service.professor_reviews(db_session, 2, page=1, items_per_page=20)


def test_professor_reviews_page_out_of_range(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(), resolver)

    with pytest.raises(InvalidPage):
        review_service.professor_reviews(db_session, 1, page=2, items_per_page=20)


def test_student_reviews_only_own(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(), resolver)
    review_service.add_review(db_session, review_payload(ProfessorId=2), resolver)
    review_service.add_review(
        db_session, review_payload(AppsId=1002, Token="student-two-token"), resolver
    )

    page = review_service.student_reviews(db_session, 1001, page=1, items_per_page=1)

    assert page.total_elements == 2
    assert page.total_pages == 3
    assert len(page.results) == 1

    with pytest.raises(NotFound):
        review_service.student_reviews(db_session, 5555, page=1, items_per_page=10)


def test_top_rated_excludes_unrated_professors(db_session, setup_data, resolver, review_payload):
    db_session.add(Professor(id=3, full_name="Grace Hopper"))
    db_session.commit()
    review_service.add_review(db_session, review_payload(Rating=2), resolver)
    review_service.add_review(db_session, review_payload(ProfessorId=3, Rating=5), resolver)

    page = review_service.top_rated_professors(db_session, page=1, items_per_page=20)

    assert [p.id for p in page.results] == [3, 1]
    assert page.total_elements == 2

    with pytest.raises(InvalidPage):
        review_service.top_rated_professors(db_session, page=2, items_per_page=20)


def test_top_rated_empty_first_page(db_session, setup_data):
    page = review_service.top_rated_professors(db_session, page=1, items_per_page=20)

    assert page.results == []
    assert page.total_pages == 1


# ======================
# MAINTENANCE
# ======================

def test_recalculate_all_repairs_stale_averages(db_session, setup_data, resolver, review_payload):
    review_service.add_review(db_session, review_payload(Rating=4), resolver)
    professor = db_session.get(Professor, 1)
    professor.average_rating = 1.0
    other = db_session.get(Professor, 2)
    other.average_rating = 3.0
    db_session.commit()

    result = rating.recalculate_all(db_session)

    assert result["total_professors"] == 2
    assert result["updated_count"] == 2
    assert _average(db_session, 1) == 4.0
    assert _average(db_session, 2) == NO_RATING
