"""Pytest bootstrap for project imports and shared fixtures."""

from pathlib import Path
import os
import sys

# Ensure project root is on sys.path so `import courseprofs` works
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Keep the application engine off the developer database
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from courseprofs.database import Base
from courseprofs.models import Course, CourseType, Professor
from courseprofs.utils.security import UserAuthResolver, issue_user_auth


@pytest.fixture
def session_factory():
    """In-memory database shared by every connection of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def resolver(db_session):
    return UserAuthResolver(db_session)


@pytest.fixture
def setup_data(db_session):
    """Two professors, two courses and two registered students"""
    professor = Professor(id=1, full_name="Ada Lovelace", mail="ada@uni.edu")
    other_professor = Professor(id=2, full_name="Alan Turing", mail="alan@uni.edu")
    course = Course(id=1, name="Algorithms", type=CourseType.COMPULSORY)
    other_course = Course(id=2, name="Compilers", type=CourseType.ELECTIVE)
    db_session.add_all([professor, other_professor, course, other_course])

    student = issue_user_auth(db_session, apps_id=1001, token="student-one-token")
    other_student = issue_user_auth(db_session, apps_id=1002, token="student-two-token")
    db_session.commit()

    return {
        "professor": professor,
        "other_professor": other_professor,
        "course": course,
        "other_course": other_course,
        "student": student,
        "other_student": other_student,
    }


@pytest.fixture
def review_payload():
    """Builds an AddReviewDto body for student 1001, professor 1, course 1"""
    def _build(**overrides):
        payload = {
            "AppsId": 1001,
            "Token": "student-one-token",
            "CourseId": 1,
            "ProfessorId": 1,
            "Rating": 4,
            "UsersSubjectScore": 8.5,
            "Comments": "Clear lectures",
        }
        payload.update(overrides)
        return payload

    return _build
