# courseprofs/models/review.py
from sqlalchemy import (
    Column, Integer, Float, Text, ForeignKey, TIMESTAMP, func,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from courseprofs.config import settings
from courseprofs.database import Base

RATING_RANGE_CHECK = f"rating >= {settings.MIN_RATING} AND rating <= {settings.MAX_RATING}"


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    professor_id = Column(Integer, ForeignKey("professors.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    user_auth_id = Column(Integer, ForeignKey("user_auths.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    users_subject_score = Column(Float)
    comments = Column(Text)
    created_at = Column(TIMESTAMP, server_default=func.now())

    # Constraints
    __table_args__ = (
        CheckConstraint(RATING_RANGE_CHECK, name="check_rating_range"),
        UniqueConstraint("user_auth_id", "professor_id", "course_id", name="uq_review_author_professor_course"),
    )

    # Relationships
    professor = relationship("Professor", back_populates="reviews")
    course = relationship("Course", back_populates="reviews")
    user_auth = relationship("UserAuth", back_populates="reviews")
