# courseprofs/models/course.py
import enum

from sqlalchemy import Column, Integer, String, Enum, TIMESTAMP, func
from sqlalchemy.orm import relationship
from courseprofs.database import Base


class CourseType(str, enum.Enum):
    COMPULSORY = "compulsory"
    ELECTIVE = "elective"
    LABORATORY = "laboratory"


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    type = Column(
        Enum(CourseType, name="course_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=CourseType.COMPULSORY,
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    reviews = relationship("Review", back_populates="course", cascade="save-update, merge, delete")
