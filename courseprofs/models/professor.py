# courseprofs/models/professor.py
from sqlalchemy import Column, Integer, String, Float, TIMESTAMP, func
from sqlalchemy.orm import relationship
from courseprofs.database import Base

# Stored in average_rating while a professor has no reviews
NO_RATING = -1.0


class Professor(Base):
    __tablename__ = "professors"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(150), nullable=False)
    mail = Column(String(255))
    phone = Column(String(30))
    office = Column(String(100))
    e_office = Column(String(255))
    average_rating = Column(Float, default=NO_RATING, server_default=str(NO_RATING), nullable=False, index=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    # Reviews are created and removed by the review service, never by
    # mutating this collection. Deleting a professor deletes its reviews.
    reviews = relationship(
        "Review",
        back_populates="professor",
        cascade="save-update, merge, delete",
        order_by="Review.created_at",
    )
