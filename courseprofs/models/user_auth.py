# courseprofs/models/user_auth.py
from sqlalchemy import Column, Integer, BigInteger, String, TIMESTAMP, func
from sqlalchemy.orm import relationship
from courseprofs.database import Base


class UserAuth(Base):
    """Maps an external application identity (AppsId) to a review author."""

    __tablename__ = "user_auths"

    id = Column(Integer, primary_key=True, index=True)
    apps_id = Column(BigInteger, unique=True, index=True, nullable=False)
    token_hash = Column(String(255), nullable=False)
    created_at = Column(TIMESTAMP, server_default=func.now())

    reviews = relationship("Review", back_populates="user_auth")
