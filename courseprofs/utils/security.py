import logging
from abc import ABC, abstractmethod
from typing import NamedTuple

from fastapi import Depends
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from courseprofs import models
from courseprofs.config import settings
from courseprofs.database import get_db
from courseprofs.errors import Conflict, Unauthorized

logger = logging.getLogger(__name__)


# ==========================
# TOKEN HASHING
# ==========================

token_context = CryptContext(
    schemes=settings.TOKEN_HASH_SCHEMES,
    deprecated="auto"
)


def hash_token(token: str) -> str:
    return token_context.hash(token)


def verify_token(plain_token: str, token_hash: str) -> bool:
    return token_context.verify(plain_token, token_hash)


# ==========================
# CALLER IDENTITY
# ==========================

class CallerCredentials(NamedTuple):
    apps_id: int
    token: str


class CallerResolver(ABC):
    """
    Resolves the credentials sent with a request to a UserAuth record.

    The review service only depends on this interface, so the AppsId/Token
    scheme can be replaced without touching review logic.
    """

    @abstractmethod
    def resolve_caller(self, credentials: CallerCredentials) -> models.UserAuth:
        ...


class UserAuthResolver(CallerResolver):
    """Looks up UserAuth by AppsId and checks the token against its hash."""

    def __init__(self, db: Session):
        self.db = db

    def resolve_caller(self, credentials: CallerCredentials) -> models.UserAuth:
        user_auth = self.db.query(models.UserAuth).filter(
            models.UserAuth.apps_id == credentials.apps_id
        ).first()

        if user_auth is None or not credentials.token:
            logger.warning("Unknown caller with AppsId %s", credentials.apps_id)
            raise Unauthorized()

        if not verify_token(credentials.token, user_auth.token_hash):
            logger.warning("Token mismatch for AppsId %s", credentials.apps_id)
            raise Unauthorized()

        return user_auth


def get_caller_resolver(db: Session = Depends(get_db)) -> CallerResolver:
    return UserAuthResolver(db)


# ==========================
# ISSUING CREDENTIALS
# ==========================

def issue_user_auth(db: Session, apps_id: int, token: str) -> models.UserAuth:
    """Register an AppsId/token pair. The caller commits."""
    if not token:
        raise ValueError("Token must not be empty")

    existing = db.query(models.UserAuth).filter(
        models.UserAuth.apps_id == apps_id
    ).first()
    if existing:
        raise Conflict(f"AppsId {apps_id} is already registered")

    user_auth = models.UserAuth(apps_id=apps_id, token_hash=hash_token(token))
    db.add(user_auth)
    db.flush()
    return user_auth
