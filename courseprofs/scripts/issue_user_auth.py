"""
Register an AppsId/Token pair so its owner can submit reviews.

Usage:
  APPS_ID=1234 APPS_TOKEN="<token>" python -m courseprofs.scripts.issue_user_auth
"""

import os
import sys

from courseprofs.database import Base, SessionLocal, engine
from courseprofs.utils.security import issue_user_auth

MIN_TOKEN_LENGTH = 16


def _required_env(key: str) -> str:
    value = os.getenv(key, "").strip()
    if not value:
        raise ValueError(f"Missing required environment variable: {key}")
    return value


def issue() -> int:
    try:
        raw_apps_id = _required_env("APPS_ID")
        token = _required_env("APPS_TOKEN")

        if not raw_apps_id.isdigit():
            raise ValueError("APPS_ID must be a non-negative integer.")
        if len(token) < MIN_TOKEN_LENGTH:
            raise ValueError(f"APPS_TOKEN must be at least {MIN_TOKEN_LENGTH} characters.")

        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            user_auth = issue_user_auth(db, int(raw_apps_id), token)
            db.commit()
            print(f"UserAuth created for AppsId {user_auth.apps_id}")
            return 0
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
    except Exception as exc:
        print(f"Issuing UserAuth failed: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(issue())
