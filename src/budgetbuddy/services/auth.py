"""Authentication and user management services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import select

from ..errors import ConstraintViolation, InvalidInput
from ..infra.database import SessionFactory
from ..infra.repositories.base import translate_errors
from ..logging_config import get_logger
from ..models.user import User

_hasher = PasswordHasher()
logger = get_logger(__name__)


def get_user_by_username(username: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by username."""
    username = username.strip()
    with translate_errors("look up user"):
        with session_factory() as session:
            user = session.exec(select(User).where(User.username == username)).first()
            if user:
                session.expunge(user)
            return user


def create_user(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with hashed password."""

    username = (username or "").strip()
    if not username:
        raise InvalidInput("Username is required")
    if not password:
        raise InvalidInput("Password cannot be empty")
    password_hash = _hasher.hash(password)
    with translate_errors("create user"):
        with session_factory() as session:
            existing = session.exec(select(User).where(User.username == username)).first()
            if existing:
                raise ConstraintViolation("Username already exists")
            user = User(username=username, password_hash=password_hash)
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
    logger.info(f"User created: {user.username}")
    return user


def authenticate(
    *,
    username: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Validate credentials and return the user when correct."""

    username = (username or "").strip()
    if not username:
        return None
    with translate_errors("authenticate"):
        with session_factory() as session:
            user = session.exec(select(User).where(User.username == username)).first()
            if user is None:
                return None
            try:
                _hasher.verify(user.password_hash, password)
            except (VerifyMismatchError, InvalidHash, VerificationError):
                logger.warning(f"Failed sign-in for {username}")
                return None

            user.last_login = datetime.now(timezone.utc)
            session.add(user)
            session.commit()
            session.refresh(user)
            session.expunge(user)
            return user


__all__ = ["authenticate", "create_user", "get_user_by_username"]
