"""Account registration, credential checks and token issuing."""
from __future__ import annotations

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from productiviflow.core.security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    verify_password,
)
from productiviflow.db.models.user import User
from productiviflow.schemas import Token, UserCreate
from productiviflow.utils.exceptions import DuplicateEmailError, InvalidCredentialsError

DUPLICATE_EMAIL_MESSAGE = "A user with this email already exists."
BAD_CREDENTIALS_MESSAGE = "Incorrect email or password"


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def _find_by_email(self, email: str) -> User | None:
        return self.db.scalar(select(User).where(User.email == email.lower()))

    def register_user(self, payload: UserCreate) -> User:
        """Create an account with zero points and no streak.

        Emails are stored lowercased. The unique index on ``email`` settles
        a race between two registrations that both passed the lookup.
        """

        if self._find_by_email(payload.email) is not None:
            raise DuplicateEmailError(DUPLICATE_EMAIL_MESSAGE)

        user = User(
            email=payload.email.lower(),
            name=payload.name,
            hashed_password=get_password_hash(payload.password),
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise DuplicateEmailError(DUPLICATE_EMAIL_MESSAGE) from exc

        self.db.refresh(user)
        logger.info("User registered", user_id=str(user.id))
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        user = self._find_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise InvalidCredentialsError(BAD_CREDENTIALS_MESSAGE)
        return user

    def create_tokens(self, user: User) -> Token:
        return Token(
            access_token=create_access_token(user.id),
            refresh_token=create_refresh_token(user.id),
        )


__all__ = ["AuthService"]
