from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api_dashboard import models
from api_dashboard.auth import AuthConfigurationError, issue_access_token
from api_dashboard.config import Settings
from api_dashboard.errors import AuthenticationFailedError, ConflictError
from api_dashboard.passwords import hash_password, verify_password
from api_dashboard.validators import normalize_email

logger = logging.getLogger("api_dashboard.accounts")

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


@dataclass(frozen=True)
class IssuedSession:
    token: str
    user: models.User


class AccountService:
    def __init__(self, db: Session, settings: Settings) -> None:
        self.db = db
        self.settings = settings

    def _issue(self, user: models.User) -> IssuedSession:
        token = issue_access_token(
            user.id,
            secret=self.settings.jwt_secret,
            ttl_seconds=self.settings.jwt_ttl_seconds,
        )
        return IssuedSession(token=token, user=user)

    def find_by_email(self, email: str) -> models.User | None:
        return self.db.scalar(select(models.User).where(models.User.email == normalize_email(email)))

    def get_user(self, user_id: int) -> models.User | None:
        return self.db.get(models.User, user_id)

    def register(self, *, name: str, email: str, password: str) -> IssuedSession:
        normalized_email = normalize_email(email)
        if self.find_by_email(normalized_email) is not None:
            raise ConflictError("Email is already registered.")

        user = models.User(
            name=name.strip(),
            email=normalized_email,
            password_hash=hash_password(password, rounds=self.settings.password_hash_rounds),
        )
        self.db.add(user)
        try:
            self.db.flush()
            # The token is signed before commit so a signing failure leaves no account behind.
            issued = self._issue(user)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Email is already registered.") from exc
        except AuthConfigurationError:
            self.db.rollback()
            raise

        self.db.refresh(user)
        logger.info("user_registered user_id=%s", user.id)
        return issued

    def login(self, *, email: str, password: str) -> IssuedSession:
        user = self.find_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise AuthenticationFailedError(INVALID_CREDENTIALS_MESSAGE)
        return self._issue(user)
