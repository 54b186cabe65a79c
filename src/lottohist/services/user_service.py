"""User service — the credential store.

Owns the users table: registration with bcrypt-hashed passwords,
lookups by email and id, and password authentication. Routes call
this service; it never builds HTTP responses itself.
"""

from functools import lru_cache

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lottohist.auth.password import DEFAULT_ROUNDS, hash_password, verify_password
from lottohist.db.models import User
from lottohist.errors import (
    AuthenticationFailure,
    DuplicateEmail,
    InternalError,
    ValidationError,
)
from lottohist.schemas.auth import UserProfile

logger = structlog.get_logger()


def _require_credentials(email: str | None, password: str | None) -> None:
    if not email or not password:
        raise ValidationError("Email and password are required")


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """A throwaway hash at the configured cost, checked for unknown emails."""
    return hash_password("lottohist-no-such-user", rounds=rounds)


class UserService:
    """Business logic for user accounts."""

    def __init__(self, db: AsyncSession, bcrypt_rounds: int = DEFAULT_ROUNDS):
        self.db = db
        self.bcrypt_rounds = bcrypt_rounds

    async def create_user(self, email: str | None, password: str | None) -> User:
        """Register a new account.

        The email pre-check gives a clean error in the common case; the
        unique constraint settles concurrent registrations, so exactly
        one wins and the rest see DuplicateEmail.
        """
        _require_credentials(email, password)
        if await self.find_by_email(email) is not None:
            raise DuplicateEmail()

        user = User(
            email=email,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateEmail()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("db.error", op="create_user", error=str(e))
            raise InternalError()

        logger.info("auth.registered", user_id=user.id)
        return user

    async def find_by_email(self, email: str) -> User | None:
        try:
            result = await self.db.execute(select(User).where(User.email == email))
        except SQLAlchemyError as e:
            logger.error("db.error", op="find_by_email", error=str(e))
            raise InternalError()
        return result.scalars().first()

    async def find_by_id(self, user_id: int) -> UserProfile | None:
        """Profile projection; the password hash is never selected."""
        try:
            result = await self.db.execute(
                select(User.id, User.email, User.created_at).where(User.id == user_id)
            )
        except SQLAlchemyError as e:
            logger.error("db.error", op="find_by_id", error=str(e))
            raise InternalError()
        row = result.first()
        if row is None:
            return None
        return UserProfile.model_validate(row)

    async def authenticate(self, email: str | None, password: str | None) -> User:
        """Check email and password.

        Unknown email and wrong password raise the same
        AuthenticationFailure so callers can't tell which was wrong.
        """
        _require_credentials(email, password)
        user = await self.find_by_email(email)
        if user is None:
            # Response time must not reveal whether the account exists.
            verify_password(password, _dummy_hash(self.bcrypt_rounds))
            logger.info("auth.login_failed")
            raise AuthenticationFailure()
        if not verify_password(password, user.password_hash):
            logger.info("auth.login_failed")
            raise AuthenticationFailure()
        return user
