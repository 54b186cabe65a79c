"""JWT session token creation and verification.

A session token is an HS256-signed JWT carrying the user id (sub) and
email, valid for a fixed window (7 days by default) from issuance.
TokenService is built once from Settings and shared by all requests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt

from lottohist.config import Settings, settings


class TokenError(Exception):
    """Raised when token verification fails."""


class InvalidToken(TokenError):
    """Bad signature or malformed token."""


class ExpiredToken(TokenError):
    """Token is past its validity window."""


@dataclass(frozen=True)
class Identity:
    """The authenticated user a token was issued to."""

    user_id: int
    email: str


class TokenService:
    """Issues and verifies session tokens with a fixed signing key."""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = 7):
        self._secret = secret
        self._algorithm = algorithm
        self.validity = timedelta(days=expire_days)

    @classmethod
    def from_settings(cls, config: Settings) -> "TokenService":
        return cls(
            secret=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            expire_days=config.token_expire_days,
        )

    def issue(
        self,
        user_id: int,
        email: str,
        expires_in: Optional[timedelta] = None,
    ) -> str:
        """Create a signed token for a user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + (expires_in if expires_in is not None else self.validity),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """Verify a token and return the identity it was issued to.

        Raises ExpiredToken past the validity window, InvalidToken for
        anything else that doesn't check out.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredToken("Token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}")

        try:
            user_id = int(payload["sub"])
        except (TypeError, ValueError):
            raise InvalidToken("Invalid token: bad subject")
        return Identity(user_id=user_id, email=payload.get("email", ""))


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide TokenService (FastAPI dependency)."""
    return TokenService.from_settings(settings)
