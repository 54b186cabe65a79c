"""FastAPI auth dependencies.

Used as Depends() in route handlers to extract and validate the
caller's identity from an "Authorization: Bearer <token>" header.
Any failure short-circuits the request with 401 before handler logic.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header

from lottohist.auth.jwt import Identity, TokenError, TokenService, get_token_service
from lottohist.errors import Unauthorized

logger = structlog.get_logger()


def get_current_user(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """Resolve the bearer token to an Identity or raise Unauthorized."""
    if not authorization:
        raise Unauthorized("Authentication required")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token:
        raise Unauthorized("Authentication required")

    try:
        return tokens.verify(token)
    except TokenError as e:
        logger.info("auth.token_rejected", reason=str(e))
        raise Unauthorized("Invalid or expired token")
