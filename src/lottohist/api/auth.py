"""Auth API — registration, login, current user.

- POST /api/register → create account, return token
- POST /api/login → email/password → token
- GET /api/me → current user's profile
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lottohist.auth.dependencies import get_current_user
from lottohist.auth.jwt import Identity, TokenService, get_token_service
from lottohist.config import settings
from lottohist.db.engine import get_db
from lottohist.errors import NotFound
from lottohist.schemas.auth import AuthResponse, Credentials, MeResponse, PublicUser
from lottohist.services.user_service import UserService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db, bcrypt_rounds=settings.bcrypt_rounds)


@router.post("/register", response_model=AuthResponse)
async def register(
    body: Credentials,
    svc: UserService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Create a new user account and log it in."""
    user = await svc.create_user(body.email, body.password)
    return AuthResponse(
        message="Registered successfully",
        token=tokens.issue(user.id, user.email),
        user=PublicUser.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: Credentials,
    svc: UserService = Depends(_svc),
    tokens: TokenService = Depends(get_token_service),
):
    """Login with email and password → session token."""
    user = await svc.authenticate(body.email, body.password)
    return AuthResponse(
        message="Login successful",
        token=tokens.issue(user.id, user.email),
        user=PublicUser.model_validate(user),
    )


@router.get("/me", response_model=MeResponse)
async def get_me(
    identity: Identity = Depends(get_current_user),
    svc: UserService = Depends(_svc),
):
    """Get the current authenticated user's profile."""
    profile = await svc.find_by_id(identity.user_id)
    if profile is None:
        raise NotFound("User not found")
    return MeResponse(user=profile)
