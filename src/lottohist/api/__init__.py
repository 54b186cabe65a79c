"""API route aggregation.

All routers registered here get mounted in main.py. Auth is applied
per route with Depends(get_current_user); register, login and the
health checks are open.
"""

from fastapi import APIRouter

from lottohist.api.auth import router as auth_router
from lottohist.api.health import router as health_router
from lottohist.api.histories import router as histories_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(histories_router, tags=["histories"])
