"""History API routes.

Both routes require a bearer token and only ever touch the caller's
own rows.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lottohist.auth.dependencies import get_current_user
from lottohist.auth.jwt import Identity
from lottohist.config import settings
from lottohist.db.engine import get_db
from lottohist.schemas.history import (
    HistoryCreate,
    HistoryCreated,
    HistoryList,
    HistoryRead,
)
from lottohist.services.history_service import MAX_HISTORY_LIMIT, HistoryService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> HistoryService:
    return HistoryService(db)


@router.post("/histories", response_model=HistoryCreated)
async def create_history(
    body: HistoryCreate,
    identity: Identity = Depends(get_current_user),
    svc: HistoryService = Depends(_svc),
):
    history_id = await svc.create(
        user_id=identity.user_id,
        mode=body.mode,
        top_digits_mode=body.top_digits_mode,
        config=body.config_blob(),
        summary=body.summary,
    )
    return HistoryCreated(message="History saved", history_id=history_id)


@router.get("/histories", response_model=HistoryList)
async def list_histories(
    limit: int = Query(settings.history_list_limit, ge=1, le=MAX_HISTORY_LIMIT),
    identity: Identity = Depends(get_current_user),
    svc: HistoryService = Depends(_svc),
):
    """The caller's most recent histories, newest first."""
    rows = await svc.list_recent(identity.user_id, limit=limit)
    return HistoryList(histories=[HistoryRead.model_validate(r) for r in rows])
