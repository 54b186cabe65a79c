"""History service — the history store.

Append-only storage of computation runs per user. The config blob is
serialized to JSON text on the way in and handed back untouched.
"""

import json
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lottohist.db.models import History
from lottohist.errors import InternalError, ValidationError

logger = structlog.get_logger()

DEFAULT_HISTORY_LIMIT = 20
MAX_HISTORY_LIMIT = 100


def _missing(value: Any) -> bool:
    return value is None or value == ""


def _serialize_summary(summary: Any) -> str | None:
    if summary is None or isinstance(summary, str):
        return summary
    return json.dumps(summary, ensure_ascii=False)


class HistoryService:
    """Business logic for saved computation histories."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        user_id: int,
        mode: Any,
        top_digits_mode: Any,
        config: dict[str, Any],
        summary: Any = None,
    ) -> int:
        """Persist one history row for user_id and return its id.

        mode, top_digits_mode and config["historyTop"] must be present;
        otherwise ValidationError is raised and nothing is written.
        """
        if _missing(mode) or _missing(top_digits_mode) or _missing(config.get("historyTop")):
            raise ValidationError("mode, topDigitsMode and historyTop are required")

        history = History(
            user_id=user_id,
            mode=str(mode),
            top_digits_mode=str(top_digits_mode),
            config=json.dumps(config, ensure_ascii=False),
            summary=_serialize_summary(summary),
        )
        self.db.add(history)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("db.error", op="create_history", error=str(e))
            raise InternalError()

        logger.info("history.created", user_id=user_id, history_id=history.id)
        return history.id

    async def list_recent(
        self, user_id: int, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> list[History]:
        """Newest-first histories of one user, at most `limit` of them."""
        limit = max(1, min(limit, MAX_HISTORY_LIMIT))
        q = (
            select(History)
            .where(History.user_id == user_id)
            .order_by(History.created_at.desc(), History.id.desc())
            .limit(limit)
        )
        try:
            result = await self.db.execute(q)
        except SQLAlchemyError as e:
            logger.error("db.error", op="list_histories", error=str(e))
            raise InternalError()
        return list(result.scalars().all())
