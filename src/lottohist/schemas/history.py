"""Pydantic schemas for computation histories.

Clients speak camelCase (historyTop, topDigitsMode, ...). The six
computation parameters are gathered into the config blob that is
stored verbatim as JSON text. Only presence is checked; values pass
through untouched, whatever their JSON type.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from lottohist.schemas._time import as_utc

CONFIG_KEYS = (
    "historyTop",
    "historyBottom",
    "useLastN",
    "weightMode",
    "mode",
    "topDigitsMode",
)


class HistoryCreate(BaseModel):
    mode: Any = None
    top_digits_mode: Any = Field(None, alias="topDigitsMode")
    history_top: Any = Field(None, alias="historyTop")
    history_bottom: Any = Field(None, alias="historyBottom")
    use_last_n: Any = Field(None, alias="useLastN")
    weight_mode: Any = Field(None, alias="weightMode")
    summary: Any = None

    model_config = {"populate_by_name": True}

    def config_blob(self) -> dict[str, Any]:
        """The computation parameters, keyed the way clients send them."""
        data = self.model_dump(by_alias=True, exclude={"summary"})
        return {key: data[key] for key in CONFIG_KEYS}


class HistoryCreated(BaseModel):
    message: str
    history_id: int = Field(alias="historyId")

    model_config = {"populate_by_name": True}


class HistoryRead(BaseModel):
    id: int
    user_id: int
    mode: str
    top_digits_mode: str
    config: str
    summary: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class HistoryList(BaseModel):
    histories: list[HistoryRead]
