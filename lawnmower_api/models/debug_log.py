"""Debug log models for client-submitted log batches."""

from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class DebugLogEntry:
    """One normalized row for the debug log store."""

    session_id: Optional[str]
    user_id: Optional[str]
    timestamp: str
    message: Optional[str]
    level: Optional[str]


class DebugLogRequest(BaseModel):
    """Incoming log batch from the frontend."""

    model_config = ConfigDict(populate_by_name=True)

    logs: List[Any] = Field(min_length=1)
    session_id: Optional[Any] = Field(default=None, alias="sessionId")
    user_id: Optional[Any] = Field(default=None, alias="userId")
