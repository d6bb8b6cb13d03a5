# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: api/schemas/common.py
# -----------------------------------------------------------------------------
from datetime import datetime, timezone

from pydantic import BaseModel, Field


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Envelope(BaseModel):
    """Fields every response body carries."""
    success: bool = True
    timestamp: str = Field(default_factory=now_iso)


class ErrorResponse(Envelope):
    success: bool = False
    error: str
