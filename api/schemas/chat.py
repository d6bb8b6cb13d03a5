# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-28
# Description: api/schemas/chat.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from api.schemas.common import Envelope
from api.schemas.search import ProductHit


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1)
    is_voice_input: bool = False
    session_id: str = Field("default", min_length=1, max_length=128)


class ChatResponse(Envelope):
    response: str
    intent: str
    session_id: str
    is_voice_input: bool = False
    products: List[ProductHit] = Field(default_factory=list)


class ClearHistoryResponse(Envelope):
    session_id: str
    message: str
