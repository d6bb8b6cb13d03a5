# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, Optional

from pydantic import BaseModel

from api.schemas.common import Envelope


class HealthResponse(Envelope):
    status: str
    message: str
    services: Optional[Dict[str, Any]] = None


class SmokeTestSummary(BaseModel):
    total: int
    passed: int
    failed: int


class DeepHealthResponse(Envelope):
    status: str
    results: Dict[str, bool]
    summary: SmokeTestSummary
