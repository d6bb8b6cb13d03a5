# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: api/schemas/embeddings.py
# -----------------------------------------------------------------------------
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from api.schemas.common import Envelope


class SyncRequest(BaseModel):
    batch_size: Optional[int] = Field(None, ge=1, le=100)
    inter_batch_delay: Optional[float] = Field(None, ge=0, le=60)
    mode: Literal["full", "incremental"] = "full"
    # run in the background and return the PENDING job id immediately
    background: bool = False


class SyncResult(BaseModel):
    mode: str
    total: int
    processed: int
    successful: int
    failed: int
    skipped: int
    added: int
    updated: int
    removed: int
    error: Optional[str] = None
    failures: List[Dict[str, str]] = Field(default_factory=list)


class SyncResponse(Envelope):
    job_id: str
    status: str
    message: str
    result: Optional[SyncResult] = None


class JobOut(BaseModel):
    id: str
    status: str
    job_type: str
    product_id: Optional[str] = None
    error_message: Optional[str] = None
    total_items: int
    processed_items: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    completed_at: Optional[str] = None


class JobResponse(Envelope):
    job: JobOut


class JobListResponse(Envelope):
    jobs: List[JobOut]


class RecoverRequest(BaseModel):
    max_age_minutes: int = Field(60, ge=1)


class RecoverResponse(Envelope):
    failed_job_ids: List[str]
