# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: embeddings.py
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from api.dependencies import get_sync_service
from api.schemas.embeddings import (
    JobListResponse,
    JobOut,
    JobResponse,
    RecoverRequest,
    RecoverResponse,
    SyncRequest,
    SyncResponse,
    SyncResult,
)
from catalog.CatalogModels import JobStatus
from services.InventorySyncService import InventorySyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/embeddings", tags=["embeddings"])


@router.post("/sync", response_model=SyncResponse)
def post_embeddings_sync(
        req: SyncRequest,
        background_tasks: BackgroundTasks,
        svc: InventorySyncService = Depends(get_sync_service),
) -> SyncResponse:
    logger.info("POST /api/embeddings/sync (start) mode=%s background=%s", req.mode, req.background)

    if req.background:
        job = svc.start_bulk_job()
        background_tasks.add_task(
            svc.run_bulk_sync,
            req.batch_size,
            req.inter_batch_delay,
            mode=req.mode,
            job_id=job.id,
        )
        return SyncResponse(job_id=job.id, status=job.status, message="Embedding sync started")

    result = svc.run_bulk_sync(req.batch_size, req.inter_batch_delay, mode=req.mode)
    job = svc.catalog.get_embedding_job(result.job_id)
    status = job.status if job else (JobStatus.COMPLETED.value if result.success else JobStatus.FAILED.value)

    logger.info("POST /api/embeddings/sync (done) %s", result.message)
    return SyncResponse(
        success=result.success,
        job_id=result.job_id,
        status=status,
        message=result.message,
        result=SyncResult(**{k: v for k, v in result.to_dict().items() if k in SyncResult.model_fields}),
    )


@router.get("/jobs", response_model=JobListResponse)
def get_embedding_jobs(
        status: Optional[JobStatus] = Query(None),
        limit: int = Query(20, ge=1, le=200),
        svc: InventorySyncService = Depends(get_sync_service),
) -> JobListResponse:
    jobs = svc.catalog.list_embedding_jobs(status=status, limit=limit)
    return JobListResponse(jobs=[JobOut(**j.to_dict()) for j in jobs])


@router.get("/jobs/{job_id}", response_model=JobResponse)
def get_embedding_job(
        job_id: str,
        svc: InventorySyncService = Depends(get_sync_service),
) -> JobResponse:
    job = svc.catalog.get_embedding_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail=f"Embedding job not found: {job_id}")
    return JobResponse(job=JobOut(**job.to_dict()))


@router.post("/recover", response_model=RecoverResponse)
def post_recover_stale_jobs(
        req: RecoverRequest,
        svc: InventorySyncService = Depends(get_sync_service),
) -> RecoverResponse:
    logger.info("POST /api/embeddings/recover max_age_minutes=%d", req.max_age_minutes)
    return RecoverResponse(failed_job_ids=svc.recover_stale_jobs(req.max_age_minutes))
