"""
Health check endpoint for deployment monitoring.
"""
import os
from pathlib import Path
from fastapi import APIRouter, Depends

from remotetrail.core.errors import RecordStoreError
from remotetrail.core.timeutil import to_iso, utc_now
from remotetrail.services.job_service import JobService, get_job_service

router = APIRouter(prefix="/health", tags=["Health"])


def _directory_writable(directory: Path) -> bool:
    # The uploads directory is created lazily, so check the nearest existing parent
    candidate = directory
    while not candidate.exists() and candidate != candidate.parent:
        candidate = candidate.parent
    return os.access(candidate, os.W_OK)


@router.get("")
def health_check(service: JobService = Depends(get_job_service)):
    """
    Health check endpoint for deployment monitoring.

    Returns 200 with "degraded" status if the jobs document can't be read or
    the uploads directory isn't writable.
    """
    status = "healthy"

    try:
        job_count = len(service.list_jobs())
        store_status = "ok"
    except RecordStoreError as e:
        job_count = None
        store_status = f"error: {e.message}"
        status = "degraded"

    uploads_ok = _directory_writable(service.logos.directory)
    if not uploads_ok:
        status = "degraded"

    return {
        "status": status,
        "timestamp": to_iso(utc_now()),
        "jobs_store": store_status,
        "jobs": job_count,
        "uploads": "writable" if uploads_ok else "not writable",
        "version": "1.0.0",
    }
