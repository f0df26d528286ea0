"""
Admin table data: every job with its derived status and expiry.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, status

from remotetrail.core.auth_dependency import get_current_admin
from remotetrail.core.errors import JobBoardError
from remotetrail.core.timeutil import utc_now
from remotetrail.schemas.job import AdminJobRow
from remotetrail.services.job_service import JobService, get_job_service, job_status
from remotetrail.services.listing import format_relative_time, format_skills

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

ADMIN_SKILL_PREVIEW = 4


@router.get("/jobs", status_code=status.HTTP_200_OK, response_model=List[AdminJobRow])
def admin_jobs(
    admin: str = Depends(get_current_admin),
    service: JobService = Depends(get_job_service),
):
    """Rows for the admin jobs table, in stored order."""
    try:
        now = utc_now()
        return [
            AdminJobRow(
                index=index,
                id=job["id"],
                title=job.get("title") or "Untitled role",
                company=job.get("company") or "",
                expires_at=job.get("expiresAt"),
                expires=format_relative_time(job.get("expiresAt"), now),
                status=job_status(job, now),
                skills=format_skills(job.get("skills"))[:ADMIN_SKILL_PREVIEW],
            )
            for index, job in enumerate(service.list_jobs(), start=1)
        ]
    except JobBoardError:
        raise
    except Exception as e:
        logger.error(f"Failed to list admin jobs: {e}", exc_info=True)
        raise JobBoardError() from e
