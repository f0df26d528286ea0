"""
Job endpoints for the job board.

Reads are public; create, update and delete require an admin token. Bodies
for create and update are multipart forms with an optional "logo" file part.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple
from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from remotetrail.core.auth_dependency import get_current_admin
from remotetrail.core.errors import JobBoardError
from remotetrail.schemas.job import (
    ErrorResponse,
    JobEnvelope,
    JobFormOptions,
    JobRecord,
    SuccessResponse,
)
from remotetrail.services.job_service import (
    EXPERIENCE_OPTIONS,
    FIELD_DEFAULTS,
    JOB_TYPE_OPTIONS,
    JobService,
    LogoFile,
    get_job_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

ERROR_RESPONSES = {
    401: {"description": "Missing or invalid admin token"},
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

TRUTHY = {"1", "true", "yes", "on"}


async def read_job_form(request: Request) -> Tuple[Dict[str, Any], Optional[LogoFile]]:
    """
    Split a multipart job form into text fields and the optional logo.

    A logo part without a file name or without content counts as no logo.
    """
    form = await request.form()
    fields: Dict[str, Any] = {}
    logo: Optional[LogoFile] = None

    for key, value in form.multi_items():
        if key == "logo":
            if isinstance(value, UploadFile) and value.filename:
                content = await value.read()
                if content:
                    logo = LogoFile(filename=value.filename, content=content)
        elif isinstance(value, str):
            fields[key] = value

    return fields, logo


@router.get("", status_code=status.HTTP_200_OK, response_model=List[Dict[str, Any]])
def list_jobs(service: JobService = Depends(get_job_service)):
    """
    Return every job as stored, newest created first.

    No filtering or paging here; see /listing for the search pipeline.
    """
    try:
        return service.list_jobs()
    except JobBoardError:
        raise
    except Exception as e:
        logger.error(f"Failed to list jobs: {e}", exc_info=True)
        raise JobBoardError() from e


@router.get("/options", status_code=status.HTTP_200_OK, response_model=JobFormOptions)
def job_form_options():
    """Option sets and defaults for the admin job form."""
    return JobFormOptions(
        job_types=JOB_TYPE_OPTIONS,
        experience_levels=EXPERIENCE_OPTIONS,
        defaults=FIELD_DEFAULTS,
    )


@router.get("/{job_id}", status_code=status.HTTP_200_OK, response_model=JobRecord, responses=ERROR_RESPONSES)
def get_job(job_id: str, service: JobService = Depends(get_job_service)):
    """
    Get a specific job by ID.

    Returns 404 if the job doesn't exist.
    """
    try:
        return service.get_job(job_id)
    except JobBoardError:
        raise
    except Exception as e:
        logger.error(f"Failed to get job {job_id}: {e}", exc_info=True)
        raise JobBoardError() from e


@router.post("", status_code=status.HTTP_200_OK, response_model=JobEnvelope, responses=ERROR_RESPONSES)
async def create_job(
    request: Request,
    admin: str = Depends(get_current_admin),
    service: JobService = Depends(get_job_service),
):
    """
    Create a new job posting.

    Server sets id, createdAt, updatedAt and expiresAt (14 days out). A logo
    that fails to save is dropped; the job is still created.
    """
    try:
        fields, logo = await read_job_form(request)
        job = await run_in_threadpool(service.create_job, fields, logo=logo)
        logger.info(f"Job created by admin={admin}: job_id={job['id']}")
        return JobEnvelope(success=True, job=job)
    except JobBoardError:
        raise
    except Exception as e:
        logger.error(f"Failed to create job: {e}", exc_info=True)
        raise JobBoardError() from e


@router.put("/{job_id}", status_code=status.HTTP_200_OK, response_model=JobEnvelope, responses=ERROR_RESPONSES)
async def update_job(
    job_id: str,
    request: Request,
    admin: str = Depends(get_current_admin),
    service: JobService = Depends(get_job_service),
):
    """
    Update an existing job.

    Only submitted fields change. "existingLogo" keeps a previously uploaded
    logo, "removeLogo" clears it; both are ignored when a new logo is sent.
    """
    try:
        fields, logo = await read_job_form(request)
        existing_logo = fields.pop("existingLogo", None) or None
        remove_logo = str(fields.pop("removeLogo", "")).strip().lower() in TRUTHY

        job = await run_in_threadpool(
            service.update_job,
            job_id,
            fields,
            logo=logo,
            existing_logo=existing_logo,
            remove_logo=remove_logo,
        )
        logger.info(f"Job updated by admin={admin}: job_id={job_id}")
        return JobEnvelope(success=True, job=job)
    except JobBoardError:
        raise
    except Exception as e:
        logger.error(f"Failed to update job {job_id}: {e}", exc_info=True)
        raise JobBoardError() from e


@router.delete("/{job_id}", status_code=status.HTTP_200_OK, response_model=SuccessResponse, responses=ERROR_RESPONSES)
def delete_job(
    job_id: str,
    admin: str = Depends(get_current_admin),
    service: JobService = Depends(get_job_service),
):
    """
    Delete a job.

    Returns 404 if the job doesn't exist. The logo file is left in place.
    """
    try:
        service.delete_job(job_id)
        logger.info(f"Job deleted by admin={admin}: job_id={job_id}")
        return SuccessResponse(success=True)
    except JobBoardError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete job {job_id}: {e}", exc_info=True)
        raise JobBoardError() from e
