"""
Public listing endpoint: search, facet filters and "show more" paging.
"""
import logging
from fastapi import APIRouter, Depends, Query, status

from remotetrail.core import config
from remotetrail.core.errors import JobBoardError
from remotetrail.schemas.job import FACET_ALL, ListingFilter, ListingResponse
from remotetrail.services.job_service import JobService, get_job_service
from remotetrail.services.listing import build_listing

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/listing", tags=["Listing"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ListingResponse)
def get_listing(
    q: str = Query("", description="Search in title, company and skills"),
    job_type: str = Query(FACET_ALL, description="Exact job type, or 'all'"),
    experience: str = Query(FACET_ALL, description="Exact experience level, or 'all'"),
    limit: int = Query(config.LISTING_PAGE_SIZE, ge=1, description="Number of jobs to show"),
    service: JobService = Depends(get_job_service),
):
    """
    Newest jobs first, filtered and windowed.

    Facet options always come from the whole collection. To show more,
    request again with `limit=next_limit`.
    """
    try:
        filters = ListingFilter(query=q, job_type=job_type, experience=experience, limit=limit)
        return build_listing(service.list_jobs(), filters)
    except JobBoardError:
        raise
    except Exception as e:
        logger.error(f"Failed to build listing: {e}", exc_info=True)
        raise JobBoardError() from e
