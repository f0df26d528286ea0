"""
Listing pipeline for the public job board.

Pure functions over the loaded collection: sort newest first, filter by
search text and facets, then cut a "show more" window. Everything is
recomputed from scratch for each request.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from remotetrail.core.timeutil import parse_iso, utc_now
from remotetrail.schemas.job import (
    FACET_ALL,
    ListingFacets,
    ListingFilter,
    ListingItem,
    ListingResponse,
    coerce_text,
)
from remotetrail.services.job_service import job_status

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("title", "company", "skills")

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _created(job: Mapping[str, Any]) -> datetime:
    return parse_iso(job.get("createdAt")) or _OLDEST


def sort_jobs(jobs: Sequence[Mapping[str, Any]]) -> List[Mapping[str, Any]]:
    """Newest createdAt first. Ties keep their original order."""
    return sorted(jobs, key=_created, reverse=True)


def matches_query(job: Mapping[str, Any], query: Optional[str]) -> bool:
    """Case-insensitive substring match on title, company or skills."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in str(job.get(field) or "").lower() for field in SEARCH_FIELDS)


def _facet_active(value: Optional[str]) -> bool:
    return bool(value) and value != FACET_ALL


def filter_jobs(
    jobs: Sequence[Mapping[str, Any]],
    query: Optional[str] = None,
    job_type: Optional[str] = None,
    experience: Optional[str] = None,
) -> List[Mapping[str, Any]]:
    """Apply the search query, then each selected facet as an exact match."""
    result = [job for job in jobs if matches_query(job, query)]
    if _facet_active(job_type):
        result = [job for job in result if job.get("jobType") == job_type]
    if _facet_active(experience):
        result = [job for job in result if job.get("experience") == experience]
    return result


def facet_options(jobs: Sequence[Mapping[str, Any]], field: str) -> List[str]:
    """Distinct non-empty values of `field`, in first-seen order."""
    seen: Dict[str, None] = {}
    for job in jobs:
        value = job.get(field)
        if isinstance(value, str) and value:
            seen.setdefault(value, None)
    return list(seen)


def window(jobs: Sequence[Mapping[str, Any]], limit: int) -> List[Mapping[str, Any]]:
    return list(jobs[:max(limit, 0)])


def format_skills(skills: Any) -> List[str]:
    skills = coerce_text(skills)
    if not skills:
        return []
    return [skill.strip() for skill in skills.split(",") if skill.strip()]


def company_initials(company: Any) -> str:
    """'Acme Labs' -> 'AL', 'Acme' -> 'AC'."""
    company = coerce_text(company)
    if not company:
        return ""
    words = company.split()
    if len(words) > 1:
        return "".join(word[0] for word in words).upper()
    return company.strip()[:2].upper()


def format_relative_time(value: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Render a stored timestamp relative to now.

    Past times read "3 days ago", future ones "2 hours from now". Under a
    minute is "Just now", or "moments from now" when ahead. Missing or
    malformed timestamps render "—".
    """
    moment = parse_iso(value)
    if moment is None:
        return "—"

    diff = ((now or utc_now()) - moment).total_seconds()
    tense = "ago" if diff >= 0 else "from now"
    seconds = abs(diff)

    for label, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        amount = int(seconds // size)
        if amount > 0:
            return f"{amount} {label}{'s' if amount > 1 else ''} {tense}"

    return "Just now" if diff >= 0 else "moments from now"


def build_listing(
    jobs: Sequence[Mapping[str, Any]],
    filters: Optional[ListingFilter] = None,
    now: Optional[datetime] = None,
) -> ListingResponse:
    """Run sort -> filter -> window and decorate the visible jobs."""
    filters = filters or ListingFilter()
    now = now or utc_now()

    matched = filter_jobs(
        sort_jobs(jobs),
        query=filters.query,
        job_type=filters.job_type,
        experience=filters.experience,
    )
    visible = window(matched, filters.limit)
    has_more = len(matched) > len(visible)

    items = [
        ListingItem.model_validate({
            **job,
            "status": job_status(job, now),
            "skill_tags": format_skills(job.get("skills")),
            "initials": company_initials(job.get("company")),
            "posted": format_relative_time(job.get("createdAt"), now),
        })
        for job in visible
    ]

    logger.debug(f"Listing built: total={len(jobs)}, matched={len(matched)}, visible={len(items)}")

    return ListingResponse(
        jobs=items,
        total=len(matched),
        limit=filters.limit,
        has_more=has_more,
        next_limit=filters.show_more().limit if has_more else None,
        facets=ListingFacets(
            job_types=facet_options(jobs, "jobType"),
            experience_levels=facet_options(jobs, "experience"),
        ),
        last_updated=format_relative_time(jobs[0].get("updatedAt"), now) if jobs else None,
    )
