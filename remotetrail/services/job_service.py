"""
Job Service.

Owns the job record lifecycle: assigns ids and timestamps on create, merges
edits on update, removes on delete, and attaches uploaded logos. Mutating
operations are serialized by a process-wide lock so concurrent admin requests
can't lose each other's writes.
"""
import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, Callable, Dict, List, Mapping, Optional

from remotetrail.core import config
from remotetrail.core.errors import AssetWriteError, JobNotFoundError, JobValidationError
from remotetrail.core.timeutil import parse_iso, to_iso, utc_now
from remotetrail.services.logo_store import LogoStore
from remotetrail.services.record_store import JobDict, RecordStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "company", "location", "skills", "description")
OPTIONAL_FIELDS = ("salary", "jobType", "experience", "applyLink")
EDITABLE_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

JOB_TYPE_OPTIONS = ["Full-time", "Part-time", "Contract", "Freelance", "Internship", "Remote"]
EXPERIENCE_OPTIONS = ["Entry level", "1-3 years", "3-5 years", "5-7 years", "7+ years"]

FIELD_DEFAULTS = {
    "salary": "",
    "jobType": JOB_TYPE_OPTIONS[0],
    "experience": EXPERIENCE_OPTIONS[0],
    "applyLink": "",
}

STATUS_DRAFT = "Draft"
STATUS_ACTIVE = "Active"
STATUS_EXPIRED = "Expired"
STATUS_UNKNOWN = "Unknown"


@dataclass
class LogoFile:
    """An uploaded logo: raw bytes plus the client's file name."""
    filename: str
    content: bytes


def generate_job_id(now: datetime) -> str:
    """Millisecond timestamp plus 48 random bits."""
    return f"{int(now.timestamp() * 1000)}-{secrets.token_hex(6)}"


def job_status(job: Mapping[str, Any], now: Optional[datetime] = None) -> str:
    """
    Derive the display status from expiresAt.

    Never persisted: the answer depends on the current time.
    """
    expires_at = job.get("expiresAt")
    if not expires_at:
        return STATUS_DRAFT
    expiry = parse_iso(expires_at)
    if expiry is None:
        return STATUS_UNKNOWN
    if expiry < (now or utc_now()):
        return STATUS_EXPIRED
    return STATUS_ACTIVE


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _editable(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only the fields an admin may set; id and timestamps are server-owned."""
    ignored = sorted(k for k in fields if k not in EDITABLE_FIELDS)
    if ignored:
        logger.debug(f"Ignoring non-editable job fields: {ignored}")
    return {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}


class JobService:
    """Create, update, delete and list job records."""

    def __init__(
        self,
        records: RecordStore,
        logos: LogoStore,
        clock: Callable[[], datetime] = utc_now,
        ttl_days: int = config.JOB_TTL_DAYS,
    ):
        self.records = records
        self.logos = logos
        self._clock = clock
        self.ttl = timedelta(days=ttl_days)
        self._lock = threading.RLock()

    def list_jobs(self) -> List[JobDict]:
        return self.records.load()

    def get_job(self, job_id: str) -> JobDict:
        job = self.records.find(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    def create_job(self, fields: Mapping[str, Any], logo: Optional[LogoFile] = None) -> JobDict:
        """
        Create a job from submitted form fields.

        Raises:
            JobValidationError: If any required field is missing or blank
            RecordStoreError: If the collection can't be persisted
        """
        data = _editable(fields)
        missing = [name for name in REQUIRED_FIELDS if _is_blank(data.get(name))]
        if missing:
            raise JobValidationError(missing)

        for name, default in FIELD_DEFAULTS.items():
            if _is_blank(data.get(name)):
                data[name] = default

        with self._lock:
            now = self._clock()
            created_at = to_iso(now)
            job: JobDict = {
                "id": generate_job_id(now),
                "createdAt": created_at,
                "updatedAt": created_at,
                "expiresAt": to_iso(now + self.ttl),
            }
            job.update(data)
            job["logo"] = self._store_logo(logo)

            self.records.prepend(job)

        logger.info(f"Job created: job_id={job['id']}, company={job['company']}")
        return job

    def update_job(
        self,
        job_id: str,
        fields: Mapping[str, Any],
        logo: Optional[LogoFile] = None,
        existing_logo: Optional[str] = None,
        remove_logo: bool = False,
    ) -> JobDict:
        """
        Merge submitted fields into an existing job.

        Logo precedence: a new upload wins, then an explicit existing logo
        path, then remove_logo, otherwise the stored logo is kept.

        Raises:
            JobNotFoundError: If no job has this id
            JobValidationError: If a submitted required field is blank
            RecordStoreError: If the collection can't be persisted
        """
        data = _editable(fields)
        blank = [name for name in REQUIRED_FIELDS if name in data and _is_blank(data[name])]
        if blank:
            raise JobValidationError(blank, f"Required fields cannot be blank: {', '.join(blank)}")

        with self._lock:
            current = self.get_job(job_id)

            job = dict(current)
            job.update(data)
            job["updatedAt"] = to_iso(self._clock())
            job["logo"] = self._resolve_logo(current.get("logo"), logo, existing_logo, remove_logo)

            self.records.replace(job)

        logger.info(f"Job updated: job_id={job_id}")
        return job

    def delete_job(self, job_id: str) -> None:
        """
        Raises:
            JobNotFoundError: If no job has this id
        """
        with self._lock:
            self.records.remove(job_id)
        # The logo file stays on disk; nothing reclaims orphaned uploads yet.
        logger.info(f"Job deleted: job_id={job_id}")

    def _store_logo(self, logo: Optional[LogoFile]) -> Optional[str]:
        if logo is None or not logo.filename or not logo.content:
            return None
        try:
            return self.logos.put(logo.content, logo.filename)
        except AssetWriteError as e:
            logger.warning(f"Continuing without logo: {e.message}")
            return None

    def _resolve_logo(
        self,
        previous: Optional[str],
        logo: Optional[LogoFile],
        existing_logo: Optional[str],
        remove_logo: bool,
    ) -> Optional[str]:
        uploaded = self._store_logo(logo)
        if uploaded:
            return uploaded

        if existing_logo:
            if self.logos.exists(existing_logo):
                return existing_logo
            logger.warning(f"Ignoring existing logo reference that is not in the store: {existing_logo}")

        if remove_logo:
            return None

        return previous


@lru_cache()
def get_job_service() -> JobService:
    """Service dependency wired from configuration."""
    return JobService(
        records=RecordStore(config.JOBS_DATA_FILE),
        logos=LogoStore(config.UPLOADS_DIR, url_prefix=config.UPLOADS_URL_PREFIX),
    )
