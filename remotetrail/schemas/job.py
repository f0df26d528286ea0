"""
Pydantic schemas for job endpoints.
"""
from typing import Any, List, Optional
from pydantic import BaseModel, Field, field_validator

from remotetrail.core import config

FACET_ALL = "all"

REQUIRED_TEXT_FIELDS = ("title", "company", "location", "skills", "description")
OPTIONAL_TEXT_FIELDS = (
    "salary", "job_type", "experience", "apply_link", "logo",
    "created_at", "updated_at", "expires_at",
)


def coerce_text(value: Any) -> Optional[str]:
    """Hand-edited documents may hold numbers or booleans; render them as text."""
    if value is None or isinstance(value, str):
        return value
    return str(value)


class JobRecord(BaseModel):
    """A persisted job posting, keyed the way the jobs document stores it."""
    id: str = Field(..., description="Job ID (time-based with a random suffix)")
    title: str = Field("", description="Job title")
    company: str = Field("", description="Company name")
    location: str = Field("", description="Job location")
    salary: Optional[str] = Field("", description="Free-text salary")
    job_type: Optional[str] = Field(None, alias="jobType", description="Job type, e.g. Full-time")
    experience: Optional[str] = Field(None, description="Experience level, e.g. Entry level")
    skills: str = Field("", description="Comma-separated skills")
    description: str = Field("", description="Job description")
    apply_link: Optional[str] = Field("", alias="applyLink", description="Application URL")
    logo: Optional[str] = Field(None, description="Public logo path under /uploads")
    created_at: Optional[str] = Field(None, alias="createdAt", description="Creation timestamp (ISO 8601)")
    updated_at: Optional[str] = Field(None, alias="updatedAt", description="Last update timestamp (ISO 8601)")
    expires_at: Optional[str] = Field(None, alias="expiresAt", description="Expiry timestamp (ISO 8601)")

    @field_validator("id", *OPTIONAL_TEXT_FIELDS, mode="before")
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        return coerce_text(v)

    @field_validator(*REQUIRED_TEXT_FIELDS, mode="before")
    @classmethod
    def coerce_required_text(cls, v: Any) -> str:
        """Missing text reads as empty rather than failing the whole response."""
        return coerce_text(v) or ""

    class Config:
        populate_by_name = True
        extra = "allow"
        json_schema_extra = {
            "example": {
                "id": "1714555800000-3f9a1c2b7d4e",
                "title": "Senior Software Engineer",
                "company": "Acme",
                "location": "Remote",
                "salary": "$120k - $150k",
                "jobType": "Full-time",
                "experience": "5-7 years",
                "skills": "Python, FastAPI, PostgreSQL",
                "description": "Build and run our hiring platform.",
                "applyLink": "https://example.com/jobs/123",
                "logo": "/uploads/1714555800000_acme.png",
                "createdAt": "2024-05-01T09:30:00.000Z",
                "updatedAt": "2024-05-01T09:30:00.000Z",
                "expiresAt": "2024-05-15T09:30:00.000Z"
            }
        }


class JobEnvelope(BaseModel):
    """Response for create and update."""
    success: bool = Field(True, description="Whether the operation succeeded")
    job: JobRecord = Field(..., description="The created or updated job")


class SuccessResponse(BaseModel):
    success: bool = Field(True, description="Whether the operation succeeded")


class ErrorResponse(BaseModel):
    """Body of every failed job operation."""
    success: bool = Field(False, description="Always false")
    message: str = Field(..., description="Human-readable reason")
    missing: Optional[List[str]] = Field(None, description="Missing required fields, on validation errors")


class JobFormOptions(BaseModel):
    """Choices the admin form offers."""
    job_types: List[str] = Field(..., description="Job type options")
    experience_levels: List[str] = Field(..., description="Experience level options")
    defaults: dict = Field(..., description="Default values for new jobs")


class ListingFilter(BaseModel):
    """Search, facet and window state for the public listing."""
    query: str = Field("", description="Case-insensitive search over title, company and skills")
    job_type: str = Field(FACET_ALL, description="Exact job type, or 'all'")
    experience: str = Field(FACET_ALL, description="Exact experience level, or 'all'")
    limit: int = Field(config.LISTING_PAGE_SIZE, ge=1, description="How many matches to show")

    def show_more(self) -> "ListingFilter":
        return self.model_copy(update={"limit": self.limit + config.LISTING_PAGE_SIZE})

    def reset(self) -> "ListingFilter":
        return ListingFilter()


class ListingItem(JobRecord):
    """A job decorated for display in the listing."""
    status: str = Field(..., description="Draft, Active, Expired or Unknown")
    skill_tags: List[str] = Field(default_factory=list, description="Skills split on commas")
    initials: str = Field("", description="Company initials for the logo placeholder")
    posted: str = Field("", description="Relative creation time, e.g. '3 days ago'")


class ListingFacets(BaseModel):
    job_types: List[str] = Field(..., description="Distinct job types in the collection")
    experience_levels: List[str] = Field(..., description="Distinct experience levels in the collection")


class ListingResponse(BaseModel):
    """Schema for the public listing."""
    jobs: List[ListingItem] = Field(..., description="Visible jobs, newest first")
    total: int = Field(..., description="Number of jobs matching the filters")
    limit: int = Field(..., description="Current window size")
    has_more: bool = Field(..., description="Whether 'show more' would reveal more jobs")
    next_limit: Optional[int] = Field(None, description="Window size after 'show more'")
    facets: ListingFacets = Field(..., description="Facet options from the unfiltered collection")
    last_updated: Optional[str] = Field(None, description="Relative update time of the newest job")


class AdminJobRow(BaseModel):
    """One row of the admin jobs table."""
    index: int = Field(..., description="1-based position in the collection")
    id: str
    title: str
    company: str
    expires_at: Optional[str] = Field(None, description="Expiry timestamp (ISO 8601)")
    expires: str = Field(..., description="Relative expiry, e.g. '5 days from now'")
    status: str = Field(..., description="Draft, Active, Expired or Unknown")
    skills: List[str] = Field(default_factory=list, description="First four skills")

    @field_validator("id", "title", "company", "expires_at", mode="before")
    @classmethod
    def coerce_text_columns(cls, v: Any) -> Optional[str]:
        return coerce_text(v)
