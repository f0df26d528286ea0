"""
Error taxonomy for the job board.

Every error a route lets through is a JobBoardError; the app renders it as
{"success": false, "message": ...} with the error's status code.
"""
from typing import List, Optional


class JobBoardError(Exception):
    """Base error. Unknown failures surface as a generic 500."""
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class JobValidationError(JobBoardError):
    """Required fields are missing or blank."""
    status_code = 422
    default_message = "Invalid job data"

    def __init__(self, missing: List[str], message: Optional[str] = None):
        self.missing = list(missing)
        super().__init__(message or f"Missing required fields: {', '.join(self.missing)}")


class JobNotFoundError(JobBoardError):
    status_code = 404
    default_message = "Job not found"

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__()


class RecordStoreError(JobBoardError):
    """The jobs document could not be read or written."""


class AssetWriteError(JobBoardError):
    """A logo could not be persisted. Handled inside the service, never fatal."""
