"""
Shared fixtures: an isolated jobs document, a logo store, a fixed clock and
a TestClient wired to them.
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone

import bcrypt
import pytest

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct horse battery staple"

# Configuration is read at import time, so set it before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["ADMIN_EMAIL"] = ADMIN_EMAIL
os.environ["ADMIN_PASSWORD_HASH"] = bcrypt.hashpw(ADMIN_PASSWORD.encode("utf-8"), bcrypt.gensalt(rounds=4)).decode("utf-8")
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="remotetrail-uploads-")
os.environ["JOBS_DATA_FILE"] = os.path.join(tempfile.mkdtemp(prefix="remotetrail-data-"), "jobs.json")
os.environ["LOG_DIR"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from remotetrail.core import config  # noqa: E402
from remotetrail.core.rate_limit import reset_rate_limits  # noqa: E402
from remotetrail.core.security import ADMIN_ROLE, create_access_token  # noqa: E402
from remotetrail.main import app  # noqa: E402
from remotetrail.services.job_service import JobService, get_job_service  # noqa: E402
from remotetrail.services.logo_store import LogoStore  # noqa: E402
from remotetrail.services.record_store import RecordStore  # noqa: E402


class FixedClock:
    """Clock that only moves when a test says so."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def clock():
    start = datetime.now(timezone.utc).replace(microsecond=0)
    return FixedClock(start)


@pytest.fixture
def jobs_file(tmp_path):
    return tmp_path / "data" / "jobs.json"


@pytest.fixture
def store(jobs_file):
    return RecordStore(jobs_file)


@pytest.fixture
def logos(tmp_path):
    return LogoStore(tmp_path / "uploads")


@pytest.fixture
def service(store, logos, clock):
    return JobService(store, logos, clock=clock)


@pytest.fixture
def api_service(store, clock):
    """Service whose logos land in the directory the app serves at /uploads."""
    return JobService(store, LogoStore(config.UPLOADS_DIR), clock=clock)


@pytest.fixture
def client(api_service):
    app.dependency_overrides[get_job_service] = lambda: api_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_job_service, None)


@pytest.fixture
def admin_token():
    return create_access_token({"sub": ADMIN_EMAIL, "role": ADMIN_ROLE})


@pytest.fixture
def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def job_fields():
    return {
        "title": "Engineer",
        "company": "Acme",
        "location": "Remote",
        "skills": "Go, SQL",
        "description": "Build things",
    }


@pytest.fixture
def admin_password():
    return ADMIN_PASSWORD
