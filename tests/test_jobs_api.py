"""
Integration tests for the job endpoints, listing and admin table.
"""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from remotetrail.core.timeutil import parse_iso, to_iso
from remotetrail.main import app
from remotetrail.services.job_service import JobService, get_job_service
from remotetrail.services.logo_store import LogoStore
from remotetrail.services.record_store import RecordStore


@pytest.fixture
def created_job(client, admin_headers, job_fields):
    response = client.post("/jobs", data=job_fields, headers=admin_headers)
    assert response.status_code == 200
    return response.json()["job"]


def test_list_jobs_empty(client):
    response = client.get("/jobs")
    assert response.status_code == 200
    assert response.json() == []


def test_create_requires_token(client, job_fields):
    response = client.post("/jobs", data=job_fields)
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["success"] is False
    assert response.json()["message"]


def test_create_rejects_bad_token(client, job_fields):
    response = client.post("/jobs", data=job_fields, headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid token"}


def test_create_job(client, admin_headers, job_fields):
    """Scenario: create with no logo returns a generated id and logo null."""
    response = client.post("/jobs", data=job_fields, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    job = data["job"]
    assert job["id"]
    assert job["logo"] is None
    assert job["title"] == "Engineer"
    assert job["jobType"] == "Full-time"
    assert parse_iso(job["expiresAt"]) - parse_iso(job["createdAt"]) == timedelta(days=14)

    listed = client.get("/jobs").json()
    assert [j["id"] for j in listed] == [job["id"]]


def test_create_missing_fields(client, admin_headers):
    response = client.post("/jobs", data={"title": "Engineer"}, headers=admin_headers)

    assert response.status_code == 422
    data = response.json()
    assert data["success"] is False
    assert "company" in data["message"]
    assert data["missing"] == ["company", "location", "skills", "description"]
    assert client.get("/jobs").json() == []


def test_create_with_logo_is_served(client, admin_headers, job_fields):
    response = client.post(
        "/jobs",
        data=job_fields,
        files={"logo": ("acme logo.png", b"\x89PNG fake", "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 200
    logo = response.json()["job"]["logo"]
    assert logo.startswith("/uploads/")
    assert logo.endswith("_acme_logo.png")

    served = client.get(logo)
    assert served.status_code == 200
    assert served.content == b"\x89PNG fake"


def test_get_job(client, created_job):
    response = client.get(f"/jobs/{created_job['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == created_job["id"]


def test_get_unknown_job(client):
    response = client.get("/jobs/missing")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Job not found"}


def test_update_job(client, admin_headers, created_job):
    """Scenario: title change keeps id and createdAt."""
    response = client.put(
        f"/jobs/{created_job['id']}",
        data={"title": "Senior Engineer"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    job = response.json()["job"]
    assert job["title"] == "Senior Engineer"
    assert job["id"] == created_job["id"]
    assert job["createdAt"] == created_job["createdAt"]
    assert job["expiresAt"] == created_job["expiresAt"]

    listed = client.get("/jobs").json()
    assert listed[0]["title"] == "Senior Engineer"
    assert listed[0]["createdAt"] == created_job["createdAt"]


def test_update_requires_token(client, created_job):
    response = client.put(f"/jobs/{created_job['id']}", data={"title": "Nope"})
    assert response.status_code == 401


def test_update_unknown_job(client, admin_headers):
    response = client.put("/jobs/missing", data={"title": "Nope"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_update_blank_required_field(client, admin_headers, created_job):
    response = client.put(f"/jobs/{created_job['id']}", data={"company": " "}, headers=admin_headers)
    assert response.status_code == 422
    assert response.json()["missing"] == ["company"]


def test_update_logo_flags(client, admin_headers, job_fields):
    created = client.post(
        "/jobs",
        data=job_fields,
        files={"logo": ("first.png", b"first", "image/png")},
        headers=admin_headers,
    ).json()["job"]
    job_id = created["id"]

    kept = client.put(
        f"/jobs/{job_id}",
        data={"title": "Kept logo", "existingLogo": created["logo"]},
        headers=admin_headers,
    ).json()["job"]
    assert kept["logo"] == created["logo"]

    untouched = client.put(f"/jobs/{job_id}", data={"title": "No logo fields"}, headers=admin_headers).json()["job"]
    assert untouched["logo"] == created["logo"]

    cleared = client.put(f"/jobs/{job_id}", data={"removeLogo": "true"}, headers=admin_headers).json()["job"]
    assert cleared["logo"] is None


def test_delete_job(client, admin_headers, created_job):
    """Scenario: delete removes the job; deleting again is a 404."""
    response = client.delete(f"/jobs/{created_job['id']}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get("/jobs").json() == []

    again = client.delete(f"/jobs/{created_job['id']}", headers=admin_headers)
    assert again.status_code == 404
    assert again.json()["message"] == "Job not found"


def test_delete_requires_token(client, created_job):
    assert client.delete(f"/jobs/{created_job['id']}").status_code == 401
    assert len(client.get("/jobs").json()) == 1


def test_store_failure_is_internal_error(tmp_path, admin_headers, job_fields):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    broken = JobService(RecordStore(blocker / "jobs.json"), LogoStore(tmp_path / "uploads"))
    app.dependency_overrides[get_job_service] = lambda: broken
    try:
        client = TestClient(app)
        for response in (client.get("/jobs"), client.post("/jobs", data=job_fields, headers=admin_headers)):
            assert response.status_code == 500
            assert response.json() == {"success": False, "message": "Internal Server Error"}
    finally:
        app.dependency_overrides.pop(get_job_service, None)


def test_form_options(client):
    response = client.get("/jobs/options")
    assert response.status_code == 200
    data = response.json()
    assert data["job_types"][0] == "Full-time"
    assert "7+ years" in data["experience_levels"]
    assert data["defaults"]["experience"] == "Entry level"


def test_listing(client, admin_headers, clock, job_fields):
    client.post("/jobs", data={**job_fields, "title": "Go Developer", "jobType": "Contract"}, headers=admin_headers)
    clock.advance(minutes=5)
    client.post("/jobs", data={**job_fields, "title": "Designer", "skills": "Figma"}, headers=admin_headers)

    everything = client.get("/listing").json()
    assert [job["title"] for job in everything["jobs"]] == ["Designer", "Go Developer"]
    assert everything["facets"]["job_types"] == ["Full-time", "Contract"]
    assert everything["has_more"] is False
    assert everything["jobs"][0]["status"] == "Active"
    assert everything["jobs"][0]["skill_tags"] == ["Figma"]

    contract = client.get("/listing", params={"job_type": "Contract"}).json()
    assert [job["title"] for job in contract["jobs"]] == ["Go Developer"]

    searched = client.get("/listing", params={"q": "figma", "job_type": "all"}).json()
    assert searched["total"] == 1


def test_listing_windowing(client, admin_headers, job_fields):
    for i in range(12):
        client.post("/jobs", data={**job_fields, "title": f"Job {i}"}, headers=admin_headers)

    first = client.get("/listing").json()
    assert len(first["jobs"]) == 10
    assert first["next_limit"] == 20

    more = client.get("/listing", params={"limit": first["next_limit"]}).json()
    assert len(more["jobs"]) == 12
    assert more["has_more"] is False


def test_listing_rejects_bad_limit(client):
    assert client.get("/listing", params={"limit": 0}).status_code == 422


def test_admin_jobs(client, admin_headers, created_job):
    assert client.get("/admin/jobs").status_code == 401

    rows = client.get("/admin/jobs", headers=admin_headers).json()
    assert rows == [{
        "index": 1,
        "id": created_job["id"],
        "title": "Engineer",
        "company": "Acme",
        "expires_at": created_job["expiresAt"],
        "expires": rows[0]["expires"],
        "status": "Active",
        "skills": ["Go", "SQL"],
    }]
    assert rows[0]["expires"].endswith("from now")


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["jobs_store"] == "ok"
    assert data["jobs"] == 0


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/no-such-route")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}


def test_non_text_values_in_document(client, store, admin_headers, clock):
    """A hand-edited document with numbers and nulls in text fields still reads and updates."""
    created = to_iso(clock.now)
    store.save([{
        "id": "1-a",
        "title": "Engineer",
        "company": 42,
        "location": "Remote",
        "skills": None,
        "description": "Build things",
        "salary": 120000,
        "createdAt": created,
        "updatedAt": created,
        "expiresAt": to_iso(clock.now + timedelta(days=14)),
    }])

    listing = client.get("/listing")
    assert listing.status_code == 200
    item = listing.json()["jobs"][0]
    assert item["salary"] == "120000"
    assert item["company"] == "42"
    assert item["initials"] == "42"
    assert item["skills"] == ""
    assert item["skill_tags"] == []

    fetched = client.get("/jobs/1-a")
    assert fetched.status_code == 200
    assert fetched.json()["salary"] == "120000"

    updated = client.put("/jobs/1-a", data={"title": "Senior"}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()["job"]["title"] == "Senior"
    assert updated.json()["job"]["salary"] == "120000"
    assert store.find("1-a")["salary"] == 120000

    rows = client.get("/admin/jobs", headers=admin_headers)
    assert rows.status_code == 200
    assert rows.json()[0]["company"] == "42"
