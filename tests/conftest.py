import pytest
from fastapi.testclient import TestClient

from talentlink.api.app import create_app
from talentlink.api.limiter import limiter
from talentlink.config import settings
from talentlink.db import StoreRegistry

DB = "TalentLinkDB"


@pytest.fixture(autouse=True)
def fast_settings(monkeypatch):
    monkeypatch.setattr(settings, "password_hash_iterations", 1000)
    monkeypatch.setattr(settings, "enforce_status_transitions", False)
    monkeypatch.setattr(limiter, "enabled", False)


@pytest.fixture
def registry():
    registry = StoreRegistry({DB: "sqlite://"})
    registry.init_db()
    yield registry
    registry.dispose()


@pytest.fixture
def db(registry):
    session = registry.session_factory(DB)()
    yield session
    session.close()


@pytest.fixture
def client(registry):
    with TestClient(create_app(registry)) as c:
        yield c


@pytest.fixture
def signup(client):
    """Create an account through the API and return its document."""

    def _signup(email: str = "seeker@example.com", password: str = "secret", **fields):
        response = client.post(f"/sign-up/{DB}/users", json={"email": email, "password": password, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return _signup


@pytest.fixture
def retrieve(client):
    def _retrieve(doc_id: str, collection: str = "users"):
        response = client.get(f"/retrieve-user/{DB}/{collection}/{doc_id}")
        assert response.status_code == 200, response.text
        return response.json()

    return _retrieve


@pytest.fixture
def post_job(client):
    def _post_job(employer_id: str, **fields):
        body = {
            "employerId": employer_id,
            "jobName": "Backend Engineer",
            "jobType": "Full-time",
            "location": "Remote",
            "experienceLevel": "Mid",
            "minSalary": 50000,
            "maxSalary": 90000,
            "qualifications": "BSc, 3 years Python",
            "skills": "Python, SQL",
            "responsibilities": "Build APIs, Review code",
            "employmentBenefits": "Health, Dental",
            "tags": ["python", "backend"],
            "companyName": "Acme",
            "companyDescription": "Rockets",
            "website": "https://acme.test",
            "companyEmail": "jobs@acme.test",
            "companyPhoneNumber": "555-0100",
            "applicationDeadline": "2026-12-31",
            "workSchedule": "Mon-Fri",
            **fields,
        }
        response = client.post(f"/post-job/{DB}/pending_jobs", json=body)
        assert response.status_code == 201, response.text
        return response.json()["newJob"]

    return _post_job


@pytest.fixture
def published_job(client, signup, post_job):
    """An employer with one approved job. Returns (employer_id, job_id)."""
    employer = signup("hr@acme.test", isEmployer=True, company="Acme")
    pending = post_job(employer["_id"])
    response = client.post(f"/approve-pending-job/{DB}/pending_jobs", json=pending)
    assert response.status_code == 201, response.text
    return employer["_id"], response.json()["insertedId"]
