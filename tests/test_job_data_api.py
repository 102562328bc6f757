"""
Test suite for job application endpoints.

Tests cover:
- Creating job applications for a user
- Listing all and per-user applications
- Deleting applications
- Root and health endpoints
"""

from bson import ObjectId
from mongomock_motor import AsyncMongoMockClient

from app.config import settings
from app.db.mongo import MongoDB, get_database
from app.main import app


def create_user(client, username="alice", email="alice@continental.org"):
    return client.post("/api/users", json={"username": username, "email": email}).json()


class TestJobDataCreation:
    """Tests for job application creation"""

    def test_create_job_application(self, client, sample_job_data):
        user = create_user(client)

        response = client.post("/api/jobdata/jobs", json={**sample_job_data, "userId": user["id"]})

        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == user["id"]
        assert data["jobTitle"] == "Backend Engineer"
        assert data["company"] == "Continental Holdings"
        assert response.headers["location"].endswith(f"/api/jobdata/jobs/{data['id']}")

        owner = client.get(f"/api/users/{user['id']}").json()
        assert owner["jobDocumentIds"] == [data["id"]]

    def test_create_for_unknown_owner(self, client, sample_job_data):
        response = client.post(
            "/api/jobdata/jobs", json={**sample_job_data, "userId": str(ObjectId())}
        )

        assert response.status_code == 400
        assert client.get("/api/jobdata/jobs/all").json() == []

    def test_create_with_malformed_owner_id(self, client, sample_job_data):
        response = client.post("/api/jobdata/jobs", json={**sample_job_data, "userId": "alice"})

        assert response.status_code == 400


class TestJobDataRetrieval:
    """Tests for job application lookups"""

    def test_user_job_applications(self, client):
        user = create_user(client)
        ids = {
            client.post("/api/jobdata/jobs", json={"userId": user["id"], "jobTitle": title}).json()["id"]
            for title in ("Engineer", "Analyst")
        }

        response = client.get("/api/users/alice/jobapps")

        assert response.status_code == 200
        assert {job["id"] for job in response.json()} == ids

    def test_user_without_job_applications(self, client):
        create_user(client)

        assert client.get("/api/users/alice/jobapps").status_code == 404

    def test_unknown_user_job_applications(self, client):
        assert client.get("/api/users/nobody/jobapps").status_code == 404

    def test_list_all_job_applications(self, client):
        alice = create_user(client)
        bob = create_user(client, "bob", "bob@continental.org")
        client.post("/api/jobdata/jobs", json={"userId": alice["id"], "jobTitle": "Engineer"})
        client.post("/api/jobdata/jobs", json={"userId": bob["id"], "jobTitle": "Designer"})

        response = client.get("/api/jobdata/jobs/all")

        assert response.status_code == 200
        assert sorted(job["jobTitle"] for job in response.json()) == ["Designer", "Engineer"]

    def test_get_single_job_application(self, client):
        user = create_user(client)
        job = client.post("/api/jobdata/jobs", json={"userId": user["id"], "jobTitle": "Engineer"}).json()

        assert client.get(f"/api/jobdata/jobs/{job['id']}").json() == job
        assert client.get(f"/api/jobdata/jobs/{ObjectId()}").status_code == 404


class TestJobDataDeletion:
    """Tests for job application deletes"""

    def test_delete_job_application(self, client):
        user = create_user(client)
        job = client.post("/api/jobdata/jobs", json={"userId": user["id"], "jobTitle": "Engineer"}).json()

        assert client.delete(f"/api/jobdata/jobs/{job['id']}").status_code == 204
        assert client.get(f"/api/jobdata/jobs/{job['id']}").status_code == 404
        assert client.get(f"/api/users/{user['id']}").json()["jobDocumentIds"] == []
        assert client.delete(f"/api/jobdata/jobs/{job['id']}").status_code == 404


class TestHealth:
    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "operational"

    def test_health_with_database(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_health_without_database(self, client):
        app.dependency_overrides[get_database] = lambda: None

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "degraded",
            "environment": settings.ENVIRONMENT,
            "database": "unavailable",
        }

    async def test_client_ping(self):
        mongo = MongoDB(settings)
        assert await mongo.ping() is False

        mongo.init_client(AsyncMongoMockClient())
        assert await mongo.ping() is True
