"""Integration tests for the read-only content endpoints."""

import pytest
import pytest_check
from httpx import AsyncClient
from pymongo.errors import ServerSelectionTimeoutError
from pytest_mock import MockerFixture

from tests.fixtures.document_store import InMemoryCursor, InMemoryDatabase

FRONTEND_ORIGIN = "http://localhost:5173"


@pytest.mark.integration
class TestProjects:
    async def test_list_projects(
        self, client: AsyncClient, seeded: dict[str, list[str]]
    ) -> None:
        response = await client.get("/api/v1/projects")

        assert response.status_code == 200
        projects = response.json()
        assert [p["id"] for p in projects] == seeded["projects"]
        with pytest_check.check:
            assert projects[0]["imageUrl"] == "https://cdn.example.com/orbit.png"
        with pytest_check.check:
            assert projects[0]["technologies"] == ["React", "FastAPI"]

    async def test_empty_collection_lists_nothing(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/projects")

        assert response.status_code == 200
        assert response.json() == []

    async def test_every_listed_project_is_retrievable_by_id(
        self, client: AsyncClient, seeded: dict[str, list[str]]
    ) -> None:
        listed = (await client.get("/api/v1/projects")).json()

        for project in listed:
            response = await client.get(f"/api/v1/projects/{project['id']}")
            with pytest_check.check:
                assert response.status_code == 200
                assert response.json() == project

    @pytest.mark.parametrize("project_id", ["000000000000000000000000", "unknown-id"])
    async def test_missing_project_is_404_with_empty_body(
        self, client: AsyncClient, seeded: dict[str, list[str]], project_id: str
    ) -> None:
        response = await client.get(f"/api/v1/projects/{project_id}")

        assert response.status_code == 404
        assert response.content == b""

    async def test_list_by_status(
        self, client: AsyncClient, seeded: dict[str, list[str]]
    ) -> None:
        response = await client.get("/api/v1/projects/status/COMPLETED")

        assert response.status_code == 200
        projects = response.json()
        assert [p["title"] for p in projects] == ["Orbit", "Pulsar"]
        assert all(p["status"] == "COMPLETED" for p in projects)

    async def test_status_with_no_projects(
        self, client: AsyncClient, seeded: dict[str, list[str]]
    ) -> None:
        response = await client.get("/api/v1/projects/status/UPCOMING")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize("token", ["completed", "DONE", "InProgress"])
    async def test_unknown_status_is_400(
        self, client: AsyncClient, seeded: dict[str, list[str]], token: str
    ) -> None:
        response = await client.get(f"/api/v1/projects/status/{token}")

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "status" in body["details"]["field_errors"]

    async def test_unknown_sub_route_is_404_envelope(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/projects/status/COMPLETED/extra")

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    async def test_store_failure_is_500(
        self, client: AsyncClient, mocker: MockerFixture
    ) -> None:
        mocker.patch.object(
            InMemoryCursor,
            "to_list",
            new_callable=mocker.AsyncMock,
            side_effect=ServerSelectionTimeoutError("no servers available"),
        )

        response = await client.get("/api/v1/projects")

        assert response.status_code == 500
        body = response.json()
        assert body["error_code"] == "STORE_UNAVAILABLE"
        assert "no servers available" not in body["message"]
        assert body["request_id"] == response.headers["x-request-id"]
        assert body["correlation_id"] == response.headers["x-correlation-id"]

    async def test_malformed_stored_project_keeps_cors_and_ids(
        self, client: AsyncClient, database: InMemoryDatabase
    ) -> None:
        database["projects"].seed({"title": "Broken"})

        response = await client.get(
            "/api/v1/projects",
            headers={"Origin": FRONTEND_ORIGIN, "X-Request-ID": "req-frontend-7"},
        )

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == FRONTEND_ORIGIN
        assert response.headers["x-request-id"] == "req-frontend-7"
        body = response.json()
        assert body["error_code"] == "STORE_UNAVAILABLE"
        assert body["request_id"] == "req-frontend-7"
        assert body["correlation_id"] == response.headers["x-correlation-id"]


@pytest.mark.integration
class TestServicesAndTeam:
    async def test_list_services(
        self, client: AsyncClient, seeded: dict[str, list[str]]
    ) -> None:
        response = await client.get("/api/v1/services")

        assert response.status_code == 200
        assert [s["iconIdentifier"] for s in response.json()] == ["code", "cloud"]

    async def test_get_service(
        self, client: AsyncClient, seeded: dict[str, list[str]]
    ) -> None:
        service_id = seeded["services"][1]

        response = await client.get(f"/api/v1/services/{service_id}")

        assert response.status_code == 200
        assert response.json() == {
            "id": service_id,
            "title": "Cloud",
            "description": "Hosting",
            "iconIdentifier": "cloud",
        }

    async def test_missing_service(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/services/000000000000000000000000")

        assert response.status_code == 404
        assert response.content == b""

    async def test_team(
        self, client: AsyncClient, seeded: dict[str, list[str]]
    ) -> None:
        member_id = seeded["team_members"][0]

        listed = await client.get("/api/v1/team")
        fetched = await client.get(f"/api/v1/team/{member_id}")
        missing = await client.get("/api/v1/team/nobody")

        assert listed.json() == [fetched.json()]
        assert fetched.json()["profileImageUrl"] == "https://cdn.example.com/grace.png"
        assert missing.status_code == 404
