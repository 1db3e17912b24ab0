"""Integration tests for the contact form endpoint."""

from datetime import UTC, datetime

import pytest
import pytest_check
from httpx import AsyncClient

from src.domain.facades import CONTACT_ACKNOWLEDGEMENT
from tests.fixtures.document_store import InMemoryDatabase

ADA = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "message": "Interested in your services, please contact me back.",
}


@pytest.mark.integration
class TestSubmitContactMessage:
    async def test_successful_submission(
        self, client: AsyncClient, database: InMemoryDatabase
    ) -> None:
        before = datetime.now(UTC)

        response = await client.post("/api/v1/contact", json=ADA)

        after = datetime.now(UTC)
        assert response.status_code == 201
        body = response.json()
        with pytest_check.check:
            assert body["success"] is True
        with pytest_check.check:
            assert body["message"] == CONTACT_ACKNOWLEDGEMENT
        stored = database["contact_messages"].documents
        assert len(stored) == 1
        assert str(stored[0]["_id"]) == body["id"]
        assert stored[0]["name"] == "Ada Lovelace"
        assert before <= stored[0]["submissionDate"] <= after

    async def test_each_submission_gets_a_fresh_id(self, client: AsyncClient) -> None:
        first = (await client.post("/api/v1/contact", json=ADA)).json()
        second = (await client.post("/api/v1/contact", json=ADA)).json()

        assert first["id"] != second["id"]

    async def test_client_timestamp_is_ignored(
        self, client: AsyncClient, database: InMemoryDatabase
    ) -> None:
        response = await client.post(
            "/api/v1/contact",
            json={**ADA, "submissionDate": "1999-01-01T00:00:00Z", "id": "forged"},
        )

        assert response.status_code == 201
        stored = database["contact_messages"].documents[0]
        assert stored["submissionDate"].year != 1999
        assert str(stored["_id"]) != "forged"

    @pytest.mark.parametrize(
        ("overrides", "field", "message"),
        [
            ({"name": "A"}, "name", "Name must be between 2 and 100 characters"),
            ({"name": "A" * 101}, "name", "Name must be between 2 and 100 characters"),
            ({"name": "   "}, "name", "Name is required"),
            ({"email": "not-an-email"}, "email", "Email must be valid"),
            (
                {"message": "Too short"},
                "message",
                "Message must be between 10 and 1000 characters",
            ),
            (
                {"message": "m" * 1001},
                "message",
                "Message must be between 10 and 1000 characters",
            ),
        ],
    )
    async def test_invalid_field_is_rejected(
        self,
        client: AsyncClient,
        database: InMemoryDatabase,
        overrides: dict[str, str],
        field: str,
        message: str,
    ) -> None:
        response = await client.post("/api/v1/contact", json={**ADA, **overrides})

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"]["field_errors"] == {field: message}
        assert database["contact_messages"].documents == []

    @pytest.mark.parametrize(
        ("name", "message"), [("Al", "m" * 10), ("A" * 100, "m" * 1000)]
    )
    async def test_boundary_values_are_accepted(
        self, client: AsyncClient, name: str, message: str
    ) -> None:
        response = await client.post(
            "/api/v1/contact", json={**ADA, "name": name, "message": message}
        )

        assert response.status_code == 201

    async def test_missing_fields_are_all_reported(
        self, client: AsyncClient
    ) -> None:
        response = await client.post("/api/v1/contact", json={})

        assert response.status_code == 400
        assert response.json()["details"]["field_errors"] == {
            "name": "Name is required",
            "email": "Email is required",
            "message": "Message is required",
        }

    async def test_malformed_json_is_400(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/contact",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_wrong_types_are_400(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/contact", json={**ADA, "name": 42})

        assert response.status_code == 400
        assert "name" in response.json()["details"]["field_errors"]
