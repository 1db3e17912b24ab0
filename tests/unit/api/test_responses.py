"""Unit tests for the orjson response class."""

from datetime import UTC, datetime

import orjson
import pytest

from src.api.utils.responses import ORJSONResponse
from src.domain.models import ContactMessage


@pytest.mark.unit
class TestORJSONResponse:
    def test_aware_datetimes_keep_their_offset(self) -> None:
        submitted = datetime(2024, 6, 14, 12, 0, tzinfo=UTC)

        response = ORJSONResponse({"submittedAt": submitted})

        assert orjson.loads(response.body) == {
            "submittedAt": "2024-06-14T12:00:00+00:00"
        }

    def test_models_render_by_alias(self) -> None:
        message = ContactMessage(
            id="665f1c2ab3e4a1d2c3b4a5f6",
            name="Ada Lovelace",
            email="ada@example.com",
            message="Hello from the Analytical Engine",
            submission_date=datetime(2024, 6, 14, 12, 0, tzinfo=UTC),
        )

        body = orjson.loads(ORJSONResponse(message).body)

        assert body["submissionDate"] == "2024-06-14T12:00:00Z"
        assert list(body) == ["id", "name", "email", "message", "submissionDate"]
