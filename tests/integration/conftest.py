"""Shared fixtures for integration tests.

The application is built with ``create_app`` and its ``get_database``
dependency is overridden with the in-memory database, so every test runs
the full middleware stack, routing, facades and repository without a
MongoDB server.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.main import create_app
from src.infrastructure.database.client import get_database
from tests.fixtures.document_store import InMemoryDatabase


@pytest.fixture
def app(database: InMemoryDatabase) -> FastAPI:
    application = create_app()
    application.dependency_overrides[get_database] = lambda: database
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac


@pytest.fixture
def seeded(database: InMemoryDatabase) -> dict[str, list[str]]:
    """Seed every content collection and return the generated ids."""
    return {
        "projects": database["projects"].seed(
            {
                "title": "Orbit",
                "description": "Satellite telemetry dashboard",
                "imageUrl": "https://cdn.example.com/orbit.png",
                "status": "COMPLETED",
                "technologies": ["React", "FastAPI"],
            },
            {
                "title": "Nebula",
                "description": "Design system",
                "imageUrl": "https://cdn.example.com/nebula.png",
                "status": "IN_PROGRESS",
                "technologies": ["TypeScript"],
            },
            {
                "title": "Pulsar",
                "description": "Realtime chat",
                "imageUrl": "https://cdn.example.com/pulsar.png",
                "status": "COMPLETED",
                "technologies": [],
            },
        ),
        "services": database["services"].seed(
            {"title": "Web", "description": "Websites", "iconIdentifier": "code"},
            {"title": "Cloud", "description": "Hosting", "iconIdentifier": "cloud"},
        ),
        "team_members": database["team_members"].seed(
            {
                "name": "Grace Hopper",
                "title": "CTO",
                "bio": "Compilers and coffee.",
                "profileImageUrl": "https://cdn.example.com/grace.png",
            }
        ),
    }
