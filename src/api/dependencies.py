"""Facade providers for route handlers.

Each request gets facades over the injected database. Facades and
repositories are cheap wrappers around driver collections, so building
them per request keeps handlers stateless.
"""

from typing import Annotated

from fastapi import Depends

from src.domain.facades import ContactFacade, ProjectFacade, ServiceFacade, TeamFacade
from src.domain.models import ContactMessage, Project, Service, TeamMember
from src.infrastructure.database import Database, DocumentRepository


def get_project_facade(database: Database) -> ProjectFacade:
    return ProjectFacade(DocumentRepository(database, Project))


def get_service_facade(database: Database) -> ServiceFacade:
    return ServiceFacade(DocumentRepository(database, Service))


def get_team_facade(database: Database) -> TeamFacade:
    return TeamFacade(DocumentRepository(database, TeamMember))


def get_contact_facade(database: Database) -> ContactFacade:
    return ContactFacade(DocumentRepository(database, ContactMessage))


Projects = Annotated[ProjectFacade, Depends(get_project_facade)]
Services = Annotated[ServiceFacade, Depends(get_service_facade)]
Team = Annotated[TeamFacade, Depends(get_team_facade)]
Contact = Annotated[ContactFacade, Depends(get_contact_facade)]
