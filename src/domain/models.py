"""Content entities served by the API.

Projects, services and team members are seeded by an external process and
only read here. Contact messages are created through the contact facade and
never read back.
"""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from src.infrastructure.database.base import DocumentModel


class ProjectStatus(StrEnum):
    """Lifecycle stage of a portfolio project.

    The member values are the tokens used in stored documents, JSON bodies
    and the ``/projects/status/{status}`` path.
    """

    COMPLETED = "COMPLETED"
    UPCOMING = "UPCOMING"
    IN_PROGRESS = "IN_PROGRESS"

    @classmethod
    def parse(cls, token: str) -> "ProjectStatus | None":
        """Return the status for an exact token, or None if unknown."""
        try:
            return cls(token)
        except ValueError:
            return None


class Project(DocumentModel):
    """A portfolio project."""

    __collection__ = "projects"

    title: str
    description: str
    image_url: str = Field(description="URL of the project's cover image")
    status: ProjectStatus
    technologies: list[str] = Field(
        default_factory=list, description="Technology names, in display order"
    )


class Service(DocumentModel):
    """A service offering."""

    __collection__ = "services"

    title: str
    description: str
    icon_identifier: str = Field(
        description="Opaque icon token resolved by the frontend",
        examples=["code", "cloud", "palette"],
    )


class TeamMember(DocumentModel):
    """A member of the team shown on the About page."""

    __collection__ = "team_members"

    name: str
    title: str
    bio: str
    profile_image_url: str


class ContactMessage(DocumentModel):
    """A contact form submission."""

    __collection__ = "contact_messages"

    name: str
    email: str
    message: str
    submission_date: datetime = Field(
        description="Server time at which the message was accepted (UTC)"
    )
