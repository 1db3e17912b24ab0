"""Per-resource operations behind the HTTP boundary.

Each facade wraps exactly one repository and holds no state between
requests. Read facades return ``None`` for absent identifiers and leave the
presence/absence decision to the boundary; validation failures raise
``ValidationError`` before the store is touched.
"""

from collections.abc import Callable
from datetime import UTC, datetime

from loguru import logger

from src.core.exceptions import ValidationError
from src.domain.models import (
    ContactMessage,
    Project,
    ProjectStatus,
    Service,
    TeamMember,
)
from src.domain.validation import collect_field_errors
from src.infrastructure.database.base import DocumentModel
from src.infrastructure.database.repository import DocumentRepository

CONTACT_ACKNOWLEDGEMENT = "Thank you for contacting us! We'll get back to you soon."


class ReadFacade[T: DocumentModel]:
    """List and fetch-by-id over one entity's collection."""

    def __init__(self, repository: DocumentRepository[T]) -> None:
        self.repository = repository

    async def list_all(self) -> list[T]:
        return await self.repository.find_all()

    async def get_by_id(self, entity_id: str) -> T | None:
        return await self.repository.find_by_id(entity_id)


class ProjectFacade(ReadFacade[Project]):
    """Read access to portfolio projects, including lookups by status."""

    async def list_by_status(self, token: str) -> list[Project]:
        """List projects whose status equals the given token exactly.

        Args:
            token: One of ``COMPLETED``, ``UPCOMING`` or ``IN_PROGRESS``.

        Returns:
            list[Project]: Projects with that status.

        Raises:
            ValidationError: If the token is not a known status. The store is
                not queried in that case.
        """
        status = ProjectStatus.parse(token)
        if status is None:
            allowed = ", ".join(member.value for member in ProjectStatus)
            raise ValidationError(
                f"Invalid project status '{token}'",
                field_errors={"status": f"Status must be one of: {allowed}"},
            )
        return await self.repository.find_by_field("status", status)

    async def list_by_technology(self, technology: str) -> list[Project]:
        """List projects whose technology list contains ``technology``."""
        return await self.repository.find_by_field("technologies", technology)


class ServiceFacade(ReadFacade[Service]):
    """Read access to service offerings."""


class TeamFacade(ReadFacade[TeamMember]):
    """Read access to team members."""


def utc_now() -> datetime:
    return datetime.now(UTC)


class ContactFacade:
    """Accepts contact form submissions.

    Args:
        repository: Repository for the contact message collection.
        clock: Source of the submission timestamp.
    """

    def __init__(
        self,
        repository: DocumentRepository[ContactMessage],
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.repository = repository
        self.clock = clock

    async def submit(
        self, name: str | None, email: str | None, message: str | None
    ) -> ContactMessage:
        """Validate and store one contact message.

        Args:
            name: Sender name, 2 to 100 characters.
            email: Sender email address.
            message: Message body, 10 to 1000 characters.

        Returns:
            ContactMessage: The stored message, with its new identifier.

        Raises:
            ValidationError: With one message per invalid field. Nothing is
                stored in that case.
        """
        field_errors = collect_field_errors(
            {"name": name, "email": email, "message": message}
        )
        if field_errors:
            raise ValidationError(
                "Contact message validation failed", field_errors=field_errors
            )

        saved = await self.repository.save(
            ContactMessage(
                name=name or "",
                email=email or "",
                message=message or "",
                submission_date=self.clock(),
            )
        )
        logger.info("Contact message accepted", contact_message_id=saved.id)
        return saved
