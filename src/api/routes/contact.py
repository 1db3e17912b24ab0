"""Contact form endpoint."""

from fastapi import APIRouter, status

from src.api.dependencies import Contact
from src.api.schemas.contact import ContactMessageRequest, ContactMessageResponse
from src.domain.facades import CONTACT_ACKNOWLEDGEMENT

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "One or more fields are invalid"}},
)
async def submit_contact_message(
    body: ContactMessageRequest, contact: Contact
) -> ContactMessageResponse:
    """Store a contact message and acknowledge it.

    Each invalid field is reported once under ``details.field_errors``
    and nothing is stored.
    """
    saved = await contact.submit(body.name, body.email, body.message)
    return ContactMessageResponse(
        success=True,
        message=CONTACT_ACKNOWLEDGEMENT,
        id=saved.id or "",
    )
