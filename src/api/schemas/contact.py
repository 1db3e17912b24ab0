"""Request and response bodies for the contact form endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class ContactMessageRequest(BaseModel):
    """A contact form submission.

    Fields are optional at the schema level so that a missing or blank
    value is reported by the contact rules with the same per-field message
    as any other violation. Unknown keys, including any client-supplied
    timestamp, are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(
        default=None,
        description="Sender name, 2 to 100 characters",
        examples=["Ada Lovelace"],
    )
    email: str | None = Field(
        default=None,
        description="Sender email address",
        examples=["ada@example.com"],
    )
    message: str | None = Field(
        default=None,
        description="Message body, 10 to 1000 characters",
        examples=["Interested in your services, please contact me back."],
    )


class ContactMessageResponse(BaseModel):
    """Confirmation returned after a contact message is stored."""

    success: bool = Field(..., description="Whether the message was stored")
    message: str = Field(..., description="Acknowledgement to show the sender")
    id: str = Field(..., description="Identifier of the stored message")
