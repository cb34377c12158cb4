"""Message Schemas — send payload and the four message views.

Invariants:
    - MessageCreate.body: 1-10000 chars, non-blank
    - read_at is None until the recipient marks the message read
    - Views embed identity snippets for the counterparty only (lists) or both
      parties (detail)
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from messagely.schemas.user import IdentitySnippet


class MessageCreate(BaseModel):
    """Send request — sender is always the authenticated user."""
    to_username: str = Field(min_length=1, max_length=50)
    body: str = Field(min_length=1, max_length=10_000)

    @field_validator("body")
    @classmethod
    def reject_blank_body(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("body cannot be empty or whitespace")
        return v


class MessageCreated(BaseModel):
    """Freshly stored message, as returned from the send endpoint."""
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None = None


class MessageDetail(BaseModel):
    """Full view with both parties."""
    id: int
    from_user: IdentitySnippet
    to_user: IdentitySnippet
    body: str
    sent_at: datetime
    read_at: datetime | None = None


class SentMessage(BaseModel):
    """Entry in a sender's outbox — recipient embedded."""
    id: int
    to_user: IdentitySnippet
    body: str
    sent_at: datetime
    read_at: datetime | None = None


class ReceivedMessage(BaseModel):
    """Entry in a recipient's inbox — sender embedded."""
    id: int
    from_user: IdentitySnippet
    body: str
    sent_at: datetime
    read_at: datetime | None = None


class ReadReceipt(BaseModel):
    id: int
    read_at: datetime


class MessageDetailResponse(BaseModel):
    message: MessageDetail


class MessageCreatedResponse(BaseModel):
    message: MessageCreated


class ReadReceiptResponse(BaseModel):
    message: ReadReceipt


class SentMessagesResponse(BaseModel):
    messages: list[SentMessage]


class ReceivedMessagesResponse(BaseModel):
    messages: list[ReceivedMessage]
