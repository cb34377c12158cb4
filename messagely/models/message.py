"""Message ORM — directed message between two existing users.

Invariants:
    - id is an autoincrement integer (monotonic)
    - from_username and to_username are foreign keys to users.username
    - sent_at set at creation and never changed
    - read_at transitions null -> non-null at most once
    - ids fit a signed 32-bit INTEGER column (1..MAX_MESSAGE_ID)

Design Decisions:
    - No ORM relationships: the message store joins users explicitly (aliased
      sender/recipient) and returns schemas, so rows never lazy-load in async code
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from messagely.db.base import Base

MAX_MESSAGE_ID = 2**31 - 1


class Message(Base):
    """Message sent by one user to another."""
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    from_username: Mapped[str] = mapped_column(
        String(50), ForeignKey("users.username"), nullable=False, index=True,
    )
    to_username: Mapped[str] = mapped_column(
        String(50), ForeignKey("users.username"), nullable=False, index=True,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    read_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

