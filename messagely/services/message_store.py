"""Message Store — persists directed messages and their read state.

Invariants:
    - create() requires both usernames to exist (FK constraint) or raises
      ReferentialViolationError with nothing persisted
    - sent_at is set once at creation; read_at moves null -> non-null once
    - mark_read() is first-write-wins: a single conditional UPDATE (read_at IS NULL)
      makes repeat calls return the original timestamp, never a later one
    - No authorization here: callers consult core/access_policy.py first
    - Ids outside 1..MAX_MESSAGE_ID are NotFound without touching the database;
      drivers reject them as overflows rather than as missing rows

Design Decisions:
    - Explicit aliased joins (sender/recipient) mirror the identity snippets the
      API returns; column selects never go through the session identity map
    - Lists ordered by id (insertion order) so results are deterministic
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import Select, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from messagely.core.errors import NotFoundError, ReferentialViolationError
from messagely.infrastructure.database import guard_store
from messagely.models.message import MAX_MESSAGE_ID, Message
from messagely.models.user import User
from messagely.schemas.message import (
    MessageCreated, MessageDetail, ReadReceipt, ReceivedMessage, SentMessage,
)
from messagely.schemas.user import IdentitySnippet

logger = logging.getLogger(__name__)

Sender = aliased(User, name="sender")
Recipient = aliased(User, name="recipient")


def _party_columns(party, prefix: str) -> tuple:
    return (
        party.username.label(f"{prefix}_username"),
        party.first_name.label(f"{prefix}_first_name"),
        party.last_name.label(f"{prefix}_last_name"),
        party.phone.label(f"{prefix}_phone"),
    )


def _snippet(row, prefix: str) -> IdentitySnippet:
    return IdentitySnippet(
        username=getattr(row, f"{prefix}_username"),
        first_name=getattr(row, f"{prefix}_first_name"),
        last_name=getattr(row, f"{prefix}_last_name"),
        phone=getattr(row, f"{prefix}_phone"),
    )


def _message_columns() -> tuple:
    return (Message.id, Message.body, Message.sent_at, Message.read_at)


def _ensure_addressable(message_id: int) -> None:
    if not 1 <= message_id <= MAX_MESSAGE_ID:
        raise NotFoundError("Message", str(message_id))


class MessageStore:
    """Create, fetch, mark read and list messages."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create(
        self, from_username: str, to_username: str, body: str,
    ) -> MessageCreated:
        async with guard_store(self._db, "create_message"):
            try:
                result = await self._db.execute(
                    insert(Message)
                    .values(
                        from_username=from_username,
                        to_username=to_username,
                        body=body,
                        sent_at=datetime.now(timezone.utc),
                        read_at=None,
                    )
                    .returning(Message.id, Message.sent_at),
                )
                row = result.one()
                await self._db.commit()
            except IntegrityError as e:
                await self._db.rollback()
                raise ReferentialViolationError(from_username, to_username) from e
        logger.info(
            "Message created",
            extra={"username": from_username, "message_id": row.id},
        )
        return MessageCreated(
            id=row.id,
            from_username=from_username,
            to_username=to_username,
            body=body,
            sent_at=row.sent_at,
            read_at=None,
        )

    async def mark_read(self, message_id: int) -> ReadReceipt:
        _ensure_addressable(message_id)
        async with guard_store(self._db, "mark_read"):
            await self._db.execute(
                update(Message)
                .where(Message.id == message_id, Message.read_at.is_(None))
                .values(read_at=datetime.now(timezone.utc))
                .execution_options(synchronize_session=False),
            )
            read_at = await self._db.scalar(
                select(Message.read_at).where(Message.id == message_id),
            )
            if read_at is None:
                await self._db.rollback()
                raise NotFoundError("Message", str(message_id))
            await self._db.commit()
        return ReadReceipt(id=message_id, read_at=read_at)

    async def get(self, message_id: int) -> MessageDetail:
        _ensure_addressable(message_id)
        stmt = (
            select(
                *_message_columns(),
                *_party_columns(Sender, "from"),
                *_party_columns(Recipient, "to"),
            )
            .join(Sender, Message.from_username == Sender.username)
            .join(Recipient, Message.to_username == Recipient.username)
            .where(Message.id == message_id)
        )
        async with guard_store(self._db, "get_message"):
            row = (await self._db.execute(stmt)).one_or_none()
        if row is None:
            raise NotFoundError("Message", str(message_id))
        return MessageDetail(
            id=row.id,
            from_user=_snippet(row, "from"),
            to_user=_snippet(row, "to"),
            body=row.body,
            sent_at=row.sent_at,
            read_at=row.read_at,
        )

    async def list_from(self, username: str) -> list[SentMessage]:
        stmt = (
            select(*_message_columns(), *_party_columns(Recipient, "to"))
            .join(Recipient, Message.to_username == Recipient.username)
            .where(Message.from_username == username)
        )
        rows = await self._fetch_all(stmt, "list_from")
        return [
            SentMessage(
                id=row.id,
                to_user=_snippet(row, "to"),
                body=row.body,
                sent_at=row.sent_at,
                read_at=row.read_at,
            )
            for row in rows
        ]

    async def list_to(self, username: str) -> list[ReceivedMessage]:
        stmt = (
            select(*_message_columns(), *_party_columns(Sender, "from"))
            .join(Sender, Message.from_username == Sender.username)
            .where(Message.to_username == username)
        )
        rows = await self._fetch_all(stmt, "list_to")
        return [
            ReceivedMessage(
                id=row.id,
                from_user=_snippet(row, "from"),
                body=row.body,
                sent_at=row.sent_at,
                read_at=row.read_at,
            )
            for row in rows
        ]

    async def _fetch_all(self, stmt: Select, operation: str) -> list:
        async with guard_store(self._db, operation):
            result = await self._db.execute(stmt.order_by(Message.id))
            return list(result.all())
