"""Message Routes — view, send and mark read.

Invariants:
    - Every route requires a valid bearer token
    - View: sender or recipient only (403 otherwise)
    - Send: any caller to any existing user; sender is always the caller
    - Mark read: recipient only, checked BEFORE the store mutates read_at, so a
      rejected attempt leaves the message unread
"""

from fastapi import APIRouter, Depends, status

from messagely.api.dependencies import get_current_username, get_message_store
from messagely.core.access_policy import ensure_can_mark_read, ensure_can_view_message
from messagely.core.domain_types import Username
from messagely.schemas.message import (
    MessageCreate, MessageCreatedResponse, MessageDetailResponse, ReadReceiptResponse,
)
from messagely.services.message_store import MessageStore

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/{message_id}", response_model=MessageDetailResponse)
async def get_message(
    message_id: int,
    actor: Username = Depends(get_current_username),
    store: MessageStore = Depends(get_message_store),
):
    message = await store.get(message_id)
    ensure_can_view_message(
        actor, message.id, message.from_user.username, message.to_user.username,
    )
    return MessageDetailResponse(message=message)


@router.post(
    "", response_model=MessageCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    body: MessageCreate,
    actor: Username = Depends(get_current_username),
    store: MessageStore = Depends(get_message_store),
):
    message = await store.create(actor, body.to_username, body.body)
    return MessageCreatedResponse(message=message)


@router.post("/{message_id}/read", response_model=ReadReceiptResponse)
async def mark_message_read(
    message_id: int,
    actor: Username = Depends(get_current_username),
    store: MessageStore = Depends(get_message_store),
):
    """Mark read: => {message: {id, read_at}}. Repeat calls keep the first read_at."""
    message = await store.get(message_id)
    ensure_can_mark_read(actor, message.id, message.to_user.username)
    return ReadReceiptResponse(message=await store.mark_read(message_id))
