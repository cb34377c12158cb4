"""User Routes — user directory, own profile and own message lists.

Invariants:
    - Every route requires a valid bearer token
    - /users/{username}* answer only when username is the caller (403 otherwise),
      decided before any lookup
"""

from fastapi import APIRouter, Depends

from messagely.api.dependencies import (
    get_credential_store, get_current_username, get_message_store,
)
from messagely.core.access_policy import ensure_can_act_as
from messagely.core.domain_types import Username
from messagely.schemas.message import ReceivedMessagesResponse, SentMessagesResponse
from messagely.schemas.user import UserDetailResponse, UserListResponse
from messagely.services.credential_store import CredentialStore
from messagely.services.message_store import MessageStore

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    actor: Username = Depends(get_current_username),
    store: CredentialStore = Depends(get_credential_store),
):
    """All users, ordered by username."""
    return UserListResponse(users=await store.list_users())


@router.get("/{username}", response_model=UserDetailResponse)
async def get_user(
    username: str,
    actor: Username = Depends(get_current_username),
    store: CredentialStore = Depends(get_credential_store),
):
    ensure_can_act_as(actor, username)
    return UserDetailResponse(user=await store.get(username))


@router.get("/{username}/to", response_model=ReceivedMessagesResponse)
async def get_messages_to(
    username: str,
    actor: Username = Depends(get_current_username),
    store: MessageStore = Depends(get_message_store),
):
    """Messages received by the caller, each with its sender."""
    ensure_can_act_as(actor, username)
    return ReceivedMessagesResponse(messages=await store.list_to(username))


@router.get("/{username}/from", response_model=SentMessagesResponse)
async def get_messages_from(
    username: str,
    actor: Username = Depends(get_current_username),
    store: MessageStore = Depends(get_message_store),
):
    """Messages sent by the caller, each with its recipient."""
    ensure_can_act_as(actor, username)
    return SentMessagesResponse(messages=await store.list_from(username))
