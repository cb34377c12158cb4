"""Access Policy — decides whether an authenticated identity may act on a resource.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Predicates (can_*) return bool; ensure_* raise ForbiddenError on denial
    - Decisions use already-fetched usernames only, never the result of a mutation
    - Mark-read is decided BEFORE the store mutates the message
    - Sending a message and listing users need only an authenticated identity,
      so they have no rule here (no block or contact-list mechanism)

Design Decisions:
    - Pure functions over a policy class: testable without fixtures or mocks
    - Usernames in, not ORM rows or schemas: core never depends on the shell
"""

from messagely.core.domain_types import Username
from messagely.core.errors import ErrorContext, ForbiddenError


def can_view_message(actor: Username, from_username: str, to_username: str) -> bool:
    """Sender and recipient may view a message."""
    return actor in (from_username, to_username)


def can_mark_read(actor: Username, to_username: str) -> bool:
    """Only the recipient may mark a message read."""
    return actor == to_username


def can_act_as(actor: Username, target_username: str) -> bool:
    """Profiles and message lists are visible to their owner only."""
    return actor == target_username


def ensure_can_view_message(
    actor: Username, message_id: int, from_username: str, to_username: str,
) -> None:
    if not can_view_message(actor, from_username, to_username):
        raise ForbiddenError(
            "view this message",
            ErrorContext(username=actor, message_id=message_id),
        )


def ensure_can_mark_read(
    actor: Username, message_id: int, to_username: str,
) -> None:
    if not can_mark_read(actor, to_username):
        raise ForbiddenError(
            "mark this message as read",
            ErrorContext(username=actor, message_id=message_id),
        )


def ensure_can_act_as(actor: Username, target_username: str) -> None:
    # Checked before lookup: non-owners learn nothing about whether target exists
    if not can_act_as(actor, target_username):
        raise ForbiddenError(
            "access another user's account",
            ErrorContext(username=actor),
        )
