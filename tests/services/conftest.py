"""Service test fixtures — stores bound to the per-test SQLite session."""

import pytest

from messagely.services.credential_store import CredentialStore
from messagely.services.message_store import MessageStore


@pytest.fixture
def credential_store(test_db, hasher) -> CredentialStore:
    return CredentialStore(test_db, hasher)


@pytest.fixture
def message_store(test_db) -> MessageStore:
    return MessageStore(test_db)


@pytest.fixture
async def alice_and_bob(credential_store):
    """Register alice and bob; returns their usernames."""
    await credential_store.register("alice", "alice-pw", "Alice", "Liddell", "555-0101")
    await credential_store.register("bob", "bob-pw", "Bob", "Builder", "555-0102")
    return "alice", "bob"
