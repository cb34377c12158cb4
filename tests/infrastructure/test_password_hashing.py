"""Password Hashing — bcrypt via passlib.

Tests:
    - hashes are salted (same password, different digests) and never equal the input
    - verify accepts the right password only
    - verify against a missing hash is False, not an error
    - passwords past 72 bytes are never hashed and never verify
"""

import pytest

from messagely.core.domain_types import SecurityConfig
from messagely.infrastructure.password_hashing import PasswordHasher


async def test_hash_is_salted_bcrypt(hasher):
    first = await hasher.hash("correct horse")
    second = await hasher.hash("correct horse")
    assert first != second
    assert first != "correct horse"
    assert first.startswith("$2b$04$")


async def test_verify_round_trip(hasher):
    digest = await hasher.hash("correct horse")
    assert await hasher.verify("correct horse", digest) is True
    assert await hasher.verify("battery staple", digest) is False


async def test_verify_missing_hash_is_false(hasher):
    assert await hasher.verify("anything", None) is False


async def test_work_factor_comes_from_config():
    hasher = PasswordHasher(SecurityConfig(secret_key="k", bcrypt_work_factor=5))
    assert (await hasher.hash("pw")).startswith("$2b$05$")


async def test_hash_refuses_password_past_72_bytes(hasher):
    with pytest.raises(ValueError):
        await hasher.hash("x" * 73)


async def test_verify_rejects_overlong_password_with_matching_prefix(hasher):
    digest = await hasher.hash("x" * 72)
    assert await hasher.verify("x" * 72, digest) is True
    assert await hasher.verify("x" * 72 + "tail", digest) is False
