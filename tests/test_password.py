"""Password hasher tests."""

import pytest

from authgate.auth.password import PasswordHasher, dummy_hash


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_and_verify(hasher):
    digest = hasher.hash("secret1")
    assert digest.startswith("$2b$04$")
    assert digest != "secret1"
    assert hasher.verify("secret1", digest)
    assert not hasher.verify("secret2", digest)


def test_hash_is_salted(hasher):
    assert hasher.hash("secret1") != hasher.hash("secret1")


def test_default_cost_is_ten():
    assert PasswordHasher().hash("secret1").startswith("$2b$10$")


@pytest.mark.parametrize("digest", ["", "not-a-hash", "$2b$04$tooshort", "$5$legacy$sha"])
def test_verify_malformed_digest_returns_false(hasher, digest):
    assert hasher.verify("secret1", digest) is False


def test_verify_rejects_non_string_input(hasher):
    with pytest.raises(TypeError):
        hasher.verify(None, hasher.hash("secret1"))
    with pytest.raises(TypeError):
        hasher.verify("secret1", None)
    with pytest.raises(TypeError):
        hasher.hash(b"bytes")


def test_long_passwords_truncate_at_72_bytes(hasher):
    base = "x" * 72
    digest = hasher.hash(base + "tail-one")
    assert hasher.verify(base + "tail-two", digest)


def test_unicode_password(hasher):
    digest = hasher.hash("pässwörd-✓")
    assert hasher.verify("pässwörd-✓", digest)
    assert not hasher.verify("passwort-✓", digest)


@pytest.mark.asyncio
async def test_async_variants(hasher):
    digest = await hasher.hash_async("secret1")
    assert await hasher.verify_async("secret1", digest)
    assert not await hasher.verify_async("nope", digest)


def test_dummy_hash_is_cached_per_cost():
    assert dummy_hash(4) is dummy_hash(4)
    assert dummy_hash(4).startswith("$2b$04$")
