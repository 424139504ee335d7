"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks. The work
factor defaults to 10 rounds; each +1 doubles the cost.

bcrypt is CPU-bound. Inside request handlers use hash_async() and
verify_async(), which run the work in a thread so the event loop keeps
serving other requests while a hash is computed.
"""

import asyncio
import functools

import bcrypt

# bcrypt only looks at the first 72 bytes of input.
_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    if not isinstance(password, str):
        raise TypeError("password must be a str")
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way hashing and verification of plaintext passwords."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt.

        Learn: bcrypt includes a random salt automatically and produces
        hashes starting with "$2b$", so hashing the same password twice
        gives two different digests.
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        Returns False on mismatch and on malformed digests. bcrypt.checkpw
        compares in constant time.
        """
        pw_bytes = _encode(password)
        if not isinstance(password_hash, str):
            raise TypeError("password_hash must be a str")
        try:
            return bcrypt.checkpw(pw_bytes, password_hash.encode("utf-8"))
        except ValueError:
            return False

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, password_hash)

    async def dummy_hash_async(self) -> str:
        return await asyncio.to_thread(dummy_hash, self.rounds)


@functools.lru_cache(maxsize=None)
def dummy_hash(rounds: int) -> str:
    """A fixed hash to verify against when the user does not exist.

    Checking a password against it costs the same as a real check, so an
    unknown email cannot be told apart from a wrong password by timing.
    """
    return PasswordHasher(rounds).hash("authgate-timing-dummy")
