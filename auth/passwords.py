"""
auth/passwords.py -- Salted PBKDF2 password hashing.

Security design decisions:
  Salt: secrets.token_bytes() draws from the OS CSPRNG. The salt is stored
       hex-encoded next to the hash and never regenerated for an existing
       credential.

  Derivation: hashlib.pbkdf2_hmac with 100,000 iterations and a 32-byte key.
       The iteration count is the brute-force cost of every guess. Do not
       lower it without a security review -- stored hashes also depend on it.

       The hex salt string is fed to PBKDF2 as its UTF-8 bytes, NOT hex-decoded.
       Existing records were derived that way, so changing it would invalidate
       every stored hash.

  Algorithm: the digest name is stored per user (hash_function column), so
       verification reproduces the registration-time derivation even after the default
       in Settings.hash_implementation changes. An unknown name raises
       ValueError from hashlib; it is never caught here.

  Comparison: hmac.compare_digest, so verification time does not depend on
       where the first differing character is.

The plaintext password is never logged or returned.

Layer rule: no imports from feeds/. Stdlib only.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from collections.abc import Callable

PBKDF2_ITERATIONS = 100_000
DERIVED_KEY_LENGTH = 32
DEFAULT_SALT_BYTES = 10


def generate_salt(length: int = DEFAULT_SALT_BYTES) -> str:
    """Return `length` cryptographically secure random bytes as a hex string.

    10 bytes -> 20 hex characters. Any failure of the OS entropy source
    propagates to the caller.
    """
    return secrets.token_bytes(length).hex()


def derive_hash(password: str, algorithm: str, salt: str | None = None) -> str:
    """Derive the stored hash for `password` as a 64-char hex string.

    Deterministic in (password, algorithm, salt). When salt is None a fresh
    one is generated here -- callers that need to store the hash must pass the
    salt they are going to store alongside it.
    """
    if salt is None:
        salt = generate_salt()
    derived = hashlib.pbkdf2_hmac(
        algorithm,
        password.encode("utf-8"),
        salt.encode("utf-8"),
        PBKDF2_ITERATIONS,
        dklen=DERIVED_KEY_LENGTH,
    )
    return derived.hex()


def verify_password(given_password: str, stored_salt: str, algorithm: str) -> Callable[[str], bool]:
    """Bind a presented password to stored credential metadata.

    Returns a function that takes the stored hash and reports whether the
    presented password derives to it:

        verify_password("hunter2", user.password_salt, user.hash_function)(user.password_hash)
    """

    def matches(stored_hash: str) -> bool:
        candidate = derive_hash(given_password, algorithm, stored_salt)
        return hmac.compare_digest(candidate.encode("ascii"), stored_hash.encode("utf-8"))

    return matches
