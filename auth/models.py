"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). The flows in
auth/service.py do the work; whatever persists these records is an external
collaborator.

Layer rule: no imports from feeds/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered identity and the metadata needed to re-derive its hash.

    password_salt and hash_function are stored with the hash so verification
    can reproduce the derivation later, even if Settings.hash_implementation
    has changed since registration. The plaintext password is never a field.
    """

    username: str
    password_hash: str
    password_salt: str
    hash_function: str  # hashlib digest name, e.g. "sha256"
    email: str | None = None
    role: str = ""
    id: int | None = None
