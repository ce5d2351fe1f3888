"""
auth/service.py -- User registration and local password authentication.

These are the flows that consume auth/passwords.py. Persistence is an external
collaborator expressed as the UserStore protocol: anything with
get_by_username() and create_user() can back them (an ORM repository, a
directory service, a test double).

Security design decisions:
  Registration resolves the salt lazily. A salt is drawn only when the caller
       did not supply one, and the same salt is both used for derivation and
       stored on the record.

  Timing equalization: authenticate_user() always runs one PBKDF2
       derivation, against a dummy credential when the username is unknown,
       so response time does not reveal whether a username exists.

  Logging: usernames are logged, passwords never are.

Layer rule: no imports from feeds/. Import from core/ is allowed -- core/ is
the kernel and has no reverse dependencies.
"""

from __future__ import annotations

import logging
from typing import Protocol

from auth.models import User
from auth.passwords import derive_hash, generate_salt, verify_password
from core.config import Settings, get_settings

logger = logging.getLogger("datareg.auth")

# Dummy hash for timing equalization. It never matches anything; only the
# cost of deriving against it matters. Salt and digest come from Settings so
# the dummy costs the same as a current registration.
_DUMMY_HASH = "0" * 64


class UserStore(Protocol):
    """Persistence collaborator for User records."""

    def get_by_username(self, username: str) -> User | None: ...

    def create_user(self, user: User) -> User: ...


def user_exists(store: UserStore, username: str) -> bool:
    return store.get_by_username(username) is not None


def register_user(
    store: UserStore,
    username: str,
    password: str,
    email: str | None = None,
    role: str = "",
    salt: str | None = None,
    hash_function: str | None = None,
) -> User | None:
    """Create a user with a freshly salted password hash.

    Returns the stored User, or None if the username is already taken.
    salt defaults to a new random salt of Settings.salt_bytes and
    hash_function to Settings.hash_implementation. An unsupported
    hash_function raises ValueError before anything is stored.
    """
    if user_exists(store, username):
        logger.info("Registration skipped: username %r already exists", username)
        return None

    settings = get_settings()
    if salt is None:
        salt = generate_salt(settings.salt_bytes)
    if hash_function is None:
        hash_function = settings.hash_implementation

    user = User(
        username=username,
        password_hash=derive_hash(password, hash_function, salt),
        password_salt=salt,
        hash_function=hash_function,
        email=email,
        role=role,
    )
    created = store.create_user(user)
    logger.info("Registered user %r (hash_function=%s)", username, hash_function)
    return created


def authenticate_user(store: UserStore, username: str, password: str) -> User | None:
    """Authenticate a local username/password login with timing equalization.

    - Unknown username: derivation runs against the dummy credential.
    - Wrong password: derivation runs against the real credential.

    Returns the User on success, None on any failure. Both failures are
    normal outcomes and are logged at INFO, not raised.
    """
    user = store.get_by_username(username)
    if user is None:
        # Equalize timing -- do NOT return before deriving
        settings = get_settings()
        dummy_salt = "0" * (settings.salt_bytes * 2)
        verify_password(password, dummy_salt, settings.hash_implementation)(_DUMMY_HASH)
        logger.info("Login failed: unknown username %r", username)
        return None
    if not verify_password(password, user.password_salt, user.hash_function)(user.password_hash):
        logger.info("Login failed: incorrect password for %r", username)
        return None
    return user


def seed_test_user(store: UserStore, settings: Settings | None = None) -> User | None:
    """Register the TEST_USERNAME / TEST_PASSWORD account if configured.

    Returns the seeded (or already existing) user, or None when the seed
    account is not configured. Safe to call on every startup.
    """
    settings = settings or get_settings()
    if not (settings.test_username and settings.test_password):
        return None
    user = register_user(
        store,
        settings.test_username,
        settings.test_password,
        hash_function=settings.hash_implementation,
    )
    if user is None:
        logger.info("Seed user %r already exists", settings.test_username)
        return store.get_by_username(settings.test_username)
    return user
