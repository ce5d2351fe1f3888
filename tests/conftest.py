"""
tests/conftest.py -- Shared test fixtures for the dataset registry tests.

This module provides:
  - _fresh_settings (autouse): clears the get_settings() lru_cache around each
    test so monkeypatched environment variables take effect.
  - InMemoryUserStore / user_store: a dict-backed UserStore for the
    registration and login flows. Persistence is an external collaborator, so
    the flows are tested against this double rather than a real database.
  - InMemoryDatasetStore / dataset_store: the same for dataset registration.
"""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import replace
from typing import Any

import pytest

from auth.models import User
from core.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate every test from the developer's environment and the settings cache."""
    for var in ("HASH_IMPLEMENTATION", "SALT_BYTES", "TEST_USERNAME", "TEST_PASSWORD", "DGA_REGISTRY_URL", "DEBUG"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class InMemoryUserStore:
    """UserStore backed by a dict keyed on username. Assigns sequential IDs."""

    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.create_calls = 0

    def get_by_username(self, username: str) -> User | None:
        return self.users.get(username)

    def create_user(self, user: User) -> User:
        self.create_calls += 1
        stored = replace(user, id=len(self.users) + 1)
        self.users[user.username] = stored
        return stored


@pytest.fixture
def user_store() -> InMemoryUserStore:
    return InMemoryUserStore()


class InMemoryDatasetStore:
    """DatasetStore backed by a list. Assigns sequential IDs."""

    def __init__(self) -> None:
        self.datasets: list[dict[str, Any]] = []
        self.create_calls = 0

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for dataset in self.datasets:
            if all(dataset.get(key) == value for key, value in query.items()):
                return dataset
        return None

    def create_dataset(self, record: dict[str, Any]) -> dict[str, Any]:
        self.create_calls += 1
        stored = {**record, "id": len(self.datasets) + 1}
        self.datasets.append(stored)
        return stored

    def list_by_user(self, user_id: int) -> list[dict[str, Any]]:
        return [d for d in self.datasets if d.get("user_id") == user_id]


@pytest.fixture
def dataset_store() -> InMemoryDatasetStore:
    return InMemoryDatasetStore()
