"""
catalog/service.py -- Dataset registration and lookup.

Persistence is an external collaborator expressed as the DatasetStore
protocol, in the same way auth/service.py treats users: anything with
find_one(), create_dataset() and list_by_user() can back these flows.

Registration contract:
  - The submitted record passes through is_dataset_entry() first. A record
    missing a required field is refused: the gate logs the missing field and
    register_dataset() returns None without drawing an accession ID or
    touching the store.
  - A conforming record is copied, never mutated. The copy gets a fresh
    accession_id, the owning user_id and state 0 (registered, not yet
    processed). Caller-supplied values for those three keys are overwritten.
  - Extra fields (principal_investigator, embargo_date, ...) are kept.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from feeds.models import is_dataset_entry, new_accession_id

logger = logging.getLogger("datareg.catalog")

# Lifecycle state of a dataset that has just been registered.
STATE_REGISTERED = 0


class DatasetStore(Protocol):
    """Persistence collaborator for dataset records."""

    def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None: ...

    def create_dataset(self, record: dict[str, Any]) -> dict[str, Any]: ...

    def list_by_user(self, user_id: int) -> list[dict[str, Any]]: ...


def dataset_exists(store: DatasetStore, query: dict[str, Any]) -> bool:
    """True if any stored dataset matches every key/value in query."""
    return store.find_one(query) is not None


def register_dataset(store: DatasetStore, user_id: int, record: dict[str, Any]) -> dict[str, Any] | None:
    """Store a new dataset owned by user_id.

    Returns the stored record, or None if record is not a dataset entry.
    """
    if is_dataset_entry(record) is None:
        logger.info("Dataset registration refused for user %s: incomplete entry", user_id)
        return None

    dataset = {
        **record,
        "accession_id": new_accession_id(),
        "user_id": user_id,
        "state": STATE_REGISTERED,
    }
    created = store.create_dataset(dataset)
    logger.info("Registered dataset %r as %s for user %s", dataset["name"], dataset["accession_id"], user_id)
    return created


def datasets_for_user(store: DatasetStore, user_id: int) -> list[dict[str, Any]]:
    return store.list_by_user(user_id)
