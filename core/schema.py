"""
core/schema.py -- Runtime presence checks for loosely-typed records.

make_checker() builds a reusable gate from a list of required field names.
Records coming from outside the process (external feeds, form posts) are
plain dicts, so the gate checks structure at the boundary before anything is
handed to persistence or transformation code.

Contract:
  - Presence only. Values are never inspected: a field set to None or ""
    passes. Extra fields always pass.
  - A failing record is reported by value: the checker logs one error naming
    the first missing field and returns None. It never raises.
  - A passing record is returned as-is (same object, not a copy), so the
    checker can be used inline: entries = [e for e in map(check, rows) if e].

Usage:
    is_dataset_entry = make_checker(["name", "source", "datatype"])
    is_dataset_entry({"name": "x", "source": "y", "datatype": "z"})  # -> the dict
    is_dataset_entry({"name": "x"})                                   # -> None
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

logger = logging.getLogger("datareg.schema")


def _own_fields(candidate: Any) -> Iterable[str]:
    # Mappings expose their keys; other objects their instance attributes.
    # Class attributes and properties are not "own" fields.
    if isinstance(candidate, Mapping):
        return candidate.keys()
    return getattr(candidate, "__dict__", {}).keys()


def make_checker(required_fields: Iterable[str]) -> Callable[[Any], Any | None]:
    """Return a function that passes through records carrying every required field.

    The field list is copied into a tuple at construction time so later
    mutation of the caller's list does not change the checker.
    """
    fields = tuple(required_fields)

    def check(candidate: Any) -> Any | None:
        present = _own_fields(candidate)
        for name in fields:
            if name not in present:
                logger.error("Object does not have property %s, object: %r", name, candidate)
                return None
        return candidate
    return check
