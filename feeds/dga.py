"""
feeds/dga.py -- Adapter for the Diabetes Epigenome Atlas annotation registry.

The registry is a public JSON endpoint listing annotation datasets. This
module fetches it, translates each row into a dataset entry and gates the
result with is_dataset_entry().

Pipeline:
  fetch_annotation_registry() -> parse_registry_payload() -> list[dict] rows
  -> adapt_annotations() -> list of dataset entries -> filter_entries()

dga_annotations() runs the whole pipeline. Network and decoding failures are
logged and turn into an empty result -- never raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from core.config import get_settings
from feeds.models import is_dataset_entry

logger = logging.getLogger("datareg.feeds")

REGISTRY_QUERY = {"type": "Annotation"}

# Shared across calls for connection pooling. max_redirects=3 replaces the
# requests default of 30 -- this is a single known endpoint.
_session = requests.Session()
_session.max_redirects = 3


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------


def fetch_annotation_registry(url: Optional[str] = None, timeout: Optional[int] = None) -> Optional[dict[str, Any]]:
    """POST the annotation query to the registry and return the decoded JSON.

    url and timeout default to Settings.dga_registry_url / dga_timeout.
    Returns None if the request fails or the body is not a JSON object.
    """
    settings = get_settings()
    url = url or settings.dga_registry_url
    timeout = timeout or settings.dga_timeout
    try:
        resp = _session.post(url, json=REGISTRY_QUERY, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        logger.warning("DGA registry fetch failed for %s: %s", url, e)
        return None
    except ValueError as e:
        logger.warning("DGA registry returned invalid JSON from %s: %s", url, e)
        return None
    if not isinstance(data, dict):
        logger.warning("DGA registry returned %s, expected a JSON object", type(data).__name__)
        return None
    return data


# ---------------------------------------------------------------------------
# Parse / translate
# ---------------------------------------------------------------------------


def parse_registry_payload(payload: Optional[dict[str, Any]]) -> list[dict[str, Any]]:
    """Unwrap the row list from a registry response.

    Registry schema (simplified):
    {
      "annotations": [
        {"annotation_id": "DGA0001", "portal_tissue_id": "islet", ...}
      ]
    }

    The wrapper key is not stable, so the first value is taken. Returns an
    empty list if the payload is empty or the first value is not a list.
    Non-dict rows are dropped.
    """
    if not payload:
        return []
    rows = next(iter(payload.values()))
    if not isinstance(rows, list):
        return []
    return [row for row in rows if isinstance(row, dict)]


def to_dataset_entry(row: dict[str, Any]) -> Optional[dict[str, Any]]:
    """Translate one registry row into a dataset entry, or None if it fails the gate.

    Missing source keys map to None; the gate checks presence, not values.
    """
    entry = {
        "accession_id": row.get("annotation_id"),
        "name": f"{row.get('portal_tissue_id')}",
        "description": f"{row.get('portal_tissue')}",
        "source": row.get("annotation_source"),
        "workflow": _join(row.get("underlying_assay")),
        "status": row.get("dataset_status"),
        "location": "diabetesgenome.org",
        "datatype": "annotation",
        "institution": "DGA",
        "principal_investigator": row.get("lab"),
        # The registry is public: anything listed here is visible.
        "visible": 1,
    }
    return is_dataset_entry(entry)


def _join(value: Any) -> str:
    # underlying_assay is sometimes a list of assay names
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return f"{value}"


def adapt_annotations(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Translate every row and keep the entries that pass is_dataset_entry()."""
    entries: list[dict[str, Any]] = []
    for row in rows:
        entry = to_dataset_entry(row)
        if entry is not None:
            entries.append(entry)
    dropped = len(rows) - len(entries)
    if dropped:
        logger.warning("Dropped %d DGA row(s) that did not match the dataset entry schema", dropped)
    return entries


def filter_entries(entries: list[dict[str, Any]], criteria: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
    """Keep entries whose value equals criteria[key] for every key.

    An entry missing a criteria key does not match. Empty or None criteria
    keep every entry.
    """
    if not criteria:
        return list(entries)
    return [entry for entry in entries if all(key in entry and entry[key] == value for key, value in criteria.items())]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def dga_annotations(criteria: Optional[dict[str, Any]] = None, url: Optional[str] = None) -> list[dict[str, Any]]:
    """Fetch the registry and return dataset entries matching `criteria`.

    Returns an empty list when the registry is unavailable.
    """
    payload = fetch_annotation_registry(url)
    entries = adapt_annotations(parse_registry_payload(payload))
    matched = filter_entries(entries, criteria)
    logger.info("DGA registry: %d entries, %d matched", len(entries), len(matched))
    return matched
