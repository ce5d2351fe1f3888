"""
feeds/models.py -- Shape of a dataset entry and helpers shared by feed adapters.

A dataset entry is a plain dict. Adapters translate their source's records
into this shape and pass every entry through is_dataset_entry() before handing
it on; entries that fail the check are dropped by the adapter.
"""

from auth.passwords import generate_salt
from core.schema import make_checker

# Fields every dataset entry must carry. Values are not type-checked; extra
# fields (accession_id, principal_investigator, visible, ...) are allowed.
DATASET_ENTRY_FIELDS: tuple[str, ...] = (
    "name",
    "source",
    "workflow",
    "status",
    "location",
    "datatype",
    "institution",
    "description",
)

is_dataset_entry = make_checker(DATASET_ENTRY_FIELDS)


def new_accession_id() -> str:
    """Return a new 20-char hex accession ID.

    Hex keeps the ID alphanumeric, so it is safe to use as a directory or
    file name for the dataset's uploads.
    """
    return generate_salt(10)
