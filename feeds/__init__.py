"""feeds/ -- Adapters that turn external dataset registries into dataset entries.

Layer rule: feeds/ may import from core/ and auth/. Only the CLI imports the
adapters; catalog/ imports feeds/models.py for the entry shape.
"""
