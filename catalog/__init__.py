"""catalog/ -- Registration of dataset entries owned by registry users.

Layer rule: catalog/ may import from core/, auth/ and feeds/models.py. It
does NOT import feed adapters (feeds/dga.py) or the CLI.
"""
