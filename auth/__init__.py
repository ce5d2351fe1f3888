"""auth/ -- Credential hashing and the registration/login flows built on it.

Layer rule: auth/ imports only stdlib, third-party libraries and core/.
It does NOT import from feeds/. feeds/ may import from auth/, not the other
way around.
"""
