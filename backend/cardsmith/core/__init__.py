"""Core Layer — card model, link collection, registry, rendering and row mapping.

Invariants:
    - Nothing here imports services/, api/, infrastructure/, models/ or db/
    - Functions are pure and deterministic; values are frozen dataclasses or tuples
    - Reported conditions (missing fields, malformed rows, rejected links) are
      returned as values, never raised or logged
"""
