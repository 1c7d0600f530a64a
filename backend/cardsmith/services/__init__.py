"""Services Layer — async orchestration of the pure core over the card store.

Invariants:
    - Services read immutable core values before their first await
    - Store failures are mapped to StoreUnavailable / StoreConflict here or below
"""
