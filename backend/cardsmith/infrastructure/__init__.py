"""Infrastructure Layer — database access, store implementation, logging.

Invariants:
    - Infrastructure never imports the rendering engine or editor reducer
    - All SQLAlchemy exceptions are mapped to core error types before leaving this layer
"""
