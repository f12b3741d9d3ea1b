"""Infrastructure Layer - runtime services and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage failures are mapped to StorageError before leaving this layer
"""
