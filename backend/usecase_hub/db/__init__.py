"""Database Layer - declarative base and the SQL use case repository.

Invariants:
    - All sessions are async (AsyncSession), obtained from DatabaseSessionManager
"""
