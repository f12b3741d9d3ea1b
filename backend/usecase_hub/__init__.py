"""Use Case Hub - record management service for innovation use cases.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
