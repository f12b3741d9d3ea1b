"""Pydantic Schemas - request/response shapes for the use case service.

Invariants:
    - Schemas validate at system boundary (service input, API responses)
    - Domain enums from core/ used for department and status
"""
