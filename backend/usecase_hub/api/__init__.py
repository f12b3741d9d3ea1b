"""API Layer - FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes translate service outcomes into the {success, data|error, message?, count?} envelope
"""
