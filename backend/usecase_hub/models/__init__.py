"""ORM Models - SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from usecase_hub.models.use_case import UseCase  # noqa: F401
