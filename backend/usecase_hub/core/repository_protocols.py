"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: the SQL repository and test doubles satisfy it structurally
    - Ids cross this boundary as opaque strings; an id that does not parse is simply absent
"""

from typing import Any, Protocol


class UseCaseRepository(Protocol):
    """Contract for use case persistence.

    find_all orders by created_at descending. create assigns id and both
    timestamps. update applies only the fields present in the request and
    always refreshes updated_at; it returns None when the id is unknown.
    delete returns True iff a record existed and was removed. Any IO or
    constraint failure raises StorageError.
    """
    async def find_all(self) -> list[Any]: ...
    async def find_by_id(self, use_case_id: str) -> Any | None: ...
    async def create(self, request: Any) -> Any: ...
    async def update(self, use_case_id: str, request: Any) -> Any | None: ...
    async def delete(self, use_case_id: str) -> bool: ...
    async def exists(self, use_case_id: str) -> bool: ...
