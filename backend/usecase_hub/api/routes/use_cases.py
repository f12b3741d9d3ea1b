"""Use Case Routes - REST surface over the lifecycle service.

Invariants:
    - Success envelope: {"success": true, "data"?, "message"?, "count"?}
    - Failures raised as UseCaseHubError and rendered by api/error_handlers.py
    - Ids are opaque path strings; a malformed id is an unknown id (404)
    - Request bodies reach the service as raw JSON objects so validation
      messages come from the rule chain, in rule order
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from usecase_hub.api.deps import get_use_case_service
from usecase_hub.services.use_case_service import UseCaseService

router = APIRouter(prefix="/api/use-cases", tags=["use-cases"])


@router.get("")
async def list_use_cases(
    service: UseCaseService = Depends(get_use_case_service),
):
    """List all use cases, newest first."""
    records = await service.list_all()
    return {
        "success": True,
        "data": [r.model_dump(mode="json") for r in records],
        "count": len(records),
    }


@router.get("/{use_case_id}")
async def get_use_case(
    use_case_id: str,
    service: UseCaseService = Depends(get_use_case_service),
):
    record = await service.read(use_case_id)
    return {"success": True, "data": record.model_dump(mode="json")}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_use_case(
    payload: dict[str, Any] = Body(...),
    service: UseCaseService = Depends(get_use_case_service),
):
    record = await service.create(payload)
    return {
        "success": True,
        "data": record.model_dump(mode="json"),
        "message": "Use case created successfully",
    }


@router.put("/{use_case_id}")
async def update_use_case(
    use_case_id: str,
    payload: dict[str, Any] = Body(...),
    service: UseCaseService = Depends(get_use_case_service),
):
    """Partial update: only the fields in the body change."""
    record = await service.update(use_case_id, payload)
    return {
        "success": True,
        "data": record.model_dump(mode="json"),
        "message": "Use case updated successfully",
    }


@router.delete("/{use_case_id}")
async def delete_use_case(
    use_case_id: str,
    service: UseCaseService = Depends(get_use_case_service),
):
    await service.delete(use_case_id)
    return {"success": True, "message": "Use case deleted successfully"}
