"""
Job application API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Response, status

from core import errors

from . import repository, schemas

router = APIRouter()

errors.register_required_message(
    "POST",
    "/applications",
    "Company, position, status, and apply date are required",
    ("company", "position", "status", "apply_date"),
)

NOT_FOUND_MESSAGE = "Application not found"


@router.get("/applications")
async def list_applications(status_filter: str | None = Query(default=None, alias="status")) -> list[dict]:
    """
    Most recent apply_date first; `status` is an exact-match filter.
    """
    return await repository.list_applications(status=status_filter)


@router.post("/applications", status_code=status.HTTP_201_CREATED)
async def create_application(request: schemas.CreateApplicationRequest) -> dict:
    return await repository.create_application(
        company=request.company,
        position=request.position,
        status=request.status,
        apply_date=request.apply_date,
        follow_up=request.follow_up,
    )


@router.put("/applications/{application_id}")
async def replace_application(application_id: int, request: schemas.ReplaceApplicationRequest) -> dict:
    row = await repository.replace_application(
        application_id,
        company=request.company,
        position=request.position,
        status=request.status,
        apply_date=request.apply_date,
        follow_up=request.follow_up,
    )
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return row


@router.delete("/applications/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(application_id: int) -> Response:
    deleted = await repository.delete_application(application_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
