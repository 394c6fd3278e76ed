"""Task API: thin routes delegating to the task coordinators."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from phaseboard.api.v1.dependencies import TaskServices, get_actor, get_task_services
from phaseboard.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from phaseboard.domain.value_objects import ActorContext
from phaseboard.schemas.task import (
    BulkOutcomeResponse,
    BulkRequest,
    ColumnPermissionResponse,
    TaskUpdateRequest,
    UpdateOutcomeResponse,
)

router = APIRouter()


@router.post("/bulk", response_model=BulkOutcomeResponse)
async def apply_bulk(
    body: BulkRequest,
    actor: Annotated[ActorContext, Depends(get_actor)],
    services: Annotated[TaskServices, Depends(get_task_services)],
):
    """Run one operation over the selected tasks; partial failures are reported, not raised."""
    outcome = await services.bulk.apply_bulk(body.to_operation(), body.task_ids, actor)
    return BulkOutcomeResponse.from_outcome(outcome)


@router.patch("/{task_id}", response_model=UpdateOutcomeResponse)
async def update_task(
    task_id: str,
    body: TaskUpdateRequest,
    actor: Annotated[ActorContext, Depends(get_actor)],
    services: Annotated[TaskServices, Depends(get_task_services)],
):
    """Apply a partial update. Rejections and partial failures come back as outcomes (200)."""
    task = await services.persistence.get_task(task_id)
    if task is None:
        raise ResourceNotFoundException("task", task_id)
    changes = body.to_changes()
    if not changes:
        raise ValidationException("No fields to update")
    denied = sorted(
        task_field.value
        for task_field in changes
        if not services.access_policy.can_edit(task_field.value, task, actor)
    )
    if denied:
        raise AuthorizationException(
            message=f"Permission denied: edit {', '.join(denied)} on task"
        )
    outcome = await services.updater.apply_update(task, changes, actor)
    return UpdateOutcomeResponse.from_outcome(outcome)


@router.get("/{task_id}/permissions", response_model=ColumnPermissionResponse)
async def get_column_permission(
    task_id: str,
    column: Annotated[str, Query(min_length=1, description="Board column id")],
    actor: Annotated[ActorContext, Depends(get_actor)],
    services: Annotated[TaskServices, Depends(get_task_services)],
):
    """Return whether the actor may edit column on the task."""
    task = await services.persistence.get_task(task_id)
    if task is None:
        raise ResourceNotFoundException("task", task_id)
    return ColumnPermissionResponse(
        column=column, can_edit=services.access_policy.can_edit(column, task, actor)
    )
