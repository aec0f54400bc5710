from typing import Optional

from application.converters.task_converter import TaskConverter, to_storage_datetime
from application.rest.schemas.input.task_input import (
    BulkActionRequest,
    ReorderRequest,
    TaskCreate,
    TaskUpdate,
)
from application.rest.schemas.output.common_output import (
    DataResponse,
    ErrorResponse,
    OperationResult,
)
from application.rest.schemas.output.task_output import TaskListResponse, TaskResponse
from domain.entities.query import SortField, SortOrder, TaskQueryCriteria
from domain.services.task_query_service import TaskQueryService
from domain.services.task_service import (
    TaskError,
    TaskNotFoundError,
    TaskService,
)
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from utils.dependencies import get_db, get_task_query_service, get_task_service

router = APIRouter()

NOT_FOUND_RESPONSE = {
    "model": ErrorResponse,
    "description": "Task not found.",
    "content": {
        "application/json": {
            "example": {"error": "Not Found", "message": "Task abc not found"}
        }
    },
}
VALIDATION_RESPONSE = {
    "model": ErrorResponse,
    "description": "Invalid request data.",
}


@router.get(
    path="/tasks",
    description="List tasks with optional filters, ordering and pagination.",
    response_model=TaskListResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": TaskListResponse,
            "description": "One page of tasks with pagination metadata.",
        },
        status.HTTP_400_BAD_REQUEST: VALIDATION_RESPONSE,
    },
)
async def list_tasks(
    q: Optional[str] = Query(None, description="Search in title or description"),
    completed: Optional[bool] = Query(None, description="Filter by completion"),
    priority: Optional[int] = Query(None, ge=1, le=3, description="Exact priority"),
    tag: Optional[str] = Query(None, description="Exact tag name"),
    sort_by: SortField = Query(SortField.CREATED_AT, alias="sortBy"),
    order: SortOrder = Query(SortOrder.DESC),
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    db: Session = Depends(get_db),
    query_service: TaskQueryService = Depends(get_task_query_service),
) -> TaskListResponse:
    """List tasks matching a declarative query.

    Tasks are always ordered by ``orderIndex`` first; ``sortBy``/``order``
    only break ties. A page past the end is empty, not an error.

    Example:
        >>> response = await client.get("/api/v1/tasks?priority=1&pageSize=1")
        >>> response.json()["meta"]["pagination"]["total"]
        3
    """
    try:
        criteria = TaskQueryCriteria(
            q=q,
            completed=completed,
            priority=priority,
            tag=tag,
            sort_by=sort_by,
            order=order,
            page=page,
            page_size=page_size,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e

    task_page = await query_service.list_tasks(db, criteria)
    return TaskConverter.page_to_response(task_page)


@router.post(
    path="/tasks",
    description="Create a task at the end of the manual order.",
    response_model=DataResponse[TaskResponse],
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: VALIDATION_RESPONSE},
)
async def create_task(
    task_create: TaskCreate,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> DataResponse[TaskResponse]:
    """Create a task, creating any unknown tag names on the fly."""
    try:
        task = await task_service.create_task(
            db,
            title=task_create.title,
            description=task_create.description,
            priority=task_create.priority,
            due_date=to_storage_datetime(task_create.due_date),
            tags=task_create.tags,
        )
        return DataResponse(data=TaskConverter.entity_to_response(task))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except TaskError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create task",
        ) from e


# Static paths are registered before /tasks/{task_id} so they are not
# captured as task ids.
@router.patch(
    path="/tasks/reorder",
    description="Persist a recomputed manual order atomically.",
    response_model=DataResponse[OperationResult],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: VALIDATION_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
    },
)
async def reorder_tasks(
    reorder_request: ReorderRequest,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> DataResponse[OperationResult]:
    """Apply every ``{id, orderIndex}`` pair in one transaction.

    If any id does not exist nothing is written and 404 is returned.
    """
    try:
        placements = TaskConverter.reorder_input_to_placements(reorder_request)
        await task_service.reorder_tasks(db, placements)
        return DataResponse(data=OperationResult(success=True))
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except TaskError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to reorder tasks",
        ) from e


@router.post(
    path="/tasks/bulk",
    description="Apply one action to several tasks at once.",
    response_model=DataResponse[OperationResult],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_400_BAD_REQUEST: VALIDATION_RESPONSE},
)
async def bulk_action(
    bulk_request: BulkActionRequest,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> DataResponse[OperationResult]:
    """Run a bulk action; ids that match no task are skipped.

    Example:
        >>> await client.post("/api/v1/tasks/bulk", json={"action": "complete", "ids": [a, "x"]})
        {"data": {"success": true, "updatedCount": 1}}
    """
    try:
        action = TaskConverter.bulk_input_to_action(bulk_request)
        result = await task_service.bulk_action(db, action)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except TaskError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to apply bulk action",
        ) from e

    if result.deleted:
        return DataResponse(
            data=OperationResult(success=True, deleted_count=result.affected)
        )
    return DataResponse(data=OperationResult(success=True, updated_count=result.affected))


@router.delete(
    path="/tasks/completed",
    description="Delete every completed task.",
    response_model=DataResponse[OperationResult],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
async def clear_completed(
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> DataResponse[OperationResult]:
    try:
        deleted = await task_service.clear_completed(db)
    except TaskError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to clear completed tasks",
        ) from e
    return DataResponse(data=OperationResult(success=True, deleted_count=deleted))


@router.get(
    path="/tasks/{task_id}",
    description="Retrieve a single task by id.",
    response_model=DataResponse[TaskResponse],
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE},
)
async def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> DataResponse[TaskResponse]:
    try:
        task = await task_service.get_task(db, task_id)
        return DataResponse(data=TaskConverter.entity_to_response(task))
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.patch(
    path="/tasks/{task_id}",
    description="Partially update a task; a supplied tag list replaces all tags.",
    response_model=DataResponse[TaskResponse],
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_400_BAD_REQUEST: VALIDATION_RESPONSE,
        status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE,
    },
)
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> DataResponse[TaskResponse]:
    """Update only the fields present in the request body.

    Args:
        task_id (str): Id of the task to update.
        task_update (TaskUpdate): Partial body; null clears description or dueDate.

    Raises:
        HTTPException: 404 if the task does not exist, 400 on invalid data.
    """
    try:
        changes = TaskConverter.update_input_to_changes(task_update)
        task = await task_service.update_task(db, task_id, changes)
        return DataResponse(data=TaskConverter.entity_to_response(task))
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)
        ) from e
    except TaskError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update task",
        ) from e


@router.patch(
    path="/tasks/{task_id}/toggle",
    description="Flip the completion state of a task.",
    response_model=DataResponse[TaskResponse],
    status_code=status.HTTP_200_OK,
    responses={status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE},
)
async def toggle_task(
    task_id: str,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> DataResponse[TaskResponse]:
    try:
        task = await task_service.toggle_task(db, task_id)
        return DataResponse(data=TaskConverter.entity_to_response(task))
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete(
    path="/tasks/{task_id}",
    description="Delete a task.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={status.HTTP_404_NOT_FOUND: NOT_FOUND_RESPONSE},
)
async def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    try:
        await task_service.delete_task(db, task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
