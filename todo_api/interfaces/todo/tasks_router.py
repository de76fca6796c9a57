"""
FastAPI router for tasks.

Every route requires a bearer token and delegates to a use case.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from todo_api.application.todo.complete_task import CompleteTaskUseCase
from todo_api.application.todo.create_task import CreateTaskUseCase
from todo_api.application.todo.delete_task import DeleteTaskUseCase
from todo_api.application.todo.dtos import (
    CompleteTaskCommand,
    CreateTaskCommand,
    DeleteTaskCommand,
    GetTaskQuery,
    ListTasksQuery,
    UpdateTaskCommand,
)
from todo_api.application.todo.get_task import GetTaskUseCase
from todo_api.application.todo.list_tasks import ListTasksUseCase
from todo_api.application.todo.update_task import UpdateTaskUseCase
from todo_api.domain.todo.entities import TaskStatus
from todo_api.interfaces.todo.dependencies import (
    get_authenticated_context,
    get_complete_task_use_case,
    get_create_task_use_case,
    get_delete_task_use_case,
    get_list_tasks_use_case,
    get_task_use_case,
    get_update_task_use_case,
)
from todo_api.interfaces.todo.schemas import (
    CreateTaskRequest,
    ErrorResponse,
    MessageResponse,
    TaskItem,
    TaskListResponse,
    TaskResponse,
    UpdateTaskRequest,
)

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_authenticated_context)],
    responses={401: {"model": ErrorResponse, "description": "Missing, invalid or expired token"}},
)

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Task not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Invalid data or unknown assignee"}}


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
    summary="Create a task",
    description="Create a task in the \"to-do\" state, optionally assigned to a user.",
)
def create_task(
    request: CreateTaskRequest,
    use_case: CreateTaskUseCase = Depends(get_create_task_use_case),
) -> TaskResponse:
    """Create a new task."""
    result = use_case.execute(
        CreateTaskCommand(
            title=request.title,
            description=request.description,
            due_date=request.due_date,
            assigned_to=request.assigned_to,
        )
    )
    return TaskResponse(task=TaskItem.from_result(result))


@router.get(
    "",
    response_model=TaskListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List tasks",
    description="List tasks, newest first, optionally filtered by status and assignee.",
)
def list_tasks(
    task_status: Optional[TaskStatus] = Query(
        default=None, alias="status", description="Only tasks with this status"
    ),
    assigned_to: Optional[str] = Query(
        default=None, alias="assignedTo", description="Only tasks assigned to this user id"
    ),
    use_case: ListTasksUseCase = Depends(get_list_tasks_use_case),
) -> TaskListResponse:
    """List tasks with optional equality filters."""
    results = use_case.execute(
        ListTasksQuery(status=task_status, assigned_to=assigned_to or None)
    )
    return TaskListResponse(
        count=len(results),
        tasks=[TaskItem.from_result(r) for r in results],
    )


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    responses=NOT_FOUND,
    summary="Get a task",
)
def get_task(
    task_id: str,
    use_case: GetTaskUseCase = Depends(get_task_use_case),
) -> TaskResponse:
    """Fetch a single task by id."""
    result = use_case.execute(GetTaskQuery(task_id=task_id))
    return TaskResponse(task=TaskItem.from_result(result))


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
    summary="Update a task",
    description=(
        "Partial update: only fields present in the body change. "
        "Changing the status to \"done\" stamps completedAt; "
        "changing it away from \"done\" clears it."
    ),
)
def update_task(
    task_id: str,
    request: UpdateTaskRequest,
    use_case: UpdateTaskUseCase = Depends(get_update_task_use_case),
) -> TaskResponse:
    """Apply a partial update to a task."""
    result = use_case.execute(UpdateTaskCommand(task_id=task_id, patch=request.to_patch()))
    return TaskResponse(task=TaskItem.from_result(result))


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    responses=NOT_FOUND,
    summary="Delete a task",
)
def delete_task(
    task_id: str,
    use_case: DeleteTaskUseCase = Depends(get_delete_task_use_case),
) -> MessageResponse:
    """Permanently delete a task."""
    use_case.execute(DeleteTaskCommand(task_id=task_id))
    return MessageResponse(message="Task deleted")


@router.patch(
    "/{task_id}/complete",
    response_model=TaskResponse,
    responses=NOT_FOUND,
    summary="Complete a task",
    description="Mark a task as done from any status and stamp completedAt.",
)
def complete_task(
    task_id: str,
    use_case: CompleteTaskUseCase = Depends(get_complete_task_use_case),
) -> TaskResponse:
    """Mark a task as done."""
    result = use_case.execute(CompleteTaskCommand(task_id=task_id))
    return TaskResponse(task=TaskItem.from_result(result))
