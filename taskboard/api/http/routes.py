from typing import Annotated, Any
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from pydantic import BeforeValidator

from taskboard.api.http.dependencies import get_task_service
from taskboard.api.http.errors import bad_request_response, task_not_found_response
from taskboard.api.http.schemas import CreatedTaskResponse, TaskPage, TaskRequest, TaskResponse
from taskboard.api.validation import validate_task_input
from taskboard.domain.enums import TaskStatus
from taskboard.domain.paging import DEFAULT_PAGE_SIZE, DEFAULT_SORT, MAX_PAGE_SIZE, PageRequest
from taskboard.domain.task import TaskId
from taskboard.services.task_service import TaskService


router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
)


def blank_as_none(value: Any) -> Any:
    """Pusty `?status=` traktujemy jak brak filtra."""
    return None if value == "" else value


@router.get(
    "",
    summary="List all tasks with optional pagination and status filter",
    responses={**bad_request_response},
)
def get_all_tasks(
    status_filter: Annotated[
        TaskStatus | None,
        BeforeValidator(blank_as_none),
        Query(alias="status", description="Optional status filter (PENDING, IN_PROGRESS, DONE)"),
    ] = None,
    page: int = Query(0, ge=0, description="Page number, starts from 0"),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    sort: str = Query(DEFAULT_SORT, description="Sort by field, e.g. title, createdAt"),
    task_service: TaskService = Depends(get_task_service),
) -> TaskPage:
    tasks = task_service.get_all_tasks(status_filter, PageRequest(page=page, size=size, sort=sort))
    return TaskPage.from_page(tasks)


@router.post(
    "",
    summary="Create a new task",
    status_code=status.HTTP_201_CREATED,
    responses={**bad_request_response},
)
def create_task(
    task_request: TaskRequest,
    task_service: TaskService = Depends(get_task_service),
) -> CreatedTaskResponse:
    data = validate_task_input(task_request.title, task_request.description, task_request.status)
    return CreatedTaskResponse.from_task(task_service.create_task(data))


@router.get(
    "/{task_id}",
    summary="Get a task by ID",
    responses={**task_not_found_response(), **bad_request_response},
)
def get_task(
    task_id: UUID,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return TaskResponse.from_task(task_service.get_task(TaskId(str(task_id))))


@router.put(
    "/{task_id}",
    summary="Update a task",
    responses={**task_not_found_response(), **bad_request_response},
)
def update_task(
    task_id: UUID,
    task_request: TaskRequest,
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    data = validate_task_input(task_request.title, task_request.description, task_request.status)
    return TaskResponse.from_task(task_service.update_task(TaskId(str(task_id)), data))


@router.delete(
    "/{task_id}",
    summary="Delete a task",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**task_not_found_response(), **bad_request_response},
)
def delete_task(
    task_id: UUID,
    task_service: TaskService = Depends(get_task_service),
) -> None:
    task_service.delete_task(TaskId(str(task_id)))
