from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskboard.domain.enums import TaskStatus
from taskboard.domain.paging import Page
from taskboard.domain.task import Task


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskRequest(BaseModel):
    # title is checked by validate_task_input so a missing title and a blank one report the same message
    title: str | None = Field(default=None, examples=["Write report"])
    description: str | None = None
    status: TaskStatus | None = Field(default=None, description="PENDING, IN_PROGRESS or DONE")


class TaskResponse(CamelModel):
    title: str
    description: str | None
    status: TaskStatus
    created_by: str | None
    created_at: datetime | None
    modified_by: str | None
    updated_at: datetime | None

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            title=task.title,
            description=task.description,
            status=task.status,
            created_by=task.created_by,
            created_at=task.created_at,
            modified_by=task.modified_by,
            updated_at=task.updated_at,
        )


class CreatedTaskResponse(TaskResponse):
    id: str

    @classmethod
    def from_task(cls, task: Task) -> "CreatedTaskResponse":
        return cls(id=str(task.task_id), **TaskResponse.from_task(task).model_dump())


class TaskPage(CamelModel):
    content: list[TaskResponse]
    total_elements: int
    total_pages: int
    number: int
    size: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool

    @classmethod
    def from_page(cls, page: Page[Task]) -> "TaskPage":
        return cls(
            content=page.map(TaskResponse.from_task).content,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number=page.number,
            size=page.size,
            number_of_elements=page.number_of_elements,
            first=page.is_first,
            last=page.is_last,
            empty=not page.content,
        )


class ErrorResponse(BaseModel):
    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
