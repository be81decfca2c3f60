from taskboard.adapters.memory.task_repo import InMemoryTaskRepository
from taskboard.services.task_service import TaskService
from taskboard.domain.task import TaskInput
from taskboard.domain.enums import TaskStatus
from taskboard.domain.errors import InvalidStatusError, TaskNotFoundError
from taskboard.domain.paging import PageRequest
import pytest
from datetime import datetime, timezone, timedelta


class FakeIdProvider:
    def __init__(self):
        self.counter = 0
    def new_id(self) -> str:
        self.counter += 1
        return f"id-{self.counter:03d}"

class FakeClock:
    """Każde wywołanie now() przesuwa czas o sekundę, żeby kolejność tworzenia była widoczna."""
    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    def now(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current

class FakeAuditor:
    def __init__(self, name: str = "tester"):
        self.name = name
    def current_auditor(self) -> str:
        return self.name


def make_service() -> TaskService:
    repo = InMemoryTaskRepository(id_provider=FakeIdProvider(), clock=FakeClock(), auditor=FakeAuditor())
    return TaskService(repo)


def test_create_defaults_status_to_pending():
    service = make_service()

    task = service.create_task(TaskInput(title="Buy milk"))

    assert task.status == TaskStatus.PENDING
    assert service.get_task(task.task_id).status == TaskStatus.PENDING


def test_create_accepts_done_directly():
    service = make_service()

    task = service.create_task(TaskInput(title="Already done", status=TaskStatus.DONE))

    assert service.get_task(task.task_id).status == TaskStatus.DONE


def test_create_assigns_id_and_audit_fields():
    service = make_service()

    task = service.create_task(TaskInput(title="A", description="desc"))

    assert task.task_id == "id-001"
    assert task.description == "desc"
    assert task.created_by == "tester"
    assert task.modified_by == "tester"
    assert task.created_at is not None
    assert task.created_at == task.updated_at


def test_get_raises_on_missing():
    service = make_service()

    with pytest.raises(TaskNotFoundError) as exc:
        service.get_task("non-existent-id")
    assert str(exc.value) == "Task not found with id: non-existent-id"


def test_update_in_progress_to_done_is_rejected_in_full():
    service = make_service()
    task = service.create_task(TaskInput(title="Original", description="old", status=TaskStatus.IN_PROGRESS))

    with pytest.raises(InvalidStatusError) as exc:
        service.update_task(task.task_id, TaskInput(title="Changed", description="new", status=TaskStatus.DONE))

    assert str(exc.value) == "Cannot mark task as DONE while it is IN_PROGRESS"
    stored = service.get_task(task.task_id)
    assert stored.title == "Original"
    assert stored.description == "old"
    assert stored.status == TaskStatus.IN_PROGRESS
    assert stored.updated_at == task.updated_at


def test_update_without_status_keeps_status_and_overwrites_text():
    service = make_service()
    task = service.create_task(TaskInput(title="A", description="old", status=TaskStatus.IN_PROGRESS))

    updated = service.update_task(task.task_id, TaskInput(title="B", description=None))

    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.title == "B"
    assert updated.description is None
    assert service.get_task(task.task_id) == updated


@pytest.mark.parametrize(
    "current, requested",
    [
        (TaskStatus.PENDING, TaskStatus.PENDING),
        (TaskStatus.PENDING, TaskStatus.IN_PROGRESS),
        (TaskStatus.PENDING, TaskStatus.DONE),
        (TaskStatus.IN_PROGRESS, TaskStatus.PENDING),
        (TaskStatus.IN_PROGRESS, TaskStatus.IN_PROGRESS),
        (TaskStatus.DONE, TaskStatus.PENDING),
        (TaskStatus.DONE, TaskStatus.IN_PROGRESS),
        (TaskStatus.DONE, TaskStatus.DONE),
    ],
)
def test_update_allowed_transitions(current, requested):
    service = make_service()
    task = service.create_task(TaskInput(title="A", status=current))

    updated = service.update_task(task.task_id, TaskInput(title="A", status=requested))

    assert updated.status == requested


def test_update_keeps_created_and_refreshes_modified():
    service = make_service()
    task = service.create_task(TaskInput(title="A"))

    updated = service.update_task(task.task_id, TaskInput(title="B"))

    assert updated.task_id == task.task_id
    assert updated.created_at == task.created_at
    assert updated.created_by == task.created_by
    assert updated.updated_at > task.updated_at


def test_update_raises_on_missing():
    service = make_service()

    with pytest.raises(TaskNotFoundError):
        service.update_task("nope", TaskInput(title="A"))


def test_delete_raises_on_missing():
    service = make_service()

    with pytest.raises(TaskNotFoundError):
        service.delete_task("nope")


def test_delete_then_get_raises():
    service = make_service()
    task = service.create_task(TaskInput(title="A"))

    service.delete_task(task.task_id)

    with pytest.raises(TaskNotFoundError):
        service.get_task(task.task_id)


def test_get_all_filters_by_status():
    service = make_service()
    for status in TaskStatus:
        service.create_task(TaskInput(title=f"Task {status}", status=status))

    everything = service.get_all_tasks(None, PageRequest())
    assert everything.total_elements == 3
    assert len(everything.content) == 3

    for status in TaskStatus:
        page = service.get_all_tasks(status, PageRequest())
        assert page.total_elements == 1
        assert [t.status for t in page.content] == [status]


def test_get_all_paginates_in_creation_order():
    service = make_service()
    created = [service.create_task(TaskInput(title=f"T{i:02d}")) for i in range(25)]

    first = service.get_all_tasks(None, PageRequest(page=0, size=10))
    last = service.get_all_tasks(None, PageRequest(page=2, size=10))

    assert [t.task_id for t in first.content] == [t.task_id for t in created[:10]]
    assert [t.task_id for t in last.content] == [t.task_id for t in created[20:]]
    assert first.total_pages == 3
    assert first.is_first and not first.is_last
    assert last.is_last
    assert last.number_of_elements == 5


def test_get_all_sorted_by_title():
    service = make_service()
    for title in ["Charlie", "alpha", "Bravo"]:
        service.create_task(TaskInput(title=title))

    page = service.get_all_tasks(None, PageRequest(sort="title"))

    assert [t.title for t in page.content] == ["Bravo", "Charlie", "alpha"]
