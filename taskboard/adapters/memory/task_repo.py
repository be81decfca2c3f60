from threading import Lock
from typing import Iterable, Optional
from taskboard.adapters.audit import stamp_created, stamp_modified
from taskboard.adapters.system.auditor_static import StaticAuditor
from taskboard.adapters.system.clock_system import SystemClock
from taskboard.adapters.system.id_provider_uuid import UuidIdProvider
from taskboard.domain.enums import TaskStatus
from taskboard.domain.errors import TaskAlreadyExistsError
from taskboard.domain.paging import Page, PageRequest, resolve_sort_field
from taskboard.domain.task import Task, TaskId
from taskboard.ports.auditor import Auditor
from taskboard.ports.clock import Clock
from taskboard.ports.id_provider import IdProvider

### COMMENTS
# ==========================================================
# Adapter pamięciowy dla repozytorium zadań (adapters/memory/task_repo.py).
# ==========================================================
# Implementacja portu `TaskRepository` w pamięci.
#
# - Służy do testów, prototypowania i trybu `STORE_BACKEND=memory`.
# - Dane przechowywane są w słowniku `_data: dict[TaskId, Task]` chronionym zamkiem
#   (handlery HTTP działają w puli wątków).
# - Zasady zgodne z kontraktem portu:
#     * `insert` → nadaje id + audyt, zgłasza `TaskAlreadyExistsError` przy kolizji,
#     * `save`   → insert albo pełna podmiana z odświeżeniem `modified_*`,
#     * `delete` → usuwa, brak rekordu to no-op,
#     * `list_page*` → sortuje ASC + tiebreaker po `task_id`, potem paginacja.


class InMemoryTaskRepository:
    """
        Repozytorium w pamięci z opcjonalną kolekcją startowych zadań.
        :param initial: Iterable z zapisanymi już obiektami Task (z `task_id`) do wstępnego załadowania.
        W przypadku duplikatów task_id: ostatni wygrywa (to tylko seed, nie API).
    """
    def __init__(
        self,
        initial: Iterable[Task] | None = None,
        id_provider: IdProvider | None = None,
        clock: Clock | None = None,
        auditor: Auditor | None = None,
    ) -> None:
        self.id_provider = id_provider or UuidIdProvider()
        self.clock = clock or SystemClock()
        self.auditor = auditor or StaticAuditor()
        self._lock = Lock()
        self._data: dict[TaskId, Task] = {}
        for t in (initial or []):
            self._data[t.task_id] = t

    def insert(self, task: Task) -> Task:
        """
            Dodaje nowe zadanie.

            - `task_id` brany z zadania, a gdy go brak: z `IdProvider`.
            - Kolizja identyfikatora nie nadpisuje wpisu, tylko zgłasza `TaskAlreadyExistsError`.

            :return: Zapisany obiekt z id i polami audytowymi.
        """
        with self._lock:
            return self._insert_locked(task)

    def _insert_locked(self, task: Task) -> Task:
        task_id = task.task_id or TaskId(self.id_provider.new_id())
        if task_id in self._data:
            raise TaskAlreadyExistsError(task_id)
        stored = stamp_created(task, task_id, self.clock, self.auditor)
        self._data[task_id] = stored
        return stored

    def get(self, task_id: TaskId) -> Optional[Task]:
        return self._data.get(task_id)

    def save(self, task: Task) -> Task:
        """
            Pełny zapis rekordu.

            - Nowy (bez id lub z nieznanym id) → jak `insert`.
            - Istniejący → podmiana obiektu; `created_*` z poprzedniej wersji,
            świeże `modified_by` / `updated_at`.
        """
        with self._lock:
            stored = self._data.get(task.task_id) if task.task_id else None
            if stored is None:
                return self._insert_locked(task)
            updated = stamp_modified(task, stored, self.clock, self.auditor)
            self._data[updated.task_id] = updated
            return updated

    def delete(self, task_id: TaskId) -> None:
        with self._lock:
            self._data.pop(task_id, None)

    def list_page(self, request: PageRequest) -> Page[Task]:
        with self._lock:
            tasks = list(self._data.values())
        return self._paginate(tasks, request)

    def list_page_by_status(self, status: TaskStatus, request: PageRequest) -> Page[Task]:
        with self._lock:
            tasks = [t for t in self._data.values() if t.status == status]
        return self._paginate(tasks, request)

    def _paginate(self, tasks: list[Task], request: PageRequest) -> Page[Task]:
        order_by = resolve_sort_field(request.sort)

        # NULL-e na początku, jak w SQLite przy ASC
        def sort_key(t: Task):
            value = getattr(t, order_by)
            return (value is not None, value if value is not None else "", t.task_id)

        tasks.sort(key=sort_key)
        content = tasks[request.offset : request.offset + request.size]
        return Page(content=content, total_elements=len(tasks), request=request)
