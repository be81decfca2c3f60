import logging
from dataclasses import replace
from taskboard.ports.task_repository import TaskRepository
from taskboard.domain.task import Task, TaskId, TaskInput
from taskboard.domain.errors import InvalidStatusError, TaskNotFoundError
from taskboard.domain.enums import TaskStatus
from taskboard.domain.paging import Page, PageRequest

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Warstwa serwisowa (services/task_service.py): przypadki użycia.
# ==========================================================
# Rola:
# - Orkiestracja logiki aplikacyjnej nad portem `TaskRepository`.
# - Domyślny status przy tworzeniu (PENDING) i reguła przejść statusu przy update.
# - Tłumaczenie "brak rekordu" (`None` z repo) na `TaskNotFoundError`.
#
# Zasady:
# - Serwis korzysta wyłącznie z portów (repozytoriów); nie dotyka adapterów.
# - Walidacja kształtu danych (pusty tytuł, długość) jest na granicy (HTTP/CLI).
# - Jedyna reguła biznesowa: IN_PROGRESS -> DONE jest zabronione (tylko przy update).
# - Update odrzucony regułą niczego nie zapisuje (ani tytułu, ani opisu).
# - Modele domenowe są niemutowalne (`frozen=True`): zmiana = nowa instancja i `repo.save`.

IN_PROGRESS_TO_DONE_MESSAGE = "Cannot mark task as DONE while it is IN_PROGRESS"


class TaskService:
    """
    Serwis przypadków użycia dla zadań.

    :param repo: Implementacja portu TaskRepository.
    """
    def __init__(self, repo: TaskRepository) -> None:
        self.repo = repo

    def create_task(self, data: TaskInput) -> Task:
        """
            Tworzy nowe zadanie i zapisuje je w repozytorium.

            - Status: z `data.status`, a gdy brak: PENDING. Reguła przejść nie dotyczy tworzenia.
            - `task_id` i pola audytowe nadaje repozytorium (`repo.insert`).

            :return: Zapisany obiekt `Task`.
        """
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status or TaskStatus.PENDING,
        )
        created = self.repo.insert(task)
        logger.info("Created task %s with status %s", created.task_id, created.status)
        return created

    def get_all_tasks(self, status: TaskStatus | None, request: PageRequest) -> Page[Task]:
        """Strona zadań; z filtrem po statusie, jeśli podany."""
        if status is not None:
            return self.repo.list_page_by_status(status, request)
        return self.repo.list_page(request)

    def get_task(self, task_id: TaskId) -> Task:
        """
            Zwraca pojedyncze zadanie o wskazanym identyfikatorze.

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
        """
        task = self.repo.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task(self, task_id: TaskId, data: TaskInput) -> Task:
        """
            Aktualizuje zadanie.

            - `title` i `description` są zawsze nadpisywane wartościami z `data`.
            - `status` zmienia się tylko, gdy `data.status` jest podany.
            - IN_PROGRESS -> DONE: `InvalidStatusError`, nic nie jest zapisywane.

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
            :raises InvalidStatusError: Przy niedozwolonym przejściu statusu.
            :return: Stan po zapisie.
        """
        current = self.get_task(task_id)

        if current.status == TaskStatus.IN_PROGRESS and data.status == TaskStatus.DONE:
            logger.warning("Rejected update of task %s: IN_PROGRESS -> DONE", task_id)
            raise InvalidStatusError(IN_PROGRESS_TO_DONE_MESSAGE)

        changed = replace(
            current,
            title=data.title,
            description=data.description,
            status=data.status if data.status is not None else current.status,
        )
        updated = self.repo.save(changed)
        logger.info("Updated task %s (%s -> %s)", task_id, current.status, updated.status)
        return updated

    def delete_task(self, task_id: TaskId) -> None:
        """
            Usuwa zadanie (hard delete).

            :raises TaskNotFoundError: Gdy nie znaleziono zadania.
        """
        task = self.get_task(task_id)
        self.repo.delete(task.task_id)
        logger.info("Deleted task %s", task_id)
