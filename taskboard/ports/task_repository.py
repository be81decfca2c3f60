from typing import Protocol, Optional
from taskboard.domain.task import Task, TaskId
from taskboard.domain.enums import TaskStatus
from taskboard.domain.paging import Page, PageRequest


### COMMENTS
# ==========================================================
# Kontrakt repozytorium zadań (ports/task_repository.py).
# ==========================================================
# Ten moduł definiuje interfejs (Protocol) dla warstwy trwałości Tasków.
# - Jest niezależny od technologii (pamięć, baza SQL).
# - Repozytorium nadaje `task_id` i pola audytowe: klient ich nie ustawia.
# - Adaptery mapują błędy technologiczne na błędy domenowe
#  (np. UNIQUE → TaskAlreadyExistsError, złe pole sortowania → TaskValidationError).
# - Repozytorium nie zawiera logiki biznesowej (reguła statusów jest w serwisie).
# - Listowanie gwarantuje stabilną kolejność dzięki tiebreakerowi po task_id (ASC).


class TaskRepository(Protocol):
    """Interfejs repozytorium do zapisu i odczytu obiektów `Task`.

    Adaptery (implementacje) muszą:
    - nadawać `task_id` oraz `created_by/created_at/modified_by/updated_at`,
    - zapewnić atomowość pojedynczego zapisu,
    - stosować stabilne sortowanie (tiebreaker po `task_id` rosnąco),
    - nie wykonywać walidacji biznesowych (te należą do warstwy serwisu).
    """

    def insert(self, task: Task) -> Task:
        """Dodaje nowy rekord.

        Zwraca:
            Task: Zapisany obiekt z nadanym `task_id` i polami audytowymi.

        Wyjątki domenowe:
            TaskAlreadyExistsError: Gdy `task.task_id` jest ustawione i już istnieje.
        """

    def get(self, task_id: TaskId) -> Optional[Task]:
        """Zwraca zadanie o podanym `task_id` albo `None`.

        Brak rekordu nie jest tu błędem: decyzję podejmuje serwis.
        """

    def save(self, task: Task) -> Task:
        """Pełny zapis rekordu (create albo update).

        - Brak `task_id` albo nieznany `task_id` → zachowuje się jak `insert`.
        - Istniejący `task_id` → podmiana całego rekordu; `created_*` zostają,
          `modified_by` / `updated_at` są odświeżane.

        Zwraca:
            Task: Stan po zapisie.
        """

    def delete(self, task_id: TaskId) -> None:
        """Usuwa (hard delete) rekord o podanym `task_id`.

        Brak rekordu to no-op; "nie znaleziono" zgłasza serwis, nie repozytorium.
        """

    def list_page(self, request: PageRequest) -> Page[Task]:
        """Zwraca stronę wszystkich zadań.

        Sortowanie:
            - Najpierw po `request.sort` (ASC),
            - Następnie tiebreaker po `task_id` (ASC).

        Paginacja:
            - ZAWSZE po sortowaniu: najpierw sort → potem offset/limit.

        Wyjątki domenowe:
            TaskValidationError: Gdy `request.sort` nie jest sortowalnym polem.
        """

    def list_page_by_status(self, status: TaskStatus, request: PageRequest) -> Page[Task]:
        """Jak `list_page`, ale tylko zadania o danym statusie; `total_elements` liczy po filtrze."""
