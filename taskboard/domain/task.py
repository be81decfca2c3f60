from typing import NewType
from datetime import datetime
from dataclasses import dataclass
from taskboard.domain.enums import TaskStatus

TaskId = NewType("TaskId", str)

TITLE_MAX_LENGTH = 100


@dataclass(frozen=True)
class Task():
    """
    Model domenowy pojedynczego zadania; niemutowalny; status z zamkniętego zestawu (`TaskStatus`).

    `task_id` oraz pola audytowe (`created_*`, `modified_*`, `updated_at`) nadaje repozytorium
    przy zapisie. `task_id is None` oznacza zadanie jeszcze niezapisane.
    """
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    task_id: TaskId | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    modified_by: str | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class TaskInput:
    """Dane wejściowe dla create/update, już po walidacji na granicy (HTTP, CLI)."""
    title: str
    description: str | None = None
    status: TaskStatus | None = None


### COMMENTS
# ======================================
# Task vs TaskInput
# ======================================
# - Task: rekord domenowy; zmiana = nowa instancja (`dataclasses.replace`) i `repo.save`.
# - TaskInput: to, co klient może ustawić (title/description/status).
#   Pola audytowe nigdy nie przychodzą z zewnątrz.
#
# `status=None` w TaskInput znaczy "nie zmieniaj" przy update i "PENDING" przy create.
