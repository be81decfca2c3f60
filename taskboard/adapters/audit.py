from dataclasses import replace
from taskboard.domain.task import Task, TaskId
from taskboard.ports.clock import Clock
from taskboard.ports.auditor import Auditor


def stamp_created(task: Task, task_id: TaskId, clock: Clock, auditor: Auditor) -> Task:
    """Nadaje id i komplet pól audytowych nowemu rekordowi (created == modified)."""
    now = clock.now()
    who = auditor.current_auditor()
    return replace(
        task,
        task_id=task_id,
        created_by=who,
        created_at=now,
        modified_by=who,
        updated_at=now,
    )


def stamp_modified(task: Task, stored: Task, clock: Clock, auditor: Auditor) -> Task:
    """Przepisuje `created_*` z zapisanego rekordu i odświeża `modified_by` / `updated_at`."""
    return replace(
        task,
        created_by=stored.created_by,
        created_at=stored.created_at,
        modified_by=auditor.current_auditor(),
        updated_at=clock.now(),
    )
