from taskboard.domain.enums import TaskStatus
from taskboard.domain.errors import TaskValidationError
from taskboard.domain.task import TaskInput, TITLE_MAX_LENGTH


def validate_task_input(
    title: str | None,
    description: str | None = None,
    status: TaskStatus | None = None,
) -> TaskInput:
    """
    Sprawdza pola żądania create/update i buduje `TaskInput`.

    - `title`: wymagany, nie może być pusty ani składać się z białych znaków, max 100 znaków.
    - `description`, `status`: bez ograniczeń (status już sparsowany do `TaskStatus`).

    :raises TaskValidationError: Dla pierwszego niepoprawnego pola.
    """
    if title is None or not title.strip():
        raise TaskValidationError("title", "Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise TaskValidationError("title", f"Title must be less than {TITLE_MAX_LENGTH} characters")
    return TaskInput(title=title, description=description, status=status)
