from typing import NoReturn, Optional

import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from typer import Argument, Exit, Option, Typer

from taskboard.api.validation import validate_task_input
from taskboard.bootstrap import build_service
from taskboard.config import Settings, get_settings
from taskboard.domain.enums import TaskStatus
from taskboard.domain.errors import DomainError, TaskNotFoundError, TaskValidationError
from taskboard.domain.paging import DEFAULT_PAGE_SIZE, DEFAULT_SORT, Page, PageRequest
from taskboard.domain.task import Task, TaskId
from taskboard.services.task_service import TaskService


### COMMENTS
# ==========================================================
# CLI (Typer + Rich): narzędzie operatora dla Taskboard.
# ==========================================================
# Rola:
# - `serve` uruchamia API HTTP (uvicorn).
# - Pozostałe komendy mapują się na metody TaskService (add/list/show/update/rm),
#   na tym samym repozytorium co API (DATABASE_URL albo --db / --memory).
# - Łapie DomainError, drukuje przyjazny komunikat i kończy z kodem 1.
#
# Zasady:
# - Zero logiki biznesowej: deleguj do TaskService.
# - Serwis budowany leniwie (serve go nie potrzebuje).


app = Typer(help="Taskboard: task management API and CLI")
console = Console()

settings: Settings | None = None  # ustawimy w callbacku
service: TaskService | None = None

STATUS_STYLES = {
    TaskStatus.PENDING: "yellow",
    TaskStatus.IN_PROGRESS: "blue",
    TaskStatus.DONE: "green",
}


@app.callback()
def main(
    db: Optional[str] = Option(
        None,
        "--db",
        help="SQLAlchemy URL bazy (nadpisuje TASKBOARD_DATABASE_URL)",
    ),
    memory: bool = Option(False, "--memory", help="Repozytorium w pamięci (bez trwałości)"),
) -> None:
    """Bootstrap konfiguracji na starcie procesu CLI."""
    global settings, service
    overrides: dict = {}
    if db:
        overrides.update(STORE_BACKEND="sql", DATABASE_URL=db)
    if memory:
        overrides.update(STORE_BACKEND="memory")
    settings = get_settings().model_copy(update=overrides)
    service = None


def get_service() -> TaskService:
    global service
    if service is None:
        service = build_service(settings or get_settings())
    return service


def fail(title: str, message: str) -> NoReturn:
    console.print(Panel.fit(f"❌ {message}", title=title, border_style="red"))
    raise Exit(code=1)


def color_status(status: TaskStatus) -> str:
    """Zwraca status w Rich-markup z kolorem."""
    style = STATUS_STYLES.get(status)
    return f"[{style}]{status.value}[/]" if style else str(status)


def render_page(page: Page[Task]) -> None:
    """Renderuje tabelę Rich z kolumnami: ID, Title, Status, Created, Updated + stopką paginacji."""

    table = Table(show_lines=True, header_style="bold")
    table.add_column("ID", no_wrap=True, style="cyan")
    table.add_column("Title")
    table.add_column("Status", no_wrap=True)
    table.add_column("Created At", no_wrap=True, style="dim")
    table.add_column("Updated At", no_wrap=True, style="dim")

    for t in page.content:
        table.add_row(
            t.task_id,
            t.title,
            color_status(t.status),
            t.created_at.strftime("%Y-%m-%d %H:%M") if t.created_at else "",
            t.updated_at.strftime("%Y-%m-%d %H:%M") if t.updated_at else "",
        )

    console.print(table)
    console.print(
        f"[dim]Page {page.number + 1}/{max(1, page.total_pages)} • Total: {page.total_elements} • Page size: {page.size}[/dim]"
    )


def render_task(task: Task, title: str, border_style: str = "cyan") -> None:
    lines = [
        f"ID: {task.task_id}",
        f"Title: {task.title}",
        f"Description: {task.description or '[dim]-[/]'}",
        f"Status: {color_status(task.status)}",
        f"Created: {task.created_at.isoformat() if task.created_at else '-'} by {task.created_by or '-'}",
        f"Updated: {task.updated_at.isoformat() if task.updated_at else '-'} by {task.modified_by or '-'}",
    ]
    console.print(Panel.fit("\n".join(lines), title=title, border_style=border_style))


@app.command("serve")
def serve(
    host: Optional[str] = Option(None, "--host", help="Adres nasłuchu (domyślnie TASKBOARD_HOST)"),
    port: Optional[int] = Option(None, "--port", "-p", help="Port (domyślnie TASKBOARD_PORT)"),
    reload: bool = Option(False, "--reload", help="Przeładowanie przy zmianach kodu (tylko konfiguracja z env)"),
) -> None:
    """Uruchamia API HTTP."""
    current = settings or get_settings()
    host = host or current.HOST
    port = port or current.PORT
    console.print(Panel.fit(f"🚀 {current.API_NAME} on http://{host}:{port}", border_style="cyan"))
    if reload:
        uvicorn.run("taskboard.main:app", host=host, port=port, reload=True)
        return
    from taskboard.api.http.app import create_app

    uvicorn.run(create_app(current), host=host, port=port)


@app.command("add")
def add(
    title: str,
    desc: Optional[str] = Option(None, "--desc", "-d"),
    status: Optional[TaskStatus] = Option(None, "--status", "-s"),
) -> None:
    """
    Dodaje nowe zadanie.

    Flow:
    - validate_task_input(title, desc, status) -> service.create_task(...)
    - Sukces: Panel z pełnym ID.
    - Błąd walidacji: TaskValidationError → czerwony Panel, kod 1.
    """
    try:
        task = get_service().create_task(validate_task_input(title, desc, status))
    except TaskValidationError as e:
        fail("Validation error", f"{e}\n[dim]Hint:[/] taskboard add 'Title' -d 'Description'")
    except DomainError as e:
        fail("Domain error", str(e))
    render_task(task, "✅ Task created", border_style="green")


@app.command("list")
def list_cmd(
    status: Optional[TaskStatus] = Option(None, "--status", "-s"),
    page: int = Option(0, "--page", "-p", min=0),
    size: int = Option(DEFAULT_PAGE_SIZE, "--size", min=1),
    sort: str = Option(DEFAULT_SORT, "--sort", "-o"),
) -> None:
    """
    Listuje zadania z paginacją (strony od 0, jak w API).

    Flow:
    - page = service.get_all_tasks(status, PageRequest(page, size, sort))
    - render_page(page)
    """
    try:
        result = get_service().get_all_tasks(status, PageRequest(page=page, size=size, sort=sort))
    except DomainError as e:
        fail("Validation error", str(e))
    render_page(result)


@app.command("show")
def show(task_id: str = Argument(..., help="Pełne ID zadania")) -> None:
    """Pokazuje szczegóły pojedynczego zadania."""
    try:
        task = get_service().get_task(TaskId(task_id))
    except TaskNotFoundError as e:
        fail("Not found", f"{e}\n[dim]Use 'taskboard list' to find a valid ID[/]")
    render_task(task, "Task details")


@app.command("update")
def update(
    task_id: str,
    title: Optional[str] = Option(None, "--title", "-t", help="Nowy tytuł (domyślnie bez zmian)"),
    desc: Optional[str] = Option(None, "--desc", "-d", help="Nowy opis (domyślnie bez zmian)"),
    status: Optional[TaskStatus] = Option(None, "--status", "-s"),
) -> None:
    """
    Aktualizuje zadanie.

    Pominięte --title/--desc zostają bez zmian (CLI uzupełnia je bieżącymi wartościami);
    reguła IN_PROGRESS -> DONE obowiązuje jak w API.
    """
    svc = get_service()
    try:
        current = svc.get_task(TaskId(task_id))
        data = validate_task_input(
            title if title is not None else current.title,
            desc if desc is not None else current.description,
            status,
        )
        task = svc.update_task(TaskId(task_id), data)
    except TaskNotFoundError as e:
        fail("Not found", f"{e}\n[dim]Use 'taskboard list' to find a valid ID[/]")
    except DomainError as e:
        fail("Rejected", str(e))
    render_task(task, "✅ Task updated", border_style="green")


@app.command("rm")
def rm(task_id: str) -> None:
    """Usuwa zadanie."""
    try:
        get_service().delete_task(TaskId(task_id))
    except TaskNotFoundError as e:
        fail("Not found", f"{e}\n[dim]Use 'taskboard list' to find a valid ID[/]")
    console.print(Panel.fit(f"🟡 Task deleted\nID: {task_id}", title="Deleted", border_style="yellow"))


if __name__ == "__main__":
    app()
