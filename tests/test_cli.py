import pytest
from rich.console import Console
from typer.testing import CliRunner

from taskboard.adapters.sql.task_repo import SqlTaskRepository
from taskboard.api.cli import main as cli
from taskboard.domain.enums import TaskStatus
from taskboard.domain.task import Task

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # szeroka konsola, żeby Rich nie łamał ID w tabeli
    monkeypatch.setattr(cli, "console", Console(width=200))


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'cli.db'}"


@pytest.fixture
def seeded(db_url):
    repo = SqlTaskRepository(db_url)
    tasks = [
        repo.insert(Task(title="Write report", status=TaskStatus.PENDING)),
        repo.insert(Task(title="Review PR", description="backend", status=TaskStatus.IN_PROGRESS)),
    ]
    repo.close()
    return tasks


def invoke(db_url: str, *args: str):
    return runner.invoke(cli.app, ["--db", db_url, *args])


def test_add_creates_pending_task(db_url):
    result = invoke(db_url, "add", "Buy milk", "-d", "2%")

    assert result.exit_code == 0, result.output
    assert "Task created" in result.output
    assert "PENDING" in result.output

    listing = invoke(db_url, "list")
    assert "Buy milk" in listing.output
    assert "Total: 1" in listing.output


def test_add_blank_title_fails(db_url):
    result = invoke(db_url, "add", "   ")

    assert result.exit_code == 1
    assert "title: Title is required" in result.output


def test_list_filters_by_status(db_url, seeded):
    result = invoke(db_url, "list", "--status", "IN_PROGRESS")

    assert result.exit_code == 0, result.output
    assert "Review PR" in result.output
    assert "Write report" not in result.output
    assert "Total: 1" in result.output


def test_list_unknown_sort_fails(db_url, seeded):
    result = invoke(db_url, "list", "--sort", "nope")

    assert result.exit_code == 1
    assert "Unsupported sort field" in result.output


def test_show_task(db_url, seeded):
    result = invoke(db_url, "show", seeded[1].task_id)

    assert result.exit_code == 0, result.output
    assert "Review PR" in result.output
    assert "backend" in result.output


def test_show_unknown_task(db_url, seeded):
    result = invoke(db_url, "show", "missing-id")

    assert result.exit_code == 1
    assert "Task not found with id: missing-id" in result.output


def test_update_keeps_unspecified_fields(db_url, seeded):
    result = invoke(db_url, "update", seeded[1].task_id, "--status", "PENDING")

    assert result.exit_code == 0, result.output
    repo = SqlTaskRepository(db_url)
    stored = repo.get(seeded[1].task_id)
    repo.close()
    assert stored.title == "Review PR"
    assert stored.description == "backend"
    assert stored.status == TaskStatus.PENDING


def test_update_in_progress_to_done_is_rejected(db_url, seeded):
    result = invoke(db_url, "update", seeded[1].task_id, "--title", "New", "--status", "DONE")

    assert result.exit_code == 1
    assert "Cannot mark task as DONE while it is IN_PROGRESS" in result.output


def test_rm_then_show_fails(db_url, seeded):
    removed = invoke(db_url, "rm", seeded[0].task_id)
    again = invoke(db_url, "rm", seeded[0].task_id)

    assert removed.exit_code == 0, removed.output
    assert "Task deleted" in removed.output
    assert again.exit_code == 1
    assert invoke(db_url, "show", seeded[0].task_id).exit_code == 1


def test_memory_backend_starts_empty():
    result = runner.invoke(cli.app, ["--memory", "list"])

    assert result.exit_code == 0, result.output
    assert "Total: 0" in result.output


@pytest.mark.parametrize(
    "status, markup",
    [
        (TaskStatus.PENDING, "[yellow]PENDING[/]"),
        (TaskStatus.IN_PROGRESS, "[blue]IN_PROGRESS[/]"),
        (TaskStatus.DONE, "[green]DONE[/]"),
    ],
)
def test_color_status(status, markup):
    assert cli.color_status(status) == markup
