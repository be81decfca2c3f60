from __future__ import annotations
import logging
from pathlib import Path
from datetime import datetime, timezone
import sqlalchemy as db
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool
from taskboard.adapters.audit import stamp_created, stamp_modified
from taskboard.adapters.system.auditor_static import StaticAuditor
from taskboard.adapters.system.clock_system import SystemClock
from taskboard.adapters.system.id_provider_uuid import UuidIdProvider
from taskboard.domain.enums import TaskStatus
from taskboard.domain.errors import TaskAlreadyExistsError
from taskboard.domain.paging import Page, PageRequest, resolve_sort_field
from taskboard.domain.task import Task, TaskId, TITLE_MAX_LENGTH
from taskboard.ports.auditor import Auditor
from taskboard.ports.clock import Clock
from taskboard.ports.id_provider import IdProvider
from taskboard.ports.task_repository import TaskRepository

logger = logging.getLogger(__name__)


def _sqlite_url(url: str | Path) -> str:
    if isinstance(url, Path):
        # absolutna ścieżka -> sqlite:////abs/path.db
        url.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{url}"
    if url.startswith("sqlite:///") and url != "sqlite:///:memory:":
        Path(url.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)
    return url


class SqlTaskRepository(TaskRepository):
    def __init__(
        self,
        url: str | Path,
        id_provider: IdProvider | None = None,
        clock: Clock | None = None,
        auditor: Auditor | None = None,
    ) -> None:
        """
        url: np. 'sqlite:///data/tasks.db', 'sqlite://' (pamięć) lub Path do pliku (zostanie zrobiony URL)
        """
        db_url = _sqlite_url(url)
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            # jedna współdzielona baza w pamięci dla wszystkich wątków
            self.engine = db.create_engine(
                db_url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = db.create_engine(db_url)

        self.id_provider = id_provider or UuidIdProvider()
        self.clock = clock or SystemClock()
        self.auditor = auditor or StaticAuditor()
        self.meta = db.MetaData()

        self.tasks = db.Table(
            "tasks",
            self.meta,
            db.Column("task_id", db.String(36), primary_key=True),
            db.Column("title", db.String(TITLE_MAX_LENGTH), nullable=False),
            db.Column("description", db.Text, nullable=True),
            db.Column("status", db.String(16), nullable=False, index=True),  # 'PENDING'/'IN_PROGRESS'/'DONE'
            db.Column("created_by", db.String, nullable=True),
            db.Column("created_at", db.String, nullable=False),  # ISO8601 '...Z'
            db.Column("modified_by", db.String, nullable=True),
            db.Column("updated_at", db.String, nullable=False),
        )

        # utwórz tabelę jeśli nie istnieje
        self.meta.create_all(self.engine)
        logger.debug("SQL task store ready at %s", self.engine.url)

    def close(self) -> None:
        self.engine.dispose()

    def _encode_dt(self, dt: datetime) -> str:
        # stała szerokość (mikrosekundy), żeby sortowanie tekstowe = chronologiczne
        return dt.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _decode_dt(self, s: str | None) -> datetime | None:
        if s is None:
            return None
        return datetime.fromisoformat(s.replace("Z", "+00:00")).astimezone(timezone.utc)

    def _to_row(self, task: Task) -> dict:
        return {
            "task_id": str(task.task_id),
            "title": task.title,
            "description": task.description,
            "status": TaskStatus(task.status).value,
            "created_by": task.created_by,
            "created_at": self._encode_dt(task.created_at),
            "modified_by": task.modified_by,
            "updated_at": self._encode_dt(task.updated_at),
        }

    def _from_row(self, row) -> Task:
        return Task(
            task_id=TaskId(row["task_id"]),
            title=row["title"],
            description=row["description"],
            status=TaskStatus(row["status"]),
            created_by=row["created_by"],
            created_at=self._decode_dt(row["created_at"]),
            modified_by=row["modified_by"],
            updated_at=self._decode_dt(row["updated_at"]),
        )

    def _select_one(self, conn: Connection, task_id: str) -> Task | None:
        stmt = db.select(self.tasks).where(self.tasks.c.task_id == str(task_id))
        row = conn.execute(stmt).mappings().first()
        return None if row is None else self._from_row(row)

    def _insert(self, conn: Connection, task: Task) -> Task:
        task_id = task.task_id or TaskId(self.id_provider.new_id())
        stored = stamp_created(task, task_id, self.clock, self.auditor)
        conn.execute(db.insert(self.tasks).values(**self._to_row(stored)))
        return stored

    def insert(self, task: Task) -> Task:
        try:
            with self.engine.begin() as conn:
                return self._insert(conn, task)
        except IntegrityError:
            # konflikt PK
            raise TaskAlreadyExistsError(task.task_id)

    def get(self, task_id: TaskId) -> Task | None:
        with self.engine.connect() as conn:
            return self._select_one(conn, task_id)

    def save(self, task: Task) -> Task:
        with self.engine.begin() as conn:
            stored = self._select_one(conn, task.task_id) if task.task_id else None
            if stored is None:
                return self._insert(conn, task)
            updated = stamp_modified(task, stored, self.clock, self.auditor)
            rec = self._to_row(updated)
            conn.execute(
                db.update(self.tasks)
                .where(self.tasks.c.task_id == rec.pop("task_id"))
                .values(**rec)
            )
            return updated

    def delete(self, task_id: TaskId) -> None:
        stmt = db.delete(self.tasks).where(self.tasks.c.task_id == str(task_id))
        with self.engine.begin() as conn:
            conn.execute(stmt)

    def list_page(self, request: PageRequest) -> Page[Task]:
        return self._page(request, None)

    def list_page_by_status(self, status: TaskStatus, request: PageRequest) -> Page[Task]:
        return self._page(request, self.tasks.c.status == TaskStatus(status).value)

    def _page(self, request: PageRequest, where) -> Page[Task]:
        # sortowanie stabilne: ASC + tie-breaker po task_id
        column = self.tasks.c[resolve_sort_field(request.sort)]
        stmt = (
            db.select(self.tasks)
            .order_by(column.asc(), self.tasks.c.task_id.asc())
            .offset(request.offset)
            .limit(request.size)
        )
        count = db.select(db.func.count()).select_from(self.tasks)
        if where is not None:
            stmt = stmt.where(where)
            count = count.where(where)

        with self.engine.connect() as conn:
            total = int(conn.execute(count).scalar_one())
            rows = conn.execute(stmt).mappings().all()
        return Page(content=[self._from_row(r) for r in rows], total_elements=total, request=request)
