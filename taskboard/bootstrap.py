import logging
from taskboard.adapters.memory.task_repo import InMemoryTaskRepository
from taskboard.adapters.sql.task_repo import SqlTaskRepository
from taskboard.adapters.system.auditor_static import StaticAuditor
from taskboard.config import Settings
from taskboard.ports.task_repository import TaskRepository
from taskboard.services.task_service import TaskService

logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> TaskRepository:
    """Tworzy repozytorium na bazie konfiguracji.
    - STORE_BACKEND=memory -> InMemory
    - STORE_BACKEND=sql -> SQLAlchemy (DATABASE_URL)
    """
    auditor = StaticAuditor(settings.AUDITOR)
    if settings.STORE_BACKEND == "memory":
        logger.info("Using in-memory task store")
        return InMemoryTaskRepository(auditor=auditor)
    logger.info("Using SQL task store")
    return SqlTaskRepository(settings.DATABASE_URL, auditor=auditor)


def build_service(settings: Settings) -> TaskService:
    return TaskService(build_repository(settings))


def close_service(service: TaskService) -> None:
    if isinstance(service.repo, SqlTaskRepository):
        service.repo.close()
