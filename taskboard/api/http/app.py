import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskboard.api.http.errors import internal_error_response, register_exception_handlers
from taskboard.api.http.routes import router as tasks_router
from taskboard.bootstrap import build_service, close_service
from taskboard.config import Settings, get_settings
from taskboard.services.task_service import TaskService

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, service: TaskService | None = None) -> FastAPI:
    """
    Składa aplikację FastAPI.

    - `service` podany z zewnątrz (np. w testach) jest używany wprost.
    - W przeciwnym razie serwis powstaje w `lifespan` z konfiguracji i jest tam zamykany.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.task_service is None
        if owned:
            app.state.task_service = build_service(settings)
        yield
        if owned:
            close_service(app.state.task_service)
            app.state.task_service = None

    app = FastAPI(
        title=settings.API_NAME,
        summary=settings.API_SUMMARY,
        lifespan=lifespan,
        responses={**internal_error_response},
        version=settings.VERSION,
    )
    app.state.task_service = service

    if settings.CORS_ENABLED:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(tasks_router)

    logger.debug("Application %s %s created", settings.API_NAME, settings.VERSION)
    return app
