import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from app.database import init_db
from app.notifications.internal_router import router as notifications_internal_router
from app.notifications.router import router as notifications_router
from shared.middleware.error_handler import error_envelope_middleware
from shared.middleware.request_id import request_id_middleware

_OPENAPI_TAGS = [
    {
        "name": "Notifications",
        "description": (
            "In-app notifications: comments, thread replies and tips. Display text is "
            "resolved from current actor and creation state on every read; recent activity "
            "on one creation is grouped into a single entry. Acknowledging a grouped entry "
            "marks every notification about that creation as read."
        ),
    },
    {
        "name": "Health",
        "description": "Liveness probe.",
    },
]


def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s:%(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    init_db(settings.notifications_database_url)
    logging.getLogger(__name__).info(
        "Notifications service started (env=%s, collapse_window_hours=%s)",
        settings.env_name,
        settings.collapse_window_hours,
    )
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Notifications Service",
        description=(
            "Turns a recipient's raw notification rows into a short, ordered, grouped "
            "list and tracks read state across grouped entries."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=_OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # CORS must be registered first (runs last in middleware stack)
    # so that preflight OPTIONS requests get CORS headers before any auth check.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )
    app.middleware("http")(request_id_middleware)
    app.middleware("http")(error_envelope_middleware)

    app.include_router(notifications_router, prefix="/api/v1")
    app.include_router(notifications_internal_router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        """Lightweight liveness probe. Does not hit the database."""
        return {"status": "ok", "service": "notifications"}

    return app


app = create_app()
