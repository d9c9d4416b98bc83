# main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from devmatch.config import settings
from devmatch.config import build_sqlalchemy_db_url
from devmatch.database import Base, engine
import devmatch.models  # noqa: F401  # ensure all models are registered
from devmatch.api.routes.health import router as health_router
from devmatch.routers import auth, matching, messages, projects, tasks, users


def create_app() -> FastAPI:
    logging.getLogger("devmatch").setLevel(settings.log_level.upper())

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(auth.router, prefix="/auth", tags=["auth"])
    application.include_router(users.router, prefix=settings.api_prefix)
    application.include_router(projects.router, prefix=settings.api_prefix)
    application.include_router(tasks.router, prefix=settings.api_prefix)
    application.include_router(messages.router, prefix=settings.api_prefix)
    application.include_router(matching.router, prefix=settings.api_prefix)

    # Avoid accidental schema changes in shared MySQL databases.
    # For local/test sqlite usage, auto-create ORM tables is still convenient.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    return application


app = create_app()
