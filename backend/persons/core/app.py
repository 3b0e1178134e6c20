from persons.api import health, persons
from persons.core.logging import setup_logging
from persons.core.settings import settings
from fastapi import FastAPI


def create_app() -> FastAPI:
    """Application factory registering routers and config."""

    setup_logging()
    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )

    application.include_router(health.router)
    application.include_router(persons.router)

    return application
