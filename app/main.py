from fastapi import FastAPI
from fastapi_pagination import add_pagination

from app.config import get_settings
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers import (
    assistant_router,
    metrics_router,
    system,
    unanswered_questions_router,
)

logger = get_logger("main")


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    LoggingConfig(level=settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Knowledge-resolution assistant for the agricultural share platform",
        # No OpenAPI UI in production
        docs_url=None if settings.is_production and not testing else "/docs",
        redoc_url=None,
    )

    app.include_router(system.router)
    app.include_router(assistant_router.router)
    app.include_router(unanswered_questions_router.router)
    app.include_router(metrics_router.router)

    add_pagination(app)

    logger.info("Started %s (env=%s)", settings.app_name, settings.environment)
    return app


app = create_app()
