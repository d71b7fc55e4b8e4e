import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes_auth import router as auth_router
from app.api.routes_health import router as health_router
from app.api.routes_todos import router as todos_router
from app.core.config import Settings, get_settings
from app.core.errors import register_error_handlers
from app.core.logging_setup import setup_logging
from app.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.store = TodoStore() if settings.seed else TodoStore(seed=[])

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(todos_router)
    return app


app = create_app()


def main():
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)

    base = f"http://localhost:{settings.port}"
    logger.info("Server running on port %s", settings.port)
    logger.info("API available at %s", base)
    logger.info("Test endpoint: %s/api/test", base)
    logger.info("Login endpoint: %s/api/login", base)
    logger.info("Items endpoint: %s/api/items", base)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
