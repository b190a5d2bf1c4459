import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.config.security import SecurityConfig
from app.config.settings import Settings
from app.database import build_engine, build_session_factory, check_connection
from app.routers import auth, user, tasks, dashboard, settings as settings_router
from app.utils.errors import register_error_handlers
from app.utils.middleware import add_security_headers
from app.utils.session_policy import PasswordChangeSessionPolicy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the database before serving; an unreachable database aborts startup"""
    logger.info("Starting Task Manager API...")
    try:
        check_connection(app.state.engine)
    except SQLAlchemyError:
        logger.critical("DATABASE CONNECTION ERROR - shutting down", exc_info=True)
        raise
    yield
    logger.info("Shutting down Task Manager API...")
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one immutable settings object"""
    settings = settings or Settings.from_env()

    app = FastAPI(title="Task Manager API", lifespan=lifespan)

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.session_policy = PasswordChangeSessionPolicy()

    register_error_handlers(app)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=SecurityConfig.CORS_METHODS,
        allow_headers=["*"],
    )
    app.middleware("http")(add_security_headers)

    # Route registration
    app.include_router(auth.router, prefix="/api/users", tags=["Authentication"])
    app.include_router(user.router, prefix="/api/users", tags=["Users"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])
    app.include_router(settings_router.router, prefix="/api/settings", tags=["Settings"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
