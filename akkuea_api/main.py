import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from akkuea_api.core.config import Settings, load_settings, validate_runtime_config
from akkuea_api.core.errors import register_error_handlers
from akkuea_api.core.request_logging import log_requests
from akkuea_api.database import build_engine, build_session_factory, create_schema
from akkuea_api.routes import auth_routes, health_routes, resource_routes, user_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine(app.state.settings)
    try:
        create_schema(engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and the DB_* settings.')
        engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    try:
        yield
    finally:
        engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    validate_runtime_config(settings)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    app.middleware('http')(log_requests)
    register_error_handlers(app)

    app.include_router(health_routes.router)
    app.include_router(auth_routes.router)
    app.include_router(auth_routes.protected_router)
    app.include_router(user_routes.router)
    app.include_router(resource_routes.router)

    return app
