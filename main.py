import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorDatabase

from adapters.entry.http.auth import API_KEY_HEADER, ApiKeyGate
from adapters.entry.http.config_router import build_config_use_case, router as config_router
from adapters.entry.http.error_handlers import register_error_handlers
from adapters.entry.http.health_router import router as health_router
from adapters.entry.http.network_router import router as network_router
from adapters.entry.http.path_router import router as path_router
from adapters.entry.http.pool_router import router as pool_router
from adapters.entry.http.token_router import router as token_router
from adapters.external.database.config_repository_mongodb import ConfigRepositoryMongoDB
from adapters.external.database.mongodb_client import get_mongo_client
from adapters.external.database.network_repository_mongodb import NetworkRepositoryMongoDB
from adapters.external.database.path_repository_mongodb import PathRepositoryMongoDB
from adapters.external.database.pool_repository_mongodb import PoolRepositoryMongoDB
from adapters.external.database.token_repository_mongodb import TokenRepositoryMongoDB
from config.settings import Settings, settings as default_settings
from core.usecases.bootstrap_use_case import BootstrapUseCase

API_PREFIX = "/api/v1"


def _setup_logging(cfg: Settings) -> None:
    logging.basicConfig(
        level=cfg.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _bootstrap_use_case(db: AsyncIOMotorDatabase, cfg: Settings) -> BootstrapUseCase:
    return BootstrapUseCase(
        config_repo=ConfigRepositoryMongoDB(db),
        network_repo=NetworkRepositoryMongoDB(db),
        pool_repo=PoolRepositoryMongoDB(db),
        token_repo=TokenRepositoryMongoDB(db),
        path_repo=PathRepositoryMongoDB(db),
        config_use_case=build_config_use_case(db, cfg),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings
    _setup_logging(cfg)
    logger = logging.getLogger(__name__)
    logger.info("Starting %s (lifespan startup)...", cfg.APP_NAME)

    if not cfg.api_key_configured:
        logger.warning("API key not configured, mutating routes are open (development mode)")

    mongo_client = None
    if app.state.db is None:
        mongo_client = get_mongo_client(cfg)
        app.state.db = mongo_client[cfg.MONGODB_DB_NAME]

    await _bootstrap_use_case(app.state.db, cfg).execute()

    try:
        yield
    finally:
        logger.info("Shutting down %s (lifespan shutdown)...", cfg.APP_NAME)
        if mongo_client is not None:
            mongo_client.close()


def create_app(cfg: Optional[Settings] = None, db: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        cfg: Resolved settings; defaults to the process-wide settings.
        db: Pre-opened database handle. When omitted, the lifespan connects
            using cfg.MONGODB_URL and closes the client on shutdown.
    """
    cfg = cfg or default_settings

    app = FastAPI(title=cfg.APP_NAME, version="0.1.0", lifespan=lifespan)
    app.state.settings = cfg
    app.state.db = db
    app.state.api_key_gate = ApiKeyGate(cfg.API_KEY)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", API_KEY_HEADER, "Accept", "Content-Type"],
    )
    register_error_handlers(app)

    for r in (health_router, config_router, network_router, path_router, pool_router, token_router):
        app.include_router(r, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=default_settings.SERVER_HOST,
        port=default_settings.SERVER_PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )
