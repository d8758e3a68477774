from __future__ import annotations

import contextlib
from http import HTTPStatus
from typing import TYPE_CHECKING

import structlog
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from catalog.server.settings import CatalogServerSettings
from shared.dal import CatalogError
from shared.db import Database, DatabaseSettings, SqlCatalogRepository, initialize_catalog
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

    from shared.dal import CatalogRepository


async def health(request: Request) -> JSONResponse:
    settings: CatalogServerSettings = request.app.state.settings
    return JSONResponse({"message": f"Server is running with tag {settings.tag}"})


async def list_games(request: Request) -> JSONResponse:
    repository: CatalogRepository = request.app.state.repository
    try:
        games = await repository.list_games()
    except CatalogError:
        logger.exception("error fetching games")
        return JSONResponse({"error": "Internal server error"}, status_code=HTTPStatus.INTERNAL_SERVER_ERROR)
    return JSONResponse([game.model_dump(mode="json") for game in games])


def create_app(
    settings: CatalogServerSettings | None = None,
    db_settings: DatabaseSettings | None = None,
    *,
    initialize: bool = True,
) -> Starlette:
    """Build the catalog application.

    The database is not touched here. The lifespan opens the shared pool and
    seeds the catalog before the server accepts requests; a failed
    initialization raises out of startup, so the server never listens.
    Pass initialize=False to skip seeding (the pool still opens lazily).
    """
    if settings is None:  # pragma: no cover
        settings = CatalogServerSettings()
    if db_settings is None:  # pragma: no cover
        db_settings = DatabaseSettings()

    routes = [
        Route("/", health, methods=["GET"], name="health"),
        Route("/games", list_games, methods=["GET"], name="list_games"),
    ]

    db = Database(db_settings.connection_url(), pool_size=db_settings.pool_size)
    repository = SqlCatalogRepository(db)

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        try:
            if initialize:
                await initialize_catalog(db, repository)
            logger.info("catalog server ready", tag=settings.tag)
            yield
        finally:
            db.close()

    app = Starlette(routes=routes, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.state.settings = settings
    app.state.db = db
    app.state.repository = repository
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory catalog.server.app:get_app."""
    settings = CatalogServerSettings()
    setup_logging(log_dir=settings.log_dir)
    return create_app(settings=settings, db_settings=DatabaseSettings())
