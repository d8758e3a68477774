"""One-time catalog schema creation and seeding, run at process startup."""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from shared.dal.errors import CatalogError, DataError, InitializationError
from shared.dal.models import CreateGameCategoryRequest, CreateGameRequest

if TYPE_CHECKING:
    from shared.dal.catalog_repository import CatalogRepository
    from shared.db.connection import Database

logger = structlog.get_logger()

# The catalog counts as initialized when this game row exists.
PROBE_GAME_ID = 1

EXPLORATION = "Exploration"
SHOOTER = "Shooter"

# (game name, category name, release date, price)
SEED_GAMES: tuple[tuple[str, str, date, Decimal], ...] = (
    ("Minecraft", EXPLORATION, date(2011, 1, 1), Decimal("26.95")),
    ("Counter Strike", SHOOTER, date(1999, 1, 1), Decimal("14.99")),
)


async def _is_initialized(repository: CatalogRepository) -> bool:
    try:
        existing = await repository.get_game(PROBE_GAME_ID)
    except DataError:
        # Usually the games table does not exist yet
        logger.debug("catalog probe failed, treating catalog as uninitialized", game_id=PROBE_GAME_ID)
        return False
    return existing is not None


async def initialize_catalog(db: Database, repository: CatalogRepository) -> None:
    """Create the catalog tables and seed rows unless game 1 already exists.

    Raises InitializationError when the connection, the schema creation or any
    seed insert fails. Not guarded against two processes seeding at once.
    """
    try:
        await asyncio.to_thread(db.get_engine)
    except CatalogError as exc:
        raise InitializationError("error creating database connection") from exc

    if await _is_initialized(repository):
        logger.info("catalog already initialized, skipping", probe_game_id=PROBE_GAME_ID)
        return

    try:
        await asyncio.to_thread(db.create_schema)
    except CatalogError as exc:
        raise InitializationError("error creating catalog schema") from exc

    category_ids: dict[str, int] = {}
    for name in (EXPLORATION, SHOOTER):
        try:
            category = await repository.create_category(CreateGameCategoryRequest(name=name))
        except CatalogError as exc:
            raise InitializationError(f"error creating {name} game category") from exc
        category_ids[name] = category.category_id

    for name, category_name, release_date, price in SEED_GAMES:
        request = CreateGameRequest(
            name=name,
            category_id=category_ids[category_name],
            release_date=release_date,
            price=price,
        )
        try:
            await repository.create_game(request)
        except CatalogError as exc:
            raise InitializationError(f"error creating {name} game") from exc

    logger.info("catalog initialized", categories=len(category_ids), games=len(SEED_GAMES))
