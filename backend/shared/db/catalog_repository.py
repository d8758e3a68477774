"""SQLAlchemy-backed catalog repository."""

from __future__ import annotations

import asyncio
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError

from shared.dal.catalog_repository import CatalogRepository
from shared.dal.errors import DataError
from shared.dal.models import PRICE_QUANTUM, Game, GameCategory, GameView
from shared.db.schema import game_categories, games

if TYPE_CHECKING:
    from sqlalchemy.engine import Row

    from shared.dal.models import CreateGameCategoryRequest, CreateGameRequest
    from shared.db.connection import Database

logger = structlog.get_logger()


def _price(value: Decimal | float) -> Decimal:
    return Decimal(str(value)).quantize(PRICE_QUANTUM)


class SqlCatalogRepository(CatalogRepository):
    """SQL implementation of CatalogRepository.

    Each operation borrows a pooled connection in a worker thread, runs a
    single statement in its own transaction and returns the connection.
    No ordering or isolation beyond that of the database is added.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    async def create_category(self, request: CreateGameCategoryRequest) -> GameCategory:
        """Insert a category and return it with its assigned id."""
        return await asyncio.to_thread(self._insert_category, request)

    async def create_game(self, request: CreateGameRequest) -> Game:
        """Insert a game. Raises DataError if the category does not exist."""
        return await asyncio.to_thread(self._insert_game, request)

    async def get_game(self, game_id: int) -> Game | None:
        return await asyncio.to_thread(self._select_game, game_id)

    async def list_games(self) -> list[GameView]:
        """Return every game joined with its category name, in database order."""
        return await asyncio.to_thread(self._select_game_views)

    def _insert_category(self, request: CreateGameCategoryRequest) -> GameCategory:
        engine = self._db.get_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(insert(game_categories).values(name=request.name))
                category_id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise DataError("error inserting game category") from exc

        category = GameCategory(category_id=category_id, name=request.name)
        logger.info("game category created", category_id=category.category_id, name=category.name)
        return category

    def _insert_game(self, request: CreateGameRequest) -> Game:
        engine = self._db.get_engine()
        try:
            with engine.begin() as conn:
                result = conn.execute(
                    insert(games).values(
                        name=request.name,
                        category_id=request.category_id,
                        release_date=request.release_date,
                        price=request.price,
                    ),
                )
                game_id = result.inserted_primary_key[0]
        except SQLAlchemyError as exc:
            raise DataError("error inserting game") from exc

        game = Game(
            game_id=game_id,
            name=request.name,
            category_id=request.category_id,
            release_date=request.release_date,
            price=request.price,
        )
        logger.info(
            "game created",
            game_id=game.game_id,
            name=game.name,
            category_id=game.category_id,
            release_date=game.release_date,
            price=game.price,
        )
        return game

    def _select_game(self, game_id: int) -> Game | None:
        engine = self._db.get_engine()
        try:
            with engine.connect() as conn:
                row = conn.execute(select(games).where(games.c.game_id == game_id)).first()
        except SQLAlchemyError as exc:
            raise DataError("error querying game") from exc
        if row is None:
            return None
        return Game(
            game_id=row.game_id,
            name=row.name,
            category_id=row.category_id,
            release_date=row.release_date,
            price=_price(row.price),
        )

    def _select_game_views(self) -> list[GameView]:
        engine = self._db.get_engine()
        query = select(
            games.c.game_id,
            games.c.name,
            game_categories.c.name.label("category"),
            games.c.release_date,
            games.c.price,
        ).join_from(games, game_categories, games.c.category_id == game_categories.c.category_id)
        try:
            with engine.connect() as conn:
                rows = conn.execute(query).all()
        except SQLAlchemyError as exc:
            raise DataError("error querying games") from exc
        return [self._to_view(row) for row in rows]

    @staticmethod
    def _to_view(row: Row) -> GameView:
        return GameView(
            game_id=row.game_id,
            name=row.name,
            category=row.category,
            release_date=row.release_date,
            price=_price(row.price),
        )
