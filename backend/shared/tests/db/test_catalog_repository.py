"""Tests for SqlCatalogRepository."""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from shared.dal.errors import DatabaseConnectionError, DataError
from shared.dal.models import CreateGameCategoryRequest, CreateGameRequest
from shared.db.catalog_repository import SqlCatalogRepository
from shared.db.connection import Database


def _game_request(category_id: int, name: str = "Minecraft") -> CreateGameRequest:
    return CreateGameRequest(
        name=name,
        category_id=category_id,
        release_date=date(2011, 1, 1),
        price=Decimal("26.95"),
    )


@pytest.fixture
def db(sqlite_url: str):
    database = Database(sqlite_url)
    database.create_schema()
    yield database
    database.close()


@pytest.fixture
def repo(db: Database) -> SqlCatalogRepository:
    return SqlCatalogRepository(db)


class TestCreateCategory:
    async def test_returns_assigned_id_and_name(self, repo: SqlCatalogRepository) -> None:
        category = await repo.create_category(CreateGameCategoryRequest(name="Exploration"))
        assert category.category_id == 1
        assert category.name == "Exploration"

    async def test_ids_strictly_increase(self, repo: SqlCatalogRepository) -> None:
        ids = []
        for name in ("Exploration", "Shooter", "Puzzle", "Racing", "Exploration"):
            category = await repo.create_category(CreateGameCategoryRequest(name=name))
            ids.append(category.category_id)

        assert ids == sorted(set(ids))
        assert len(ids) == 5

    async def test_missing_table_raises_data_error(self, sqlite_url: str) -> None:
        repo = SqlCatalogRepository(Database(sqlite_url))
        with pytest.raises(DataError, match="error inserting game category"):
            await repo.create_category(CreateGameCategoryRequest(name="Exploration"))


class TestCreateGame:
    async def test_returns_game_with_supplied_category(self, repo: SqlCatalogRepository) -> None:
        category = await repo.create_category(CreateGameCategoryRequest(name="Exploration"))

        game = await repo.create_game(_game_request(category.category_id))

        assert game.game_id == 1
        assert game.category_id == category.category_id
        assert game.release_date == date(2011, 1, 1)
        assert game.price == Decimal("26.95")

    async def test_unknown_category_raises_data_error(self, repo: SqlCatalogRepository) -> None:
        with pytest.raises(DataError, match="error inserting game"):
            await repo.create_game(_game_request(category_id=42))

    async def test_failed_insert_leaves_no_row(self, repo: SqlCatalogRepository) -> None:
        with pytest.raises(DataError):
            await repo.create_game(_game_request(category_id=42))
        assert await repo.list_games() == []


class TestGetGame:
    async def test_returns_stored_game(self, repo: SqlCatalogRepository) -> None:
        category = await repo.create_category(CreateGameCategoryRequest(name="Shooter"))
        created = await repo.create_game(
            CreateGameRequest(
                name="Counter Strike",
                category_id=category.category_id,
                release_date=date(1999, 1, 1),
                price=Decimal("14.99"),
            ),
        )

        fetched = await repo.get_game(created.game_id)

        assert fetched == created

    async def test_returns_none_for_unknown_id(self, repo: SqlCatalogRepository) -> None:
        assert await repo.get_game(1) is None

    async def test_missing_table_raises_data_error(self, sqlite_url: str) -> None:
        repo = SqlCatalogRepository(Database(sqlite_url))
        with pytest.raises(DataError, match="error querying game"):
            await repo.get_game(1)


class TestListGames:
    async def test_empty_table_returns_empty_list(self, repo: SqlCatalogRepository) -> None:
        assert await repo.list_games() == []

    async def test_joins_category_name(self, repo: SqlCatalogRepository) -> None:
        exploration = await repo.create_category(CreateGameCategoryRequest(name="Exploration"))
        await repo.create_game(_game_request(exploration.category_id))

        games = await repo.list_games()

        assert [game.model_dump(mode="json") for game in games] == [
            {
                "game_id": 1,
                "name": "Minecraft",
                "category": "Exploration",
                "release_date": "2011-01-01",
                "price": 26.95,
            },
        ]

    async def test_price_has_two_decimal_places(self, repo: SqlCatalogRepository) -> None:
        category = await repo.create_category(CreateGameCategoryRequest(name="Puzzle"))
        await repo.create_game(
            CreateGameRequest(name="Tetris", category_id=category.category_id, release_date=date(1984, 6, 6), price=Decimal("5")),
        )

        (game,) = await repo.list_games()

        assert game.price == Decimal("5.00")
        assert game.price.as_tuple().exponent == -2

    async def test_one_row_per_game(self, repo: SqlCatalogRepository) -> None:
        exploration = await repo.create_category(CreateGameCategoryRequest(name="Exploration"))
        shooter = await repo.create_category(CreateGameCategoryRequest(name="Shooter"))
        await repo.create_game(_game_request(exploration.category_id, name="Minecraft"))
        await repo.create_game(_game_request(shooter.category_id, name="Counter Strike"))
        await repo.create_game(_game_request(shooter.category_id, name="Quake"))

        games = await repo.list_games()

        assert sorted((game.name, game.category) for game in games) == [
            ("Counter Strike", "Shooter"),
            ("Minecraft", "Exploration"),
            ("Quake", "Shooter"),
        ]

    async def test_concurrent_reads(self, repo: SqlCatalogRepository) -> None:
        category = await repo.create_category(CreateGameCategoryRequest(name="Exploration"))
        await repo.create_game(_game_request(category.category_id))

        results = await asyncio.gather(*(repo.list_games() for _ in range(10)))

        assert all(len(games) == 1 for games in results)

    async def test_queries_run_in_worker_thread(self, repo: SqlCatalogRepository) -> None:
        with patch("shared.db.catalog_repository.asyncio.to_thread", wraps=asyncio.to_thread) as to_thread:
            await repo.list_games()

        to_thread.assert_called_once()

    async def test_unreachable_database_raises_connection_error(self, unreachable_url: str) -> None:
        repo = SqlCatalogRepository(Database(unreachable_url))
        with pytest.raises(DatabaseConnectionError):
            await repo.list_games()
