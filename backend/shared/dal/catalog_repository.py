"""Abstract interface for game catalog persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import CreateGameCategoryRequest, CreateGameRequest, Game, GameCategory, GameView


class CatalogRepository(ABC):
    """Abstract interface for game catalog persistence.

    Implementations raise DataError for failed statements and let
    DatabaseConnectionError from the connection pool propagate unchanged.
    """

    @abstractmethod
    async def create_category(self, request: CreateGameCategoryRequest) -> GameCategory: ...

    @abstractmethod
    async def create_game(self, request: CreateGameRequest) -> Game: ...

    @abstractmethod
    async def get_game(self, game_id: int) -> Game | None: ...

    @abstractmethod
    async def list_games(self) -> list[GameView]: ...
