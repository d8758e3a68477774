"""Data access layer: repository interfaces, persistence models and errors."""

from shared.dal.catalog_repository import CatalogRepository
from shared.dal.errors import CatalogError, DatabaseConnectionError, DataError, InitializationError
from shared.dal.models import CreateGameCategoryRequest, CreateGameRequest, Game, GameCategory, GameView

__all__ = [
    "CatalogError",
    "CatalogRepository",
    "CreateGameCategoryRequest",
    "CreateGameRequest",
    "DataError",
    "DatabaseConnectionError",
    "Game",
    "GameCategory",
    "GameView",
    "InitializationError",
]
