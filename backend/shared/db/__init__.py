"""SQL database layer: connection pool, schema, seeding and repository implementations."""

from shared.db.catalog_repository import SqlCatalogRepository
from shared.db.connection import Database
from shared.db.seed import initialize_catalog
from shared.db.settings import DatabaseSettings

__all__ = [
    "Database",
    "DatabaseSettings",
    "SqlCatalogRepository",
    "initialize_catalog",
]
