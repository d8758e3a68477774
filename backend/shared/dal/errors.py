"""Error taxonomy for catalog persistence."""


class CatalogError(Exception):
    """Base class for all catalog storage failures."""


class DatabaseConnectionError(CatalogError):
    """The shared connection pool could not be created or verified."""


class DataError(CatalogError):
    """A single data-access call failed (constraint violation, bad foreign key, query failure)."""


class InitializationError(CatalogError):
    """The schema/seed sequence failed. The service must not start."""
