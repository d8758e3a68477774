"""Database connection settings."""

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class DatabaseSettings(BaseSettings):
    model_config = {"env_prefix": "POSTGRES_", "env_file": ".env", "extra": "ignore", "populate_by_name": True}

    user: str = ""
    password: str = ""
    host: str = "localhost"
    port: int = 5432
    db: str = ""
    sslmode: str = "disable"
    pool_size: int = 5

    # Full SQLAlchemy URL; when set, the individual POSTGRES_* values are ignored.
    # Handy for pointing local development at SQLite, e.g. sqlite:///backend/catalog.db
    url: str | None = Field(default=None, validation_alias="DATABASE_URL")

    def connection_url(self) -> URL:
        """Build the connection URL. Values are used as given, without validation."""
        if self.url:
            return make_url(self.url)
        return URL.create(
            "postgresql+psycopg2",
            username=self.user or None,
            password=self.password or None,
            host=self.host or None,
            port=self.port,
            database=self.db or None,
            query={"sslmode": self.sslmode} if self.sslmode else {},
        )
