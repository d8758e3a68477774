"""Catalog server configuration via environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class CatalogServerSettings(BaseSettings):
    model_config = {"env_prefix": "CATALOG_", "env_file": ".env", "extra": "ignore", "populate_by_name": True}

    # Build/version tag reported by the health check
    tag: str = Field(default="", validation_alias="TAG")
    port: int = Field(default=8080, validation_alias="PORT")
    host: str = "0.0.0.0"  # noqa: S104
    cors_origins: list[str] = ["*"]
    log_dir: str | None = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings)
