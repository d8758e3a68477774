"""Shared validation helpers for service settings."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pydantic_settings import EnvSettingsSource

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def parse_string_list(value: str | list[str]) -> list[str]:
    """Parse a string list from an environment variable or config value.

    Accepts a list of strings (returned as-is), a JSON array string such as
    '["a","b"]', or a comma-separated string such as 'a,b'.

    Raises ValueError for empty values or malformed JSON.
    """
    if isinstance(value, list):
        items = value
    else:
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                items = json.loads(stripped)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON array: {e}") from e
            if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
                raise ValueError("JSON value must be an array of strings")
        else:
            items = [item.strip() for item in stripped.split(",") if item.strip()]

    if not items:
        raise ValueError("String list value must not be empty")
    return items


class StringListEnvSettingsSource(EnvSettingsSource):
    """Env settings source that hands list-typed fields to validators as raw strings.

    pydantic-settings JSON-decodes list fields from env vars before validators run,
    which rejects the comma-separated form. Fields named in string_list_fields are
    passed through untouched so parse_string_list can accept both formats.
    """

    string_list_fields: frozenset[str] = frozenset({"cors_origins"})

    def prepare_field_value(
        self,
        field_name: str,
        field: FieldInfo,
        value: Any,  # noqa: ANN401
        value_is_complex: bool,  # noqa: FBT001
    ) -> Any:  # noqa: ANN401
        if field_name in self.string_list_fields and isinstance(value, str):
            return value
        return super().prepare_field_value(field_name, field, value, value_is_complex)
