"""Persistence models for the data access layer."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, field_serializer

PRICE_QUANTUM = Decimal("0.01")


class CreateGameCategoryRequest(BaseModel, frozen=True):
    name: str


class CreateGameRequest(BaseModel, frozen=True):
    name: str
    category_id: int
    release_date: date
    price: Decimal


class GameCategory(BaseModel, frozen=True):
    """A category row as stored."""

    category_id: int
    name: str


class Game(BaseModel, frozen=True):
    """A game row as stored, referencing its category by id."""

    game_id: int
    name: str
    category_id: int
    release_date: date
    price: Decimal


class GameView(BaseModel, frozen=True):
    """A game joined with its category's display name, as served by the list endpoint."""

    game_id: int
    name: str
    category: str
    release_date: date
    price: Decimal

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        # served as a JSON number, not the string pydantic emits for Decimal
        return float(price)
