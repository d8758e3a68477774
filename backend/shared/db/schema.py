"""Relational schema for the game catalog."""

from sqlalchemy import Column, Date, ForeignKey, Integer, MetaData, Numeric, String, Table

metadata = MetaData()

# Unquoted lowercase names so the tables match ones created by plain
# `CREATE TABLE GameCategories (...)` statements on PostgreSQL.
game_categories = Table(
    "gamecategories",
    metadata,
    Column("category_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    sqlite_autoincrement=True,
)

games = Table(
    "games",
    metadata,
    Column("game_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("category_id", Integer, ForeignKey("gamecategories.category_id"), nullable=False),
    Column("release_date", Date, nullable=False),
    Column("price", Numeric(5, 2), nullable=False),
    sqlite_autoincrement=True,
)
