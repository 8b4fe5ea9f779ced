"""
Catalog store: the pokemon table. Lookup by name (case-insensitive), admin insert with
field validation, and the stable creation-order listing the daily pick depends on.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

import duckdb

_COLUMNS = "id, name, type1, type2, evolution_stage, total_evolutions, color"


class PokedleError(Exception):
    """Base for every error the game reports back to the player."""


class NotFound(PokedleError):
    def __init__(self, name: str):
        super().__init__(f"No pokemon named {name!r}. You can add it.")
        self.name = name


class DuplicateName(PokedleError):
    def __init__(self, name: str):
        super().__init__(f"A pokemon named {name!r} already exists.")
        self.name = name


class InvalidField(PokedleError):
    """One or more admin-form fields are missing or malformed. `problems` has one message per field."""

    def __init__(self, problems: list[str]):
        super().__init__(" ".join(problems))
        self.problems = list(problems)


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    type1: str
    type2: str | None
    evolution_stage: int
    total_evolutions: int
    color: str
    id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def name_key(name: str) -> str:
    return (name or "").strip().lower()


def _row_to_entry(row: tuple) -> CatalogEntry:
    return CatalogEntry(
        id=row[0],
        name=row[1],
        type1=row[2],
        type2=row[3],
        evolution_stage=row[4],
        total_evolutions=row[5],
        color=row[6],
    )


def _text(fields: dict, key: str) -> str:
    val = fields.get(key)
    return "" if val is None else str(val).strip()


def _positive_int(value: Any) -> int | None:
    """Integer >= 1 from an int or a numeric string; None otherwise (bools and floats rejected)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 1 else None
    if isinstance(value, str) and value.strip().lstrip("+").isdecimal():
        n = int(value.strip())
        return n if n >= 1 else None
    return None


def validate_fields(fields: dict) -> CatalogEntry:
    """
    Normalize raw admin/seed fields into a CatalogEntry.
    Blank type2 becomes None. Raises InvalidField listing every problem found.
    """
    name = _text(fields, "name")
    type1 = _text(fields, "type1")
    type2 = _text(fields, "type2") or None
    color = _text(fields, "color")
    evolution_stage = _positive_int(fields.get("evolution_stage"))
    total_evolutions = _positive_int(fields.get("total_evolutions"))

    problems: list[str] = []
    if not name:
        problems.append("Name is required.")
    if not type1:
        problems.append("Type 1 is required.")
    if evolution_stage is None:
        problems.append("Evolution stage must be an integer >= 1.")
    if total_evolutions is None:
        problems.append("Evolution line length must be an integer >= 1.")
    if not color:
        problems.append("Color is required.")
    if problems:
        raise InvalidField(problems)

    return CatalogEntry(
        name=name,
        type1=type1,
        type2=type2,
        evolution_stage=evolution_stage,
        total_evolutions=total_evolutions,
        color=color,
    )


def lookup_entry(conn: duckdb.DuckDBPyConnection, name: str) -> CatalogEntry:
    """Exact, case-insensitive match on the stored name. Raises NotFound."""
    key = name_key(name)
    if key:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM pokemons WHERE name_key = ? LIMIT 1", (key,)
        ).fetchone()
        if row:
            return _row_to_entry(row)
    raise NotFound((name or "").strip())


def insert_entry(conn: duckdb.DuckDBPyConnection, fields: dict) -> CatalogEntry:
    """Validate and store a new pokemon. Raises InvalidField or DuplicateName."""
    entry = validate_fields(fields)
    key = name_key(entry.name)
    existing = conn.execute("SELECT 1 FROM pokemons WHERE name_key = ?", (key,)).fetchone()
    if existing:
        raise DuplicateName(entry.name)
    try:
        row = conn.execute(
            """
            INSERT INTO pokemons (name, name_key, type1, type2, evolution_stage, total_evolutions, color)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            RETURNING id
            """,
            (entry.name, key, entry.type1, entry.type2, entry.evolution_stage, entry.total_evolutions, entry.color),
        ).fetchone()
    except duckdb.ConstraintException as e:
        # Lost a race with another insert of the same name
        raise DuplicateName(entry.name) from e
    logging.debug("Added pokemon %s (id=%s)", entry.name, row[0])
    return CatalogEntry(**{**entry.to_dict(), "id": row[0]})


def list_entries(conn: duckdb.DuckDBPyConnection) -> list[CatalogEntry]:
    """All entries in creation order (the stable ordering the daily pick relies on)."""
    rows = conn.execute(f"SELECT {_COLUMNS} FROM pokemons ORDER BY id").fetchall()
    return [_row_to_entry(r) for r in rows]


def list_names(conn: duckdb.DuckDBPyConnection) -> list[str]:
    rows = conn.execute("SELECT name FROM pokemons ORDER BY name_key").fetchall()
    return [r[0] for r in rows]


def count_entries(conn: duckdb.DuckDBPyConnection) -> int:
    row = conn.execute("SELECT COUNT(*) FROM pokemons").fetchone()
    return int(row[0]) if row else 0
