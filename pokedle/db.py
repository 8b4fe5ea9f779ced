"""
Pokedle DB (DuckDB): schema, bootstrap and one-time seed of the catalog.
Every store function takes the connection explicitly; nothing here is a global handle.
Run python -m pokedle.seed to create and seed the database file up front.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import duckdb

from .catalog import count_entries, insert_entry

PACKAGE_DIR = Path(__file__).resolve().parent
# Default DB under the repo's data/ dir; override with POKEDLE_DB
DB_PATH = Path(os.environ.get("POKEDLE_DB") or PACKAGE_DIR.parent / "data" / "pokedle.duckdb")
POKEDEX_PATH = Path(os.environ.get("POKEDEX_FILE") or PACKAGE_DIR / "data" / "pokedex.json")


def get_connection(path: Path | str | None = None) -> duckdb.DuckDBPyConnection:
    path = Path(path or DB_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)
    return duckdb.connect(str(path))


def init_db(conn: duckdb.DuckDBPyConnection, pokedex_path: Path | None = None) -> None:
    """Create tables if absent, then seed the catalog when it is empty."""
    cur = conn.cursor()

    cur.execute("CREATE SEQUENCE IF NOT EXISTS pokemons_seq START 1")
    cur.execute("CREATE SEQUENCE IF NOT EXISTS guesses_seq START 1")

    # Catalog; name_key is the lowercased name so uniqueness is case-insensitive
    cur.execute("""
        CREATE TABLE IF NOT EXISTS pokemons (
            id INTEGER PRIMARY KEY DEFAULT nextval('pokemons_seq'),
            name VARCHAR NOT NULL,
            name_key VARCHAR NOT NULL UNIQUE,
            type1 VARCHAR NOT NULL,
            type2 VARCHAR,
            evolution_stage INTEGER NOT NULL,
            total_evolutions INTEGER NOT NULL,
            color VARCHAR NOT NULL
        )
    """)

    # Append-only guess log (created_at is a UTC ISO-8601 string)
    cur.execute("""
        CREATE TABLE IF NOT EXISTS guesses (
            id INTEGER PRIMARY KEY DEFAULT nextval('guesses_seq'),
            submitted_name VARCHAR NOT NULL,
            matched BOOLEAN NOT NULL,
            secret_name VARCHAR NOT NULL,
            created_at VARCHAR NOT NULL
        )
    """)

    if count_entries(conn) == 0:
        seed_catalog(conn, pokedex_path or POKEDEX_PATH)


def load_pokedex(path: Path | None = None) -> list[dict]:
    path = path or POKEDEX_PATH
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must hold a JSON list of pokemon objects")
    return data


def seed_catalog(conn: duckdb.DuckDBPyConnection, path: Path | None = None) -> int:
    """Insert every pokedex entry in file order, all or nothing. Returns rows inserted."""
    path = path or POKEDEX_PATH
    if not Path(path).exists():
        logging.warning("Pokedex file %s not found; catalog left empty.", path)
        return 0
    rows = load_pokedex(path)
    conn.begin()
    try:
        for fields in rows:
            insert_entry(conn, fields)
    except Exception:
        conn.rollback()
        raise
    conn.commit()
    logging.info("Seeded %d pokemon from %s into database.", len(rows), path)
    return len(rows)


def open_db(path: Path | str | None = None, pokedex_path: Path | None = None) -> duckdb.DuckDBPyConnection:
    """Connection with the schema in place and the catalog seeded."""
    conn = get_connection(path)
    init_db(conn, pokedex_path)
    return conn


def reset_db(path: Path | str | None = None, pokedex_path: Path | None = None) -> None:
    path = Path(path or DB_PATH)
    if path.exists():
        path.unlink()
    wal = path.with_name(path.name + ".wal")
    if wal.exists():
        wal.unlink()
    open_db(path, pokedex_path).close()
