"""
Create the Pokedle database and seed the catalog from the bundled pokedex.json.
Run once (or with --reset to rebuild from scratch): python -m pokedle.seed
"""
import argparse
import logging
from pathlib import Path

from . import db
from .catalog import count_entries


def main() -> None:
    p = argparse.ArgumentParser(description="Create and seed the Pokedle database.")
    p.add_argument("--db", default=None, help="DuckDB file (default: POKEDLE_DB or data/pokedle.duckdb)")
    p.add_argument("--pokedex", type=Path, default=None, help="Seed JSON (default: bundled pokedex.json)")
    p.add_argument("--reset", action="store_true", help="Delete the database file first")
    args = p.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    path = Path(args.db or db.DB_PATH)
    if args.reset:
        print(f"Resetting {path}...")
        db.reset_db(path, args.pokedex)
    conn = db.open_db(path, args.pokedex)
    try:
        print(f"  {count_entries(conn)} pokemon in {path}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
