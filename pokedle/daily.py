"""
Pokemon of the day. Deterministic: the same UTC date and the same catalog give the same
pick for every player, and nothing about the pick is stored.
Print today's pokemon (answer key): python -m pokedle.daily [--date YYYY-MM-DD]
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Sequence

import duckdb

from .catalog import CatalogEntry, PokedleError, list_entries


class EmptyCatalog(PokedleError):
    def __init__(self):
        super().__init__("No pokemon in the catalog to pick from.")


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def _as_date(day: date | datetime) -> date:
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(timezone.utc)
        return day.date()
    return day


def date_checksum(day: date | datetime) -> int:
    """Sum of the character codes of the date rendered as YYYYMMDD."""
    d = _as_date(day)
    return sum(ord(c) for c in f"{d.year:04d}{d.month:02d}{d.day:02d}")


def pick_daily(all_entries: Sequence[CatalogEntry], day: date | datetime) -> CatalogEntry:
    """
    Entry at index checksum(day) % len(all_entries). all_entries must be in a stable
    order (creation order from list_entries). Raises EmptyCatalog if there are none.
    The checksum is kept as-is; changing it changes which pokemon falls on which day.
    """
    if not all_entries:
        raise EmptyCatalog()
    return all_entries[date_checksum(day) % len(all_entries)]


def get_daily_secret(conn: duckdb.DuckDBPyConnection, day: date | datetime | None = None) -> CatalogEntry:
    """Today's (or the given day's) secret from the stored catalog."""
    return pick_daily(list_entries(conn), day or today_utc())


def main() -> None:
    import argparse

    from .db import open_db

    p = argparse.ArgumentParser(description="Print the pokemon of the day (answer key).")
    p.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD (default: today, UTC)")
    p.add_argument("--db", default=None, help="DuckDB file (default: POKEDLE_DB or data/pokedle.duckdb)")
    args = p.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    day = args.date or today_utc()
    conn = open_db(args.db)
    try:
        secret = get_daily_secret(conn, day)
    except EmptyCatalog as e:
        print(str(e))
        return
    finally:
        conn.close()
    print(f"Pokemon of the day for {day.isoformat()}:")
    print(f"  {secret.name}")
    print(f"  type: {secret.type1}{' / ' + secret.type2 if secret.type2 else ''}, color: {secret.color}")
    print(f"  evolution: stage {secret.evolution_stage} of {secret.total_evolutions}")


if __name__ == "__main__":
    main()
