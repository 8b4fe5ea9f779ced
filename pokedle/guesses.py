"""
Guess log: one row per evaluated guess, append-only. Read back newest-first for the stats page.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable

import duckdb

STATS_PAGE_SIZE = 50


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class GuessOutcome:
    submitted_name: str
    matched: bool
    secret_name: str
    created_at: str = field(default_factory=utc_now_iso)
    id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def append_outcome(conn: duckdb.DuckDBPyConnection, outcome: GuessOutcome) -> GuessOutcome:
    row = conn.execute(
        "INSERT INTO guesses (submitted_name, matched, secret_name, created_at) VALUES (?, ?, ?, ?) RETURNING id",
        (outcome.submitted_name, bool(outcome.matched), outcome.secret_name, outcome.created_at),
    ).fetchone()
    return GuessOutcome(
        submitted_name=outcome.submitted_name,
        matched=bool(outcome.matched),
        secret_name=outcome.secret_name,
        created_at=outcome.created_at,
        id=row[0],
    )


def list_recent_outcomes(conn: duckdb.DuckDBPyConnection, limit: int = STATS_PAGE_SIZE) -> list[GuessOutcome]:
    """Newest first, at most `limit` (capped at STATS_PAGE_SIZE)."""
    limit = min(int(limit), STATS_PAGE_SIZE)
    if limit <= 0:
        return []
    rows = conn.execute(
        """
        SELECT id, submitted_name, matched, secret_name, created_at
        FROM guesses
        ORDER BY created_at DESC, id DESC
        LIMIT ?
        """,
        (limit,),
    ).fetchall()
    return [
        GuessOutcome(id=r[0], submitted_name=r[1], matched=bool(r[2]), secret_name=r[3], created_at=r[4])
        for r in rows
    ]


def summarize_outcomes(outcomes: Iterable[GuessOutcome]) -> dict:
    outcomes = list(outcomes)
    total = len(outcomes)
    wins = sum(1 for o in outcomes if o.matched)
    return {
        "total": total,
        "wins": wins,
        "win_rate": round(wins / total, 3) if total else 0.0,
    }
