"""
Compare a guessed pokemon to the pokemon of the day, attribute by attribute.
evaluate() is pure; check_guess() runs a full submission and writes one row to the guess log.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import duckdb

from .catalog import CatalogEntry, InvalidField, lookup_entry
from .daily import get_daily_secret
from .guesses import GuessOutcome, append_outcome

MISSING = "-"

# (label, attribute) in display order
COMPARED_FIELDS: list[tuple[str, str]] = [
    ("Type 1", "type1"),
    ("Type 2", "type2"),
    ("Evolution stage", "evolution_stage"),
    ("Evolution line length", "total_evolutions"),
    ("Color", "color"),
]


@dataclass(frozen=True)
class ComparisonRow:
    label: str
    guess: Any
    secret: Any
    ok: bool


@dataclass(frozen=True)
class GuessResult:
    guess_name: str
    secret_name: str
    rows: tuple[ComparisonRow, ...]
    matched: bool

    def to_dict(self) -> dict:
        out = {
            "guess_name": self.guess_name,
            "matched": self.matched,
            "comparison": [
                {"label": r.label, "guess": r.guess, "secret": r.secret, "ok": r.ok} for r in self.rows
            ],
        }
        if self.matched:
            out["secret_name"] = self.secret_name
        return out


def _display(value: Any) -> Any:
    return MISSING if value is None or value == "" else value


def evaluate(guess: CatalogEntry, secret: CatalogEntry) -> GuessResult:
    """
    Five comparison rows plus the overall match. Values compare exactly (case-sensitive text,
    None only equals None); the match is on name, ignoring case.
    """
    rows = []
    for label, attr in COMPARED_FIELDS:
        g, s = getattr(guess, attr), getattr(secret, attr)
        rows.append(ComparisonRow(label=label, guess=_display(g), secret=_display(s), ok=g == s))
    return GuessResult(
        guess_name=guess.name,
        secret_name=secret.name,
        rows=tuple(rows),
        matched=guess.name.lower() == secret.name.lower(),
    )


def check_guess(
    conn: duckdb.DuckDBPyConnection, name: str, day: date | datetime | None = None
) -> GuessResult:
    """
    Look up the guessed name, pick the day's secret, compare, and log the outcome.
    Raises InvalidField (blank name), NotFound (unknown name) or EmptyCatalog.
    """
    name = (name or "").strip()
    if not name:
        raise InvalidField(["Enter a pokemon name."])
    guess = lookup_entry(conn, name)
    secret = get_daily_secret(conn, day)
    result = evaluate(guess, secret)
    append_outcome(conn, GuessOutcome(submitted_name=guess.name, matched=result.matched, secret_name=secret.name))
    logging.debug("Guess %s -> matched=%s", guess.name, result.matched)
    return result
