"""
Localhost frontend and API for Pokedle.
Run: uvicorn pokedle.app:app --reload --host 0.0.0.0
Then open http://localhost:8000
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Iterator

import duckdb
from dotenv import load_dotenv

# Load .env (POKEDLE_DB, POKEDEX_FILE) before the db module reads its defaults
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from fastapi import Depends, FastAPI
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel

from . import db
from .catalog import DuplicateName, InvalidField, NotFound, count_entries, insert_entry, list_names
from .check import check_guess
from .daily import EmptyCatalog, get_daily_secret, today_utc
from .guesses import STATS_PAGE_SIZE, list_recent_outcomes, summarize_outcomes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema and seed the catalog once, before the first request."""
    db.open_db(db.DB_PATH).close()
    logging.info("Pokedle database ready at %s", db.DB_PATH)
    yield


app = FastAPI(title="Pokedle", lifespan=lifespan)

STATIC_DIR = Path(__file__).parent / "static"


def get_db() -> Iterator[duckdb.DuckDBPyConnection]:
    """One connection per request, closed afterwards. Schema and seed are done at startup."""
    conn = db.get_connection(db.DB_PATH)
    try:
        yield conn
    finally:
        conn.close()


class GuessRequest(BaseModel):
    name: str = ""


class PokemonRequest(BaseModel):
    name: str = ""
    type1: str = ""
    type2: str | None = None
    # Left untyped so validate_fields sees the raw JSON value (no bool/float coercion)
    evolution_stage: Any = None
    total_evolutions: Any = None
    color: str = ""


@app.post("/api/guess")
def api_guess(body: GuessRequest, conn: duckdb.DuckDBPyConnection = Depends(get_db)):
    """Compare the guessed pokemon with today's. The secret name is only returned on a match."""
    try:
        result = check_guess(conn, body.name)
    except InvalidField as e:
        return {"ok": False, "error": str(e)}
    except NotFound as e:
        return {"ok": False, "error": str(e)}
    except EmptyCatalog:
        return {"ok": False, "error": "Could not pick today's pokemon."}
    except duckdb.Error:
        logging.exception("Guess failed for %r", body.name)
        return {"ok": False, "error": "Server error."}
    return {"ok": True, **result.to_dict()}


@app.get("/api/pokemon")
def api_pokemon_names(conn: duckdb.DuckDBPyConnection = Depends(get_db)):
    """All pokemon names, for autocomplete."""
    return {"ok": True, "names": list_names(conn)}


@app.post("/api/pokemon")
def api_add_pokemon(body: PokemonRequest, conn: duckdb.DuckDBPyConnection = Depends(get_db)):
    """Admin add. Validation problems and duplicate names come back as an error message."""
    try:
        entry = insert_entry(conn, body.model_dump())
    except InvalidField as e:
        return {"ok": False, "error": str(e), "problems": e.problems}
    except DuplicateName as e:
        return {"ok": False, "error": str(e)}
    except duckdb.Error:
        logging.exception("Insert failed for %r", body.name)
        return {"ok": False, "error": "Could not save to the database."}
    logging.info("Added pokemon %s to the pokedex", entry.name)
    return {"ok": True, "message": "Added to the Pokedex.", "pokemon": entry.to_dict()}


@app.get("/api/today")
def api_today(reveal_answer: bool = False, conn: duckdb.DuckDBPyConnection = Depends(get_db)):
    """Today's date and catalog size. Optionally include the answer if reveal_answer=true."""
    out = {"ok": True, "date": today_utc().isoformat(), "catalog_size": count_entries(conn)}
    if reveal_answer:
        try:
            out["secret_name"] = get_daily_secret(conn).name
        except EmptyCatalog:
            return {"ok": False, "error": "Could not pick today's pokemon."}
    return out


@app.get("/api/stats")
def api_stats(limit: int = STATS_PAGE_SIZE, conn: duckdb.DuckDBPyConnection = Depends(get_db)):
    """Most recent guesses, newest first, plus totals over that page."""
    try:
        outcomes = list_recent_outcomes(conn, limit)
    except duckdb.Error:
        logging.exception("Reading stats failed")
        return {"ok": False, "error": "Could not read stats."}
    return {
        "ok": True,
        "rows": [o.to_dict() for o in outcomes],
        "summary": summarize_outcomes(outcomes),
    }


def _page(filename: str):
    html_path = STATIC_DIR / filename
    if html_path.exists():
        return FileResponse(html_path)
    return HTMLResponse(f"<p>Page {filename} not found.</p>")


@app.get("/", response_class=HTMLResponse)
def index():
    """Serve the guess page."""
    return _page("index.html")


@app.get("/add", response_class=HTMLResponse)
def add():
    """Serve the admin add-pokemon form."""
    return _page("add.html")


@app.get("/stats", response_class=HTMLResponse)
def stats():
    """Serve the recent-guesses page."""
    return _page("stats.html")
