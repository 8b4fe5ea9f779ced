import json

import pytest

from pokedle import db

BULBASAUR = {
    "name": "Bulbasaur",
    "type1": "Grass",
    "type2": "Poison",
    "evolution_stage": 1,
    "total_evolutions": 3,
    "color": "Green",
}

SMALL_POKEDEX = [
    BULBASAUR,
    {"name": "Charmander", "type1": "Fire", "type2": None, "evolution_stage": 1, "total_evolutions": 3, "color": "Red"},
    {"name": "Squirtle", "type1": "Water", "type2": None, "evolution_stage": 1, "total_evolutions": 3, "color": "Blue"},
]


def write_pokedex(path, entries):
    path.write_text(json.dumps(entries), encoding="utf-8")
    return path


@pytest.fixture
def pokedex_file(tmp_path):
    return write_pokedex(tmp_path / "pokedex.json", SMALL_POKEDEX)


@pytest.fixture
def empty_pokedex_file(tmp_path):
    return write_pokedex(tmp_path / "empty.json", [])


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.duckdb"


@pytest.fixture
def conn(db_path, pokedex_file):
    """Schema in place, seeded with Bulbasaur, Charmander, Squirtle (ids 1..3)."""
    c = db.open_db(db_path, pokedex_file)
    yield c
    c.close()


@pytest.fixture
def empty_conn(db_path, empty_pokedex_file):
    c = db.open_db(db_path, empty_pokedex_file)
    yield c
    c.close()
