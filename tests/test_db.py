"""
Tests for schema bootstrap and the one-time seed.
"""
import pytest

from pokedle import db
from pokedle.catalog import DuplicateName, count_entries, list_entries

from conftest import BULBASAUR, write_pokedex


def test_seeds_in_file_order(conn):
    assert [e.name for e in list_entries(conn)] == ["Bulbasaur", "Charmander", "Squirtle"]


def test_seed_runs_only_when_empty(db_path, pokedex_file):
    db.open_db(db_path, pokedex_file).close()
    conn = db.open_db(db_path, pokedex_file)
    assert count_entries(conn) == 3
    conn.close()


def test_bad_seed_file_rolls_back(db_path, tmp_path):
    bad = write_pokedex(tmp_path / "dupes.json", [BULBASAUR, {**BULBASAUR, "name": "BULBASAUR"}])
    with pytest.raises(DuplicateName):
        db.open_db(db_path, bad)
    conn = db.get_connection(db_path)
    assert count_entries(conn) == 0
    conn.close()


def test_missing_seed_file_leaves_catalog_empty(db_path, tmp_path):
    conn = db.open_db(db_path, tmp_path / "nope.json")
    assert count_entries(conn) == 0
    conn.close()


def test_bundled_pokedex_is_valid(db_path):
    conn = db.open_db(db_path, db.POKEDEX_PATH)
    names = [e.name for e in list_entries(conn)]
    assert names[0] == "Bulbasaur"
    assert len(names) == len(db.load_pokedex())
    conn.close()


def test_reset_rebuilds(db_path, pokedex_file):
    conn = db.open_db(db_path, pokedex_file)
    conn.execute("INSERT INTO guesses (submitted_name, matched, secret_name, created_at) VALUES ('a', false, 'b', 'c')")
    conn.close()
    db.reset_db(db_path, pokedex_file)
    conn = db.get_connection(db_path)
    assert conn.execute("SELECT COUNT(*) FROM guesses").fetchone()[0] == 0
    assert count_entries(conn) == 3
    conn.close()
