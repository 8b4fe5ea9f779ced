"""
Tests for the guess log.
"""
from pokedle.guesses import STATS_PAGE_SIZE, GuessOutcome, append_outcome, list_recent_outcomes, summarize_outcomes


def _log(conn, n, start=0):
    for i in range(start, start + n):
        append_outcome(
            conn,
            GuessOutcome(
                submitted_name=f"Guess{i}",
                matched=i % 2 == 0,
                secret_name="Bulbasaur",
                created_at=f"2024-01-01T00:{i // 60:02d}:{i % 60:02d}.000Z",
            ),
        )


def test_append_returns_id(conn):
    saved = append_outcome(conn, GuessOutcome(submitted_name="Squirtle", matched=False, secret_name="Bulbasaur"))
    assert saved.id == 1
    assert saved.created_at.endswith("Z")


def test_newest_first(conn):
    _log(conn, 3)
    assert [o.submitted_name for o in list_recent_outcomes(conn)] == ["Guess2", "Guess1", "Guess0"]


def test_same_timestamp_ordered_by_insertion(conn):
    for name in ("A", "B"):
        append_outcome(conn, GuessOutcome(submitted_name=name, matched=False, secret_name="X", created_at="2024-01-01T00:00:00.000Z"))
    assert [o.submitted_name for o in list_recent_outcomes(conn)] == ["B", "A"]


def test_bounded_to_page_size(conn):
    _log(conn, STATS_PAGE_SIZE + 5)
    rows = list_recent_outcomes(conn, limit=1000)
    assert len(rows) == STATS_PAGE_SIZE
    assert rows[0].submitted_name == f"Guess{STATS_PAGE_SIZE + 4}"


def test_limit(conn):
    _log(conn, 5)
    assert len(list_recent_outcomes(conn, limit=2)) == 2
    assert list_recent_outcomes(conn, limit=0) == []


def test_matched_round_trips_as_bool(conn):
    _log(conn, 2)
    assert [o.matched for o in list_recent_outcomes(conn)] == [False, True]


def test_summary():
    outcomes = [
        GuessOutcome(submitted_name="a", matched=True, secret_name="a"),
        GuessOutcome(submitted_name="b", matched=False, secret_name="a"),
        GuessOutcome(submitted_name="c", matched=False, secret_name="a"),
    ]
    assert summarize_outcomes(outcomes) == {"total": 3, "wins": 1, "win_rate": 0.333}
    assert summarize_outcomes([]) == {"total": 0, "wins": 0, "win_rate": 0.0}
