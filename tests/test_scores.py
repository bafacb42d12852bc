"""Tests for score tally persistence."""

import pytest

from neonxo.game import ScoreTally, TicTacToeEngine


def test_snapshot_restore():
    tally = ScoreTally.from_snapshot({"X": 4, "O": 1})
    assert tally.snapshot() == {"X": 4, "O": 1}
    assert tally.leader() == "X"


def test_restore_from_json_text():
    tally = ScoreTally.from_snapshot('{"X": 0, "O": 7}')
    assert tally.snapshot() == {"X": 0, "O": 7}
    assert tally.leader() == "O"


@pytest.mark.parametrize(
    "data",
    [
        None,
        {},
        {"X": 1},
        {"X": "1", "O": 2},
        {"X": 1.5, "O": 2},
        {"X": True, "O": 0},
        {"X": -1, "O": 0},
        [1, 2],
        "not json",
        "[1, 2]",
        42,
    ],
)
def test_malformed_snapshot_defaults_to_zero(data):
    assert ScoreTally.from_snapshot(data).snapshot() == {"X": 0, "O": 0}


def test_tie_has_no_leader():
    assert ScoreTally.from_snapshot({"X": 2, "O": 2}).leader() is None
    assert ScoreTally().leader() is None


def test_snapshot_is_detached():
    engine = TicTacToeEngine(scores={"X": 1, "O": 0})
    snapshot = engine.scores
    snapshot["X"] = 99
    assert engine.scores == {"X": 1, "O": 0}


def test_restore_from_json_bytes():
    engine = TicTacToeEngine(scores=b'{"X": 3, "O": 1}')
    assert engine.scores == {"X": 3, "O": 1}


def test_undecodable_bytes_default_to_zero():
    assert ScoreTally.from_snapshot(b"not json").snapshot() == {"X": 0, "O": 0}
