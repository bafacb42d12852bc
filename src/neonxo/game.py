"""Core rules and score keeping for NeonXO (classic 3x3 tic-tac-toe)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

Player = str  # "X" or "O"
Line = Tuple[int, int, int]

EMPTY = " "
PLAYERS: Tuple[Player, Player] = ("X", "O")

WINNING_LINES: Tuple[Line, ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

_log = logging.getLogger(__name__)


def other_player(player: Player) -> Player:
    return "O" if player == "X" else "X"


# ---------- Round state ----------


@dataclass
class GameState:
    # 'X', 'O', or ' ' (space) for empty
    cells: List[str] = field(default_factory=lambda: [EMPTY] * 9)
    current_player: Player = "X"
    winner: Optional[Player] = None
    winning_line: Optional[Line] = None
    drawn: bool = False

    @property
    def status(self) -> str:
        if self.winner:
            return "won"
        if self.drawn:
            return "draw"
        return "in_progress"

    @property
    def active(self) -> bool:
        return not self.winner and not self.drawn

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.cells)

    def copy(self) -> "GameState":
        return GameState(
            cells=self.cells.copy(),
            current_player=self.current_player,
            winner=self.winner,
            winning_line=self.winning_line,
            drawn=self.drawn,
        )


def find_winning_line(cells: List[str]) -> Optional[Line]:
    """First line (rows, columns, diagonals) holding three equal marks."""
    for line in WINNING_LINES:
        a, b, c = line
        v = cells[a]
        if v != EMPTY and v == cells[b] == cells[c]:
            return line
    return None


# ---------- Score tally ----------


@dataclass
class ScoreTally:
    """Cumulative wins per player, kept across rounds.

    ``snapshot()`` / ``from_snapshot()`` define the persistence record,
    a plain ``{"X": int, "O": int}`` mapping. Anything that does not look
    like one restores as an empty tally.
    """

    wins: Dict[Player, int] = field(default_factory=lambda: {p: 0 for p in PLAYERS})

    @classmethod
    def from_snapshot(cls, data: Union[Mapping[str, object], str, bytes, None]) -> "ScoreTally":
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except ValueError:
                _log.debug("Ignoring undecodable score snapshot")
                return cls()
        if not isinstance(data, Mapping):
            return cls()

        wins: Dict[Player, int] = {}
        for player in PLAYERS:
            value = data.get(player)
            # bool is an int subclass; a stored True is not a score
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                _log.debug("Ignoring malformed score snapshot: %r", data)
                return cls()
            wins[player] = value
        return cls(wins=wins)

    def snapshot(self) -> Dict[Player, int]:
        return dict(self.wins)

    def record(self, player: Player) -> None:
        self.wins[player] += 1

    def clear(self) -> None:
        for player in PLAYERS:
            self.wins[player] = 0

    def leader(self) -> Optional[Player]:
        x, o = self.wins["X"], self.wins["O"]
        if x > o:
            return "X"
        if o > x:
            return "O"
        return None


# ---------- Engine ----------


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    state: GameState
    winning_line: Optional[Line] = None


ScoreListener = Callable[[Dict[Player, int]], None]


class TicTacToeEngine:
    """Headless tic-tac-toe state machine.

    Owns one round's ``GameState`` and a ``ScoreTally`` that survives
    restarts. All mutation goes through ``apply_move``, ``restart_round``,
    ``reset_scores`` and ``record_win``; readers get copies.

    ``on_scores_changed`` is called with the new snapshot every time the
    tally changes, so the host can persist it.
    """

    def __init__(
        self,
        scores: Union[Mapping[str, object], str, bytes, None] = None,
        on_scores_changed: Optional[ScoreListener] = None,
    ) -> None:
        self._tally = ScoreTally.from_snapshot(scores)
        self._on_scores_changed = on_scores_changed
        self._state = GameState()
        self._win_recorded = False

    # ---- observation ----

    @property
    def state(self) -> GameState:
        return self._state.copy()

    @property
    def scores(self) -> Dict[Player, int]:
        return self._tally.snapshot()

    @property
    def leader(self) -> Optional[Player]:
        return self._tally.leader()

    # ---- operations ----

    def apply_move(self, index: int) -> MoveResult:
        """Place the current player's mark at ``index`` (0-8, row-major).

        Invalid moves leave everything untouched and come back with
        ``accepted=False``.
        """
        state = self._state
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index <= 8:
            _log.debug("Rejected move %r: index out of range", index)
            return MoveResult(accepted=False, state=self.state)
        if not state.active:
            _log.debug("Rejected move %d: round already finished", index)
            return MoveResult(accepted=False, state=self.state)
        if state.cells[index] != EMPTY:
            _log.debug("Rejected move %d: cell occupied", index)
            return MoveResult(accepted=False, state=self.state)

        player = state.current_player
        state.cells[index] = player
        self._update_status()

        if state.winner:
            self.record_win(state.winner)
        elif state.active:
            state.current_player = other_player(player)

        return MoveResult(accepted=True, state=self.state, winning_line=state.winning_line)

    def restart_round(self) -> GameState:
        self._state = GameState()
        self._win_recorded = False
        return self.state

    def reset_scores(self) -> GameState:
        self._tally.clear()
        self._emit_scores()
        return self.restart_round()

    def record_win(self, player: Player) -> bool:
        """Credit the winner of the current round, once.

        Ignored unless the round has been won by ``player`` and not yet
        credited.
        """
        if self._win_recorded or player not in PLAYERS or self._state.winner != player:
            _log.debug("Ignoring win for %r", player)
            return False
        self._win_recorded = True
        self._tally.record(player)
        self._emit_scores()
        return True

    # ---- helpers ----

    def _update_status(self) -> None:
        state = self._state
        line = find_winning_line(state.cells)
        if line is not None:
            state.winner = state.cells[line[0]]
            state.winning_line = line
            _log.debug("%s wins on %s", state.winner, line)
            return
        if state.is_full():
            state.drawn = True
            _log.debug("Round drawn")

    def _emit_scores(self) -> None:
        if self._on_scores_changed is not None:
            self._on_scores_changed(self._tally.snapshot())
