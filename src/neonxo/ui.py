"""FastAPI host that drives NeonXO engines for a browser front-end.

The front-end owns rendering, animation and score storage. This module only
keeps one engine per session, forwards the four engine operations and reports
state back as JSON, including the latest score snapshot so the client can
persist it and hand it back when it opens a new game.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import InitVar, dataclass, field
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, StrictInt

from .game import GameState, TicTacToeEngine

_log = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an engine and what the host remembers about it."""

    initial_scores: InitVar[Any] = None
    engine: TicTacToeEngine = field(init=False)
    scores: Dict[str, int] = field(init=False)
    move_log: List[Dict[str, int | str]] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self, initial_scores: Any) -> None:
        self.engine = TicTacToeEngine(
            scores=initial_scores, on_scores_changed=self._store_scores
        )
        self.scores = self.engine.scores

    def _store_scores(self, snapshot: Dict[str, int]) -> None:
        self.scores = snapshot


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="NeonXO", description="Tic-tac-toe engine for the browser")


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    # Any shape accepted; malformed snapshots load as an empty tally.
    scores: Optional[Any] = None


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    index: StrictInt


def _create_session(scores: Any = None) -> tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession(initial_scores=scores)
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    _log.info("Created game %s with scores %s", session_id, session.scores)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_state(
    game_id: str, session: GameSession, state: GameState
) -> Dict[str, object]:
    return {
        "id": game_id,
        "board": [c if c in ("X", "O") else "" for c in state.cells],
        "currentPlayer": state.current_player,
        "status": state.status,
        "active": state.active,
        "winner": state.winner,
        "winningLine": list(state.winning_line) if state.winning_line else None,
        "drawn": state.drawn,
        "scores": dict(session.scores),
        "leader": session.engine.leader,
        "moveLog": list(session.move_log),
    }


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        return _serialize_state(game_id, session, session.engine.state)


@app.post("/api/game")
def create_game(request: Optional[NewGameRequest] = None) -> Dict[str, object]:
    scores = request.scores if request is not None else None
    game_id, session = _create_session(scores)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        player = session.engine.state.current_player
        result = session.engine.apply_move(request.index)
        if result.accepted:
            session.move_log.append({"player": player, "index": request.index})
            if result.state.winner:
                _log.info(
                    "Game %s: %s wins on %s, scores %s",
                    game_id,
                    result.state.winner,
                    result.winning_line,
                    session.scores,
                )
            elif result.state.drawn:
                _log.info("Game %s: round drawn", game_id)
        payload = _serialize_state(game_id, session, result.state)
    payload["accepted"] = result.accepted
    return payload


@app.post("/api/game/{game_id}/restart")
def restart_round(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        state = session.engine.restart_round()
        session.move_log.clear()
        return _serialize_state(game_id, session, state)


@app.post("/api/game/{game_id}/reset-scores")
def reset_scores(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        state = session.engine.reset_scores()
        session.move_log.clear()
        _log.info("Game %s: scores reset", game_id)
        return _serialize_state(game_id, session, state)
