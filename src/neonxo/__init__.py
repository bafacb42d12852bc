"""NeonXO package exposing the tic-tac-toe engine and its web host."""

from .game import GameState, MoveResult, ScoreTally, TicTacToeEngine
from .ui import app

__all__ = ["GameState", "MoveResult", "ScoreTally", "TicTacToeEngine", "app"]
