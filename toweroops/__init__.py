"""Tower Oops game engine: board model, move rules, and tiered AI.

Modules:
- types: cells, selections, outcomes and statistics
- board: the 8x8 grid and its random generation
- game: round orchestration, move protocol and terminal detection
- evaluator: cell values and the static search heuristic
- ai: random, greedy and alpha-beta minimax move selection
- storage: JSON persistence of settings and statistics
"""

from .ai import AIPlayer, MAX_AI_LEVEL, SearchResult
from .board import Board
from .evaluator import Evaluator
from .game import Game
from .storage import Settings, Storage
from .types import (
    BOARD_SIZE,
    MAX_TOWER_HEIGHT,
    Cell,
    CellKind,
    GameOutcome,
    MoveResult,
    Selection,
    Statistics,
)

__all__ = [
    "AIPlayer",
    "MAX_AI_LEVEL",
    "SearchResult",
    "Board",
    "Evaluator",
    "Game",
    "Settings",
    "Storage",
    "BOARD_SIZE",
    "MAX_TOWER_HEIGHT",
    "Cell",
    "CellKind",
    "GameOutcome",
    "MoveResult",
    "Selection",
    "Statistics",
]
