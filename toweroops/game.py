from __future__ import annotations

from typing import Callable, Dict, List, Optional

import logging
import random

from .ai import MAX_AI_LEVEL, AIPlayer
from .board import Board
from .types import (
    BOARD_SIZE,
    DEFAULT_AI_LEVEL,
    MAX_TOWER_HEIGHT,
    CellKind,
    Coord,
    GameOutcome,
    MoveResult,
    Statistics,
)

logger = logging.getLogger(__name__)

StatisticsSink = Callable[[Statistics], None]


class Game:
    """Owns the state of one round plus the statistics across rounds.

    All mutation goes through ``make_move``, ``surrender``, ``new_game`` and the
    small hint/hover helpers. The AI is only ever handed the board to read; it
    searches on its own copies.

    ``persist_statistics`` is called after every finished round and after a
    statistics reset. An ``OSError`` from it is logged and otherwise ignored.
    """

    def __init__(
        self,
        ai_level: int = DEFAULT_AI_LEVEL,
        statistics: Optional[Statistics] = None,
        rng: Optional[random.Random] = None,
        persist_statistics: Optional[StatisticsSink] = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.ai = AIPlayer(rng=self.rng)
        self.ai_level = DEFAULT_AI_LEVEL
        self.set_ai_level(ai_level)
        self.statistics = statistics if statistics is not None else Statistics()
        self._persist_statistics = persist_statistics
        self.new_game()

    def new_game(self) -> None:
        """Start a fresh round, keeping statistics and AI level."""
        self.board, self.selection = Board.new_random(self.rng)
        self.tower_player = 0
        self.tower_computer = 0
        self.outcome = GameOutcome.RUNNING
        self.moves_made = 0
        self.tip: Optional[Coord] = None
        self.hovered: Optional[Coord] = None

    def set_ai_level(self, level: int) -> None:
        self.ai_level = min(max(int(level), 0), MAX_AI_LEVEL)

    def is_running(self) -> bool:
        return self.outcome is GameOutcome.RUNNING

    def is_valid_move(self, col: int, row: int) -> bool:
        if not self.is_running():
            return False
        if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
            return False
        return self.selection.contains(col, row) and not self.board.get(col, row).is_empty

    def get_legal_moves(self) -> List[Coord]:
        if not self.is_running():
            return []
        return [coord for coord, cell in self.board.axis_cells(self.selection) if not cell.is_empty]

    def make_move(self, col: int, row: int, is_player: bool) -> MoveResult:
        """Apply a pick for the human (``is_player``) or the computer.

        The caller drives turn order; this does not trigger the computer's reply.
        """
        if not self.is_valid_move(col, row):
            return MoveResult.INVALID

        cell = self.board.get(col, row)
        delta = cell.tower_delta()
        if is_player:
            self.tower_player = min(max(self.tower_player + delta, 0), MAX_TOWER_HEIGHT)
        else:
            self.tower_computer = min(max(self.tower_computer + delta, 0), MAX_TOWER_HEIGHT)

        # A banana lets the next mover pick from the same axis
        if cell.kind is not CellKind.BANANA:
            self.selection = self.selection.after_pick(col, row)

        self.board.clear(col, row)
        self.moves_made += 1
        self.tip = None

        if self.tower_player >= MAX_TOWER_HEIGHT:
            self._finish(GameOutcome.WON)
            return MoveResult.GAME_OVER
        if self.tower_computer >= MAX_TOWER_HEIGHT:
            self._finish(GameOutcome.LOST)
            return MoveResult.GAME_OVER

        if self.board.selection_exhausted(self.selection):
            if self.tower_player > self.tower_computer:
                outcome = GameOutcome.WON
            elif self.tower_player < self.tower_computer:
                outcome = GameOutcome.LOST
            else:
                outcome = GameOutcome.DRAWN
            self._finish(outcome)
            return MoveResult.GAME_OVER

        return MoveResult.CONTINUE

    def compute_ai_move(self) -> Coord:
        return self.ai.choose_move(
            self.ai_level, self.board, self.selection, self.tower_computer, self.tower_player
        )

    def computer_turn(self) -> MoveResult:
        if not self.is_running():
            return MoveResult.INVALID
        col, row = self.compute_ai_move()
        return self.make_move(col, row, is_player=False)

    def get_tip(self) -> Optional[Coord]:
        """Store and return the strongest suggestion for the human player."""
        if not self.is_running():
            return None
        self.tip = self.ai.choose_move(
            MAX_AI_LEVEL, self.board, self.selection, self.tower_player, self.tower_computer
        )
        return self.tip

    def surrender(self) -> bool:
        if not self.is_running():
            return False
        self._finish(GameOutcome.LOST)
        return True

    def update_hover(self, col: int, row: int) -> None:
        in_range = 0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE
        self.hovered = (col, row) if in_range and self.selection.contains(col, row) else None

    def clear_hover(self) -> None:
        self.hovered = None

    def reset_statistics(self) -> None:
        self.statistics.reset()
        self._save_statistics()

    def snapshot(self) -> Dict[str, object]:
        return {
            "board": self.board.to_rows(),
            "selection": self.selection.to_dict(),
            "tower_player": self.tower_player,
            "tower_computer": self.tower_computer,
            "outcome": self.outcome.value,
            "game_over": not self.is_running(),
            "moves_made": self.moves_made,
            "ai_level": self.ai_level,
            "tip": list(self.tip) if self.tip else None,
            "hovered": list(self.hovered) if self.hovered else None,
            "legal_moves": [list(coord) for coord in self.get_legal_moves()],
            "statistics": self.statistics.to_dict(),
        }

    def _finish(self, outcome: GameOutcome) -> None:
        self.outcome = outcome
        self.statistics.record(outcome)
        logger.info(
            "Round over: %s (player %d, computer %d, %d moves)",
            outcome.value, self.tower_player, self.tower_computer, self.moves_made,
        )
        self._save_statistics()

    def _save_statistics(self) -> None:
        if self._persist_statistics is None:
            return
        try:
            self._persist_statistics(self.statistics)
        except OSError as exc:
            logger.warning("Could not save statistics: %s", exc)
