from __future__ import annotations

from typing import Dict

from .board import Board
from .types import BOARD_SIZE, Cell, CellKind, Selection


def _div_toward_zero(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


class Evaluator:
    """Scoring for tower positions.

    Positive scores favor the searching AI, negative scores its opponent.
    The weights below are tuned by hand and reproduced exactly; changing any
    of them changes which moves the AI prefers.
    """

    WIN_SCORE = 10000
    EXHAUSTION_SCORE = 5000

    TOWER_WEIGHT = 100
    AXIS_WEIGHT = 8
    BOARD_DIVISOR = BOARD_SIZE
    MOBILITY_WEIGHT = 5

    CELL_VALUES: Dict[CellKind, int] = {
        CellKind.EMPTY: 0,
        CellKind.STONE: 10,
        CellKind.BOMB: -10,
        CellKind.BANANA: 1,
    }

    @classmethod
    def cell_value(cls, cell: Cell) -> int:
        """Immediate value of picking ``cell``; positive is good for the picker."""
        if cell.kind in (CellKind.STONE, CellKind.BOMB):
            return cls.CELL_VALUES[cell.kind] * (cell.value + 1)
        return cls.CELL_VALUES[cell.kind]

    @classmethod
    def evaluate(cls, board: Board, selection: Selection, tower_me: int, tower_opp: int) -> int:
        """Static evaluation of a non-terminal position at the search horizon."""
        axis_value = 0
        available = 0
        for _, cell in board.axis_cells(selection):
            if not cell.is_empty:
                axis_value += cls.cell_value(cell)
                available += 1

        board_value = sum(cls.cell_value(cell) for _, cell in board.cells() if not cell.is_empty)

        return (
            (tower_me - tower_opp) * cls.TOWER_WEIGHT
            + axis_value * cls.AXIS_WEIGHT
            - _div_toward_zero(board_value, cls.BOARD_DIVISOR)
            + available * cls.MOBILITY_WEIGHT
        )

    @classmethod
    def evaluate_final(cls, tower_me: int, tower_opp: int) -> int:
        """Score for a round that ended because the active axis ran dry."""
        if tower_me > tower_opp:
            return cls.EXHAUSTION_SCORE
        if tower_me < tower_opp:
            return -cls.EXHAUSTION_SCORE
        return 0
