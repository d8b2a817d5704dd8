from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Mapping, Tuple

BOARD_SIZE = 8
MAX_TOWER_HEIGHT = 20
DEFAULT_AI_LEVEL = 2

Coord = Tuple[int, int]


class CellKind(Enum):
    EMPTY = "empty"
    BOMB = "bomb"
    STONE = "stone"
    BANANA = "banana"


@dataclass(frozen=True)
class Cell:
    """A single board cell. ``value`` (0-3) only matters for stones and bombs."""

    kind: CellKind = CellKind.EMPTY
    value: int = 0

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    def tower_delta(self) -> int:
        if self.kind is CellKind.STONE:
            return self.value + 1
        if self.kind is CellKind.BOMB:
            return -(self.value + 1)
        return 0


EMPTY_CELL = Cell()


@dataclass(frozen=True)
class Selection:
    """The active axis: a whole row or a whole column."""

    is_row: bool
    index: int

    @classmethod
    def row(cls, index: int) -> "Selection":
        return cls(is_row=True, index=index)

    @classmethod
    def column(cls, index: int) -> "Selection":
        return cls(is_row=False, index=index)

    def coords(self, i: int) -> Coord:
        """(col, row) of the i-th cell along this axis."""
        if self.is_row:
            return (i, self.index)
        return (self.index, i)

    def contains(self, col: int, row: int) -> bool:
        return row == self.index if self.is_row else col == self.index

    def after_pick(self, col: int, row: int) -> "Selection":
        # Picking from a row activates that cell's column and vice versa
        if self.is_row:
            return Selection.column(col)
        return Selection.row(row)

    def to_dict(self) -> Dict[str, object]:
        return {"axis": "row" if self.is_row else "column", "index": self.index}

    def __repr__(self) -> str:
        return f"{'Row' if self.is_row else 'Column'}({self.index})"


class GameOutcome(Enum):
    """Outcome of a round from the human player's perspective."""

    RUNNING = "running"
    WON = "won"
    LOST = "lost"
    DRAWN = "drawn"


class MoveResult(Enum):
    INVALID = "invalid"
    CONTINUE = "continue"
    GAME_OVER = "game_over"


@dataclass
class Statistics:
    player_wins: int = 0
    computer_wins: int = 0
    draws: int = 0

    def record(self, outcome: GameOutcome) -> None:
        if outcome is GameOutcome.WON:
            self.player_wins += 1
        elif outcome is GameOutcome.LOST:
            self.computer_wins += 1
        elif outcome is GameOutcome.DRAWN:
            self.draws += 1

    def reset(self) -> None:
        self.player_wins = 0
        self.computer_wins = 0
        self.draws = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Statistics":
        return cls(
            player_wins=int(data.get("player_wins", 0)),
            computer_wins=int(data.get("computer_wins", 0)),
            draws=int(data.get("draws", 0)),
        )
