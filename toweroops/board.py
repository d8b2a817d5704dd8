from __future__ import annotations

import random
from typing import Dict, Iterator, List, Optional, Tuple

from .types import BOARD_SIZE, EMPTY_CELL, Cell, CellKind, Coord, Selection


def _draw_kind(rng: random.Random) -> CellKind:
    roll = rng.randrange(11)
    if roll == 0:
        return CellKind.BANANA
    if roll <= 6:
        return CellKind.STONE
    return CellKind.BOMB


def _draw_value(rng: random.Random) -> int:
    # Skewed toward weak pieces: 1/11 -> 3, 2/11 -> 2, 4/11 -> 1, 4/11 -> 0
    roll = rng.randrange(11)
    if roll == 0:
        return 3
    if roll <= 2:
        return 2
    if roll <= 6:
        return 1
    return 0


class Board:
    """Fixed 8x8 grid of cells indexed by (col, row).

    Cells are only ever cleared, never reintroduced, so a board shrinks toward
    empty over the course of a round. ``copy`` is cheap (cells are immutable)
    which is what the search relies on.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Optional[List[Cell]] = None) -> None:
        if cells is None:
            cells = [EMPTY_CELL] * (BOARD_SIZE * BOARD_SIZE)
        if len(cells) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"Board needs {BOARD_SIZE * BOARD_SIZE} cells, got {len(cells)}")
        self._cells = cells

    @classmethod
    def new_random(cls, rng: Optional[random.Random] = None) -> Tuple["Board", Selection]:
        """Draw a fresh board and a starting selection from ``rng``."""
        rng = rng or random.Random()
        cells: List[Cell] = [EMPTY_CELL] * (BOARD_SIZE * BOARD_SIZE)
        for col in range(BOARD_SIZE):
            for row in range(BOARD_SIZE):
                kind = _draw_kind(rng)
                value = _draw_value(rng) if kind in (CellKind.STONE, CellKind.BOMB) else 0
                cells[col * BOARD_SIZE + row] = Cell(kind, value)

        if rng.random() < 0.5:
            selection = Selection.row(rng.randrange(BOARD_SIZE))
        else:
            selection = Selection.column(rng.randrange(BOARD_SIZE))
        return cls(cells), selection

    @staticmethod
    def _index(col: int, row: int) -> int:
        if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
            raise IndexError(f"Cell ({col}, {row}) is off the board")
        return col * BOARD_SIZE + row

    def get(self, col: int, row: int) -> Cell:
        return self._cells[self._index(col, row)]

    def set(self, col: int, row: int, cell: Cell) -> None:
        self._cells[self._index(col, row)] = cell

    def clear(self, col: int, row: int) -> None:
        self._cells[self._index(col, row)] = EMPTY_CELL

    def copy(self) -> "Board":
        return Board(list(self._cells))

    def axis_cells(self, selection: Selection) -> Iterator[Tuple[Coord, Cell]]:
        """Yield ((col, row), cell) for the 8 cells of an axis in index order."""
        for i in range(BOARD_SIZE):
            col, row = selection.coords(i)
            yield (col, row), self._cells[self._index(col, row)]

    def selection_exhausted(self, selection: Selection) -> bool:
        return all(cell.is_empty for _, cell in self.axis_cells(selection))

    def cells(self) -> Iterator[Tuple[Coord, Cell]]:
        for col in range(BOARD_SIZE):
            for row in range(BOARD_SIZE):
                yield (col, row), self._cells[col * BOARD_SIZE + row]

    def remaining(self) -> int:
        return sum(1 for cell in self._cells if not cell.is_empty)

    def to_rows(self) -> List[List[Dict[str, object]]]:
        return [
            [
                {"kind": self.get(col, row).kind.value, "value": self.get(col, row).value}
                for col in range(BOARD_SIZE)
            ]
            for row in range(BOARD_SIZE)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]
