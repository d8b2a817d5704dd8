from __future__ import annotations

import random
from typing import Callable, Dict, Tuple

import pytest

from toweroops import Board, Cell, CellKind


def stone(value: int) -> Cell:
    return Cell(CellKind.STONE, value)


def bomb(value: int) -> Cell:
    return Cell(CellKind.BOMB, value)


BANANA = Cell(CellKind.BANANA, 0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def build_board() -> Callable[[Dict[Tuple[int, int], Cell]], Board]:
    """Board that is empty except for the given {(col, row): cell} entries."""

    def _build(cells: Dict[Tuple[int, int], Cell]) -> Board:
        board = Board()
        for (col, row), cell in cells.items():
            board.set(col, row, cell)
        return board

    return _build


@pytest.fixture
def cells():
    """Cell constructors: ``cells.stone(v)``, ``cells.bomb(v)``, ``cells.banana``."""

    class _Cells:
        banana = BANANA

        @staticmethod
        def stone(value: int) -> Cell:
            return stone(value)

        @staticmethod
        def bomb(value: int) -> Cell:
            return bomb(value)

    return _Cells
