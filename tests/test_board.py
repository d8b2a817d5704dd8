from __future__ import annotations

import random

import pytest

from toweroops import BOARD_SIZE, Board, Cell, CellKind, Selection


class ScriptedRandom(random.Random):
    """Replays a fixed sequence of randrange results."""

    def __init__(self, ranges, coin: float) -> None:
        super().__init__(0)
        self._ranges = list(ranges)
        self._coin = coin

    def randrange(self, *args, **kwargs):
        return self._ranges.pop(0)

    def random(self):
        return self._coin


def test_new_random_is_reproducible_for_a_seed():
    board_a, sel_a = Board.new_random(random.Random(99))
    board_b, sel_b = Board.new_random(random.Random(99))
    assert board_a == board_b
    assert sel_a == sel_b


def test_new_random_cells_are_well_formed():
    for seed in range(20):
        board, selection = Board.new_random(random.Random(seed))
        assert 0 <= selection.index < BOARD_SIZE
        for _, cell in board.cells():
            assert cell.kind is not CellKind.EMPTY
            if cell.kind is CellKind.BANANA:
                assert cell.value == 0
            else:
                assert 0 <= cell.value <= 3


def test_new_random_draw_order_all_bananas_and_column():
    scripted = ScriptedRandom([0] * 64 + [5], coin=0.9)
    board, selection = Board.new_random(scripted)
    assert all(cell.kind is CellKind.BANANA for _, cell in board.cells())
    assert selection == Selection.column(5)


def test_new_random_maps_rolls_to_kinds_and_values():
    # Each stone/bomb cell consumes a kind roll followed by a value roll
    rolls = []
    for _ in range(32):
        rolls += [1, 0]   # stone, value 3
        rolls += [10, 7]  # bomb, value 0
    scripted = ScriptedRandom(rolls + [2], coin=0.1)
    board, selection = Board.new_random(scripted)

    assert board.get(0, 0) == Cell(CellKind.STONE, 3)
    assert board.get(0, 1) == Cell(CellKind.BOMB, 0)
    assert board.get(7, 6) == Cell(CellKind.STONE, 3)
    assert board.get(7, 7) == Cell(CellKind.BOMB, 0)
    assert selection == Selection.row(2)


@pytest.mark.parametrize("col,row", [(-1, 0), (0, -1), (8, 0), (0, 8)])
def test_get_out_of_range_fails_fast(col, row):
    board = Board()
    with pytest.raises(IndexError):
        board.get(col, row)


def test_clear_is_idempotent():
    board, _ = Board.new_random(random.Random(3))
    board.clear(2, 2)
    board.clear(2, 2)
    assert board.get(2, 2).is_empty


def test_selection_exhausted_only_after_last_cell_cleared():
    board, _ = Board.new_random(random.Random(5))
    for axis in (Selection.row(3), Selection.column(6)):
        coords = [coord for coord, _ in board.axis_cells(axis)]
        for col, row in coords:
            assert not board.selection_exhausted(axis)
            board.clear(col, row)
        assert board.selection_exhausted(axis)


def test_selection_exhausted_ignores_other_axes(build_board, cells):
    board = build_board({(4, 4): cells.stone(1)})
    assert board.selection_exhausted(Selection.row(3))
    assert not board.selection_exhausted(Selection.row(4))
    assert not board.selection_exhausted(Selection.column(4))


def test_copy_is_independent():
    board, _ = Board.new_random(random.Random(11))
    clone = board.copy()
    clone.clear(0, 0)
    assert not board.get(0, 0).is_empty
    assert clone.get(0, 0).is_empty


def test_axis_cells_walks_index_order():
    board = Board()
    assert [coord for coord, _ in board.axis_cells(Selection.row(2))] == [(i, 2) for i in range(8)]
    assert [coord for coord, _ in board.axis_cells(Selection.column(5))] == [(5, i) for i in range(8)]
