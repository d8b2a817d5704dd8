from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import logging
import random

from .board import Board
from .evaluator import Evaluator
from .types import BOARD_SIZE, MAX_TOWER_HEIGHT, CellKind, Coord, Selection

logger = logging.getLogger(__name__)

MAX_AI_LEVEL = 4

# Minimax plies per level; levels 0 and 1 do not search
LEVEL_DEPTHS: Dict[int, int] = {2: 2, 3: 4, 4: 8}

_INF = 10**9


@dataclass
class SearchState:
    """Snapshot searched by minimax. Every branch works on its own copy."""

    board: Board
    selection: Selection
    tower_me: int
    tower_opp: int

    def copy(self) -> "SearchState":
        return SearchState(self.board.copy(), self.selection, self.tower_me, self.tower_opp)

    def apply(self, col: int, row: int, by_me: bool) -> None:
        cell = self.board.get(col, row)
        delta = cell.tower_delta()
        if by_me:
            self.tower_me = min(max(self.tower_me + delta, 0), MAX_TOWER_HEIGHT)
        else:
            self.tower_opp = min(max(self.tower_opp + delta, 0), MAX_TOWER_HEIGHT)
        if cell.kind is not CellKind.BANANA:
            self.selection = self.selection.after_pick(col, row)
        self.board.clear(col, row)

    def candidates(self) -> List[Coord]:
        return [coord for coord, cell in self.board.axis_cells(self.selection) if not cell.is_empty]


@dataclass
class SearchResult:
    best_move: Optional[Coord]
    score: int
    nodes: int
    scored_moves: Optional[List[Tuple[Coord, int]]] = None
    forced_win: bool = False


class AIPlayer:
    """Tiered move selection: random, greedy, and minimax with alpha-beta pruning.

    All randomness (the random tier and tie-breaks) comes from ``rng`` so a
    seeded player is fully deterministic. ``prune=False`` turns alpha-beta into
    plain minimax, which returns the same scores while visiting more nodes.
    """

    def __init__(self, rng: Optional[random.Random] = None, prune: bool = True) -> None:
        self.rng = rng or random.Random()
        self.prune = prune

    def choose_move(
        self,
        level: int,
        board: Board,
        selection: Selection,
        tower_self: int,
        tower_opponent: int,
    ) -> Coord:
        """Pick a cell on the active axis for the side owning ``tower_self``."""
        if level == 0:
            return self.random_move(board, selection)
        if level == 1:
            return self.greedy_move(board, selection)
        depth = LEVEL_DEPTHS.get(level, LEVEL_DEPTHS[MAX_AI_LEVEL])
        return self.minimax_move(board, selection, tower_self, tower_opponent, depth)

    def random_move(self, board: Board, selection: Selection) -> Coord:
        indices = list(range(BOARD_SIZE))
        self.rng.shuffle(indices)
        for i in indices:
            col, row = selection.coords(i)
            if not board.get(col, row).is_empty:
                return (col, row)
        return selection.coords(0)

    def greedy_move(self, board: Board, selection: Selection) -> Coord:
        best_score = -_INF
        best: List[Coord] = []
        for coord, cell in board.axis_cells(selection):
            if cell.is_empty:
                continue
            score = Evaluator.cell_value(cell)
            if score > best_score:
                best_score = score
                best = [coord]
            elif score == best_score:
                best.append(coord)
        if not best:
            return selection.coords(0)
        return self.rng.choice(best)

    def minimax_move(
        self,
        board: Board,
        selection: Selection,
        tower_self: int,
        tower_opponent: int,
        depth: int,
    ) -> Coord:
        result = self.score_moves(board, selection, tower_self, tower_opponent, depth)
        if result.best_move is None:
            return selection.coords(0)
        if result.forced_win or not result.scored_moves:
            return result.best_move
        tied = [move for move, score in result.scored_moves if score == result.score]
        return self.rng.choice(tied)

    def score_moves(
        self,
        board: Board,
        selection: Selection,
        tower_self: int,
        tower_opponent: int,
        depth: int,
    ) -> SearchResult:
        """Score every root move with a full window; stop early on a forced win."""
        state = SearchState(board.copy(), selection, tower_self, tower_opponent)
        best_score = -_INF
        best_move: Optional[Coord] = None
        nodes = 0
        scored_moves: List[Tuple[Coord, int]] = []

        for col, row in state.candidates():
            child = state.copy()
            child.apply(col, row, by_me=True)
            nodes += 1
            if child.tower_me >= MAX_TOWER_HEIGHT:
                score = Evaluator.WIN_SCORE + depth - 1
                scored_moves.append(((col, row), score))
                logger.debug("forced win at (%d, %d)", col, row)
                return SearchResult(
                    best_move=(col, row),
                    score=score,
                    nodes=nodes,
                    scored_moves=scored_moves,
                    forced_win=True,
                )

            score, sub_nodes = self._alphabeta(child, depth - 1, -_INF, _INF, maximizing=False)
            nodes += sub_nodes
            scored_moves.append(((col, row), score))
            if score > best_score:
                best_score = score
                best_move = (col, row)

        if best_move is None:
            best_score = Evaluator.evaluate_final(tower_self, tower_opponent)

        logger.debug(
            "depth=%d nodes=%d best=%s score=%d prune=%s",
            depth, nodes, best_move, best_score, self.prune,
        )
        return SearchResult(best_move=best_move, score=best_score, nodes=nodes, scored_moves=scored_moves)

    def _alphabeta(
        self,
        state: SearchState,
        depth: int,
        alpha: int,
        beta: int,
        maximizing: bool,
    ) -> Tuple[int, int]:
        if state.tower_me >= MAX_TOWER_HEIGHT:
            # Shallower wins keep more depth and score higher
            return Evaluator.WIN_SCORE + depth, 1
        if state.tower_opp >= MAX_TOWER_HEIGHT:
            return -Evaluator.WIN_SCORE - depth, 1

        if state.board.selection_exhausted(state.selection):
            return Evaluator.evaluate_final(state.tower_me, state.tower_opp), 1

        if depth <= 0:
            return Evaluator.evaluate(state.board, state.selection, state.tower_me, state.tower_opp), 1

        # Order children: most valuable pick for the mover first
        def move_key(coord: Coord) -> int:
            return Evaluator.cell_value(state.board.get(*coord))

        moves = sorted(state.candidates(), key=move_key, reverse=True)
        if not moves:
            return Evaluator.evaluate_final(state.tower_me, state.tower_opp), 1

        nodes = 0
        if maximizing:
            value = -_INF
            for col, row in moves:
                child = state.copy()
                child.apply(col, row, by_me=True)
                score, child_nodes = self._alphabeta(child, depth - 1, alpha, beta, maximizing=False)
                nodes += child_nodes + 1
                value = max(value, score)
                alpha = max(alpha, value)
                if self.prune and alpha >= beta:
                    break
            return value, nodes
        else:
            value = _INF
            for col, row in moves:
                child = state.copy()
                child.apply(col, row, by_me=False)
                score, child_nodes = self._alphabeta(child, depth - 1, alpha, beta, maximizing=True)
                nodes += child_nodes + 1
                value = min(value, score)
                beta = min(beta, value)
                if self.prune and alpha >= beta:
                    break
            return value, nodes
