"""Tic-tac-toe engine: exhaustive minimax, preferring quick wins and slow losses."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from boardmind.agent.base import Engine, SearchResult
from boardmind.game.board import Board
from boardmind.game.tictactoe import CENTER, CORNERS, TicTacToeRules, winning_line
from boardmind.game.types import Player, Point

logger = logging.getLogger(__name__)

WIN_VALUE = 10
DRAW_VALUE = 0


def empty_cells(board: Board) -> list[Point]:
    return [
        Point(r, c)
        for r in range(board.size)
        for c in range(board.size)
        if board.is_empty(Point(r, c))
    ]


def minimax(board: Board, depth: int, maximizing: bool, player: Player) -> int:
    """Exact game value for `player`: 10 - depth for a win, depth - 10 for a loss."""
    line = winning_line(board)
    if line is not None:
        return WIN_VALUE - depth if board.get(line[0]) is player else depth - WIN_VALUE
    moves = empty_cells(board)
    if not moves:
        return DRAW_VALUE

    mover = player if maximizing else player.other
    scores = []
    for move in moves:
        with board.placed(move, mover):
            scores.append(minimax(board, depth + 1, not maximizing, player))
    return max(scores) if maximizing else min(scores)


class TicTacToeEngine(Engine):
    def __init__(self) -> None:
        self.rules = TicTacToeRules()

    def generate_candidates(self, board: Board) -> list[Point]:
        return empty_cells(board)

    def evaluate(self, board: Board, player: Player) -> float:
        return minimax(board.copy(), 0, True, player)

    def choose_move(
        self,
        board: Board,
        history: Sequence[tuple],
        engine_player: Player,
    ) -> SearchResult:
        if board.occupied_count == 0:
            return SearchResult(move=CENTER)
        if board.occupied_count == 1:
            return SearchResult(move=CENTER if board.is_empty(CENTER) else CORNERS[0])

        scratch = board.copy()
        best_score = -float("inf")
        best_move: Optional[Point] = None
        for move in empty_cells(scratch):
            with scratch.placed(move, engine_player):
                score = minimax(scratch, 0, False, engine_player)
            if score > best_score:
                best_score, best_move = score, move

        logger.debug("%s plays %s (value %s)", engine_player, best_move, best_score)
        if best_move is None:
            return SearchResult(move=None)
        return SearchResult(move=best_move, score=best_score)
