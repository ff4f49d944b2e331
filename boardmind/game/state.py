from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Optional

from .board import Board
from .types import ONGOING, Outcome, Player


@dataclass
class Move:
    cell: tuple
    player: Player
    elapsed: Optional[float] = None  # seconds spent choosing this move


class Rules(abc.ABC):
    """Board geometry and terminal detection for one game."""

    size: int
    first_player: Player = Player.BLACK

    def new_board(self) -> Board:
        return Board(self.size)

    @abc.abstractmethod
    def cells(self) -> list[tuple]:
        """Every cell on the board, in a fixed order."""

    @abc.abstractmethod
    def winner(self, board: Board, last_move: Optional[tuple] = None) -> Optional[Player]:
        """Return the winning player, if any.

        `last_move` lets games with local win checks skip a full scan.
        """

    @abc.abstractmethod
    def format_cell(self, cell: tuple) -> str:
        ...

    @abc.abstractmethod
    def parse_cell(self, text: str) -> Optional[tuple]:
        ...

    def is_full(self, board: Board) -> bool:
        return board.occupied_count == self.size * self.size

    def outcome(self, board: Board, last_move: Optional[tuple] = None) -> Outcome:
        winner = self.winner(board, last_move)
        if winner is not None:
            return Outcome(winner=winner, is_over=True)
        if self.is_full(board):
            return Outcome(winner=None, is_over=True)
        return ONGOING


class GameState:
    """Caller-side game state: board, side to move, move history."""

    def __init__(self, rules: Rules) -> None:
        self.rules = rules
        self.board = rules.new_board()
        self.current_player = rules.first_player
        self.moves: list[Move] = []
        self._outcome = ONGOING

    @property
    def is_over(self) -> bool:
        return self._outcome.is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._outcome.winner

    @property
    def is_draw(self) -> bool:
        return self._outcome.is_draw

    @property
    def history(self) -> list[tuple]:
        return [m.cell for m in self.moves]

    def legal_moves(self) -> list[tuple]:
        if self.is_over:
            return []
        return [c for c in self.rules.cells() if self.board.is_empty(c)]

    def apply_move(self, cell: tuple, elapsed: Optional[float] = None) -> None:
        """Place a stone for the current player and advance the turn."""
        assert not self.is_over, "Game is already over"
        assert self.board.is_on_grid(cell), f"Cell {cell} is off the grid"
        assert self.board.is_empty(cell), f"Cell {self.rules.format_cell(cell)} is occupied"

        player = self.current_player
        self.board.place(cell, player)
        self.moves.append(Move(cell=cell, player=player, elapsed=elapsed))
        self._outcome = self.rules.outcome(self.board, cell)
        self.current_player = player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.cell)
        self.current_player = move.player
        self._outcome = ONGOING
        return move

    def resign(self, player: Player) -> None:
        self._outcome = Outcome(winner=player.other, is_over=True)
