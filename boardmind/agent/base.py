from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Optional, Sequence

from boardmind.game.board import Board
from boardmind.game.state import Rules
from boardmind.game.types import Outcome, Player


@dataclass
class SearchResult:
    move: Optional[tuple]
    score: float = 0.0
    trace: list[str] = field(default_factory=list)


class Engine(abc.ABC):
    """A board-game opponent: candidates + evaluation + search."""

    rules: Rules

    def detect_terminal(self, board: Board, last_move: Optional[tuple] = None) -> Outcome:
        return self.rules.outcome(board, last_move)

    @abc.abstractmethod
    def generate_candidates(self, board: Board) -> list[tuple]:
        """Legal moves worth searching, most promising first."""

    @abc.abstractmethod
    def evaluate(self, board: Board, player: Player) -> float:
        """Static score of `board`; positive favours `player`."""

    @abc.abstractmethod
    def choose_move(
        self,
        board: Board,
        history: Sequence[tuple],
        engine_player: Player,
    ) -> SearchResult:
        """Pick a move for `engine_player`. Never mutates `board` observably."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
