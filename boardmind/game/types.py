from __future__ import annotations

import enum
from typing import NamedTuple, Optional


class Player(enum.Enum):
    BLACK = 1  # moves first; X in tic-tac-toe, left-right in Hex
    WHITE = 2

    @property
    def other(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


# None means the cell is empty
Occupant = Optional[Player]


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left


class Hex(NamedTuple):
    q: int  # 0 = left edge
    r: int  # 0 = top edge


class Outcome(NamedTuple):
    winner: Optional[Player]
    is_over: bool

    @property
    def is_draw(self) -> bool:
        return self.is_over and self.winner is None


ONGOING = Outcome(winner=None, is_over=False)
