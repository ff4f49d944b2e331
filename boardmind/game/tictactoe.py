from __future__ import annotations

from typing import Optional

from .board import Board, parse_board, render_board
from .state import Rules
from .types import Player, Point

BOARD_SIZE = 3

CENTER = Point(1, 1)
CORNERS = [Point(0, 0), Point(0, 2), Point(2, 0), Point(2, 2)]

LINES: list[tuple[Point, Point, Point]] = [
    # Rows
    (Point(0, 0), Point(0, 1), Point(0, 2)),
    (Point(1, 0), Point(1, 1), Point(1, 2)),
    (Point(2, 0), Point(2, 1), Point(2, 2)),
    # Columns
    (Point(0, 0), Point(1, 0), Point(2, 0)),
    (Point(0, 1), Point(1, 1), Point(2, 1)),
    (Point(0, 2), Point(1, 2), Point(2, 2)),
    # Diagonals
    (Point(0, 0), Point(1, 1), Point(2, 2)),
    (Point(0, 2), Point(1, 1), Point(2, 0)),
]


def winning_line(board: Board) -> Optional[tuple[Point, Point, Point]]:
    for line in LINES:
        a, b, c = (board.get(p) for p in line)
        if a is not None and a is b and a is c:
            return line
    return None


def parse_ttt_board(text: str) -> Board:
    return parse_board(text, BOARD_SIZE, Point)


def render_ttt_board(board: Board) -> str:
    return render_board(board, Point)


class TicTacToeRules(Rules):
    size = BOARD_SIZE

    def cells(self) -> list[Point]:
        return [Point(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]

    def winner(self, board: Board, last_move: Optional[tuple] = None) -> Optional[Player]:
        line = winning_line(board)
        return board.get(line[0]) if line else None

    def format_cell(self, cell: tuple) -> str:
        # "b2" style: column letter, 1-based row
        return f"{'abc'[cell[1]]}{cell[0] + 1}"

    def parse_cell(self, text: str) -> Optional[Point]:
        text = text.strip().lower()
        if len(text) != 2 or text[0] not in "abc" or text[1] not in "123":
            return None
        return Point(int(text[1]) - 1, "abc".index(text[0]))
