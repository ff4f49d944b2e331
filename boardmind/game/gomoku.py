from __future__ import annotations

from typing import Optional

from .board import Board, parse_board, render_board
from .state import Rules
from .types import Player, Point

BOARD_SIZE = 15
WIN_LENGTH = 5

# Column labels: A-O for 15x15
COL_LABELS = "ABCDEFGHIJKLMNO"

# Four line axes: horizontal, vertical, diagonal, anti-diagonal
DIRECTIONS = [(0, 1), (1, 0), (1, 1), (1, -1)]

CENTER = Point(BOARD_SIZE // 2, BOARD_SIZE // 2)


def parse_coordinate(text: str) -> Optional[Point]:
    """Parse a coordinate string like 'E5' or 'H12' into a Point.

    Column is a letter A-O, row is a number 1-15.
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= BOARD_SIZE):
        return None
    col = COL_LABELS.index(col_char)
    return Point(row - 1, col)


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'E5'."""
    return f"{COL_LABELS[point.col]}{point.row + 1}"


def parse_gomoku_board(text: str) -> Board:
    return parse_board(text, BOARD_SIZE, Point)


def render_gomoku_board(board: Board) -> str:
    return render_board(board, Point)


def run_length(board: Board, point: Point, player: Player, dr: int, dc: int) -> int:
    """Length of the run of `player` through `point` along (dr, dc).

    `point` itself counts as one stone whether or not it is occupied.
    """
    count = 1
    for sign in (1, -1):
        r, c = point.row + sign * dr, point.col + sign * dc
        while board.is_on_grid((r, c)) and board.get(Point(r, c)) is player:
            count += 1
            r += sign * dr
            c += sign * dc
    return count


def five_through(board: Board, point: Point) -> bool:
    """Check whether the stone at `point` is part of five or more in a row."""
    player = board.get(point)
    if player is None:
        return False
    return any(
        run_length(board, point, player, dr, dc) >= WIN_LENGTH
        for dr, dc in DIRECTIONS
    )


class GomokuRules(Rules):
    size = BOARD_SIZE

    def cells(self) -> list[Point]:
        return [Point(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]

    def winner(self, board: Board, last_move: Optional[tuple] = None) -> Optional[Player]:
        if last_move is not None:
            point = Point(*last_move)
            return board.get(point) if five_through(board, point) else None
        for cell, player in board.items():
            if five_through(board, Point(*cell)):
                return player
        return None

    def format_cell(self, cell: tuple) -> str:
        return format_point(Point(*cell))

    def parse_cell(self, text: str) -> Optional[Point]:
        return parse_coordinate(text)
