"""Connection game on an 11x11 rhombus of hexagons (axial coordinates).

BLACK connects the left edge (q = 0) to the right edge (q = N-1);
WHITE connects the top edge (r = 0) to the bottom edge (r = N-1).
"""

from __future__ import annotations

from collections import deque
from typing import Optional

from .board import Board, parse_board, render_board
from .state import Rules
from .types import Hex, Player

BOARD_SIZE = 11

COL_LABELS = "ABCDEFGHIJKLMNOPQRS"

# Axial neighbour offsets
DIRECTIONS = [(1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1)]


def neighbors(cell: Hex, size: int = BOARD_SIZE) -> list[Hex]:
    """On-board neighbours of `cell`."""
    result = []
    for dq, dr in DIRECTIONS:
        q, r = cell.q + dq, cell.r + dr
        if 0 <= q < size and 0 <= r < size:
            result.append(Hex(q, r))
    return result


def center(size: int = BOARD_SIZE) -> Hex:
    return Hex(size // 2, size // 2)


def start_edge(player: Player, size: int = BOARD_SIZE) -> list[Hex]:
    if player is Player.BLACK:
        return [Hex(0, i) for i in range(size)]
    return [Hex(i, 0) for i in range(size)]


def is_end_edge(cell: Hex, player: Player, size: int = BOARD_SIZE) -> bool:
    if player is Player.BLACK:
        return cell.q == size - 1
    return cell.r == size - 1


def has_connection(board: Board, player: Player) -> bool:
    """Breadth-first search from the player's stones on its start edge."""
    size = board.size
    queue = deque(c for c in start_edge(player, size) if board.get(c) is player)
    visited = set(queue)
    while queue:
        current = queue.popleft()
        if is_end_edge(current, player, size):
            return True
        for n in neighbors(current, size):
            if n not in visited and board.get(n) is player:
                visited.add(n)
                queue.append(n)
    return False


def format_hex(cell: Hex) -> str:
    """Format a Hex as 'F6' (column letter for q, 1-based row for r)."""
    return f"{COL_LABELS[cell.q]}{cell.r + 1}"


def parse_hex(text: str, size: int = BOARD_SIZE) -> Optional[Hex]:
    """Parse 'F6' into Hex(5, 5). Returns None if the string is invalid."""
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char, row_str = text[0], text[1:]
    if col_char not in COL_LABELS[:size]:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= size):
        return None
    return Hex(COL_LABELS.index(col_char), row - 1)


def _text_cell(i: int, j: int) -> Hex:
    # Text rows run along r, characters along q
    return Hex(j, i)


def parse_hex_board(text: str, size: int = BOARD_SIZE) -> Board:
    return parse_board(text, size, _text_cell)


def render_hex_board(board: Board) -> str:
    return render_board(board, _text_cell)


class HexRules(Rules):
    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.size = size

    def cells(self) -> list[Hex]:
        return [Hex(q, r) for r in range(self.size) for q in range(self.size)]

    def winner(self, board: Board, last_move: Optional[tuple] = None) -> Optional[Player]:
        if last_move is not None:
            mover = board.get(last_move)
            if mover is None:
                return None
            return mover if has_connection(board, mover) else None
        for player in (Player.BLACK, Player.WHITE):
            if has_connection(board, player):
                return player
        return None

    def format_cell(self, cell: tuple) -> str:
        return format_hex(Hex(*cell))

    def parse_cell(self, text: str) -> Optional[Hex]:
        return parse_hex(text, self.size)
