from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .types import Player

# Text grids use one character per cell
SYMBOLS = {Player.BLACK: "X", Player.WHITE: "O"}
EMPTY_SYMBOL = "."

# (row index, column index) of a text grid -> cell identifier
CellFactory = Callable[[int, int], tuple]


class Board:
    """Square board mapping cell identifiers to the player occupying them.

    Cells are any 2-tuple of ints (``Point`` or ``Hex``). Empty cells are
    simply absent from the mapping.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self._grid: dict[tuple, Player] = {}

    def place(self, cell: tuple, player: Player) -> None:
        assert self.is_on_grid(cell), f"{cell} is off the grid"
        assert self.is_empty(cell), f"{cell} is occupied"
        self._grid[cell] = player

    def remove(self, cell: tuple) -> None:
        del self._grid[cell]

    def get(self, cell: tuple) -> Optional[Player]:
        return self._grid.get(cell)

    def is_empty(self, cell: tuple) -> bool:
        return cell not in self._grid

    def is_on_grid(self, cell: tuple) -> bool:
        return 0 <= cell[0] < self.size and 0 <= cell[1] < self.size

    @property
    def occupied_count(self) -> int:
        return len(self._grid)

    def items(self) -> list[tuple[tuple, Player]]:
        """Occupied cells in sorted order."""
        return sorted(self._grid.items())

    def cells_of(self, player: Player) -> list[tuple]:
        return sorted(cell for cell, p in self._grid.items() if p is player)

    def snapshot(self) -> dict[tuple, Player]:
        return dict(self._grid)

    def copy(self) -> Board:
        clone = Board(self.size)
        clone._grid = dict(self._grid)
        return clone

    @contextmanager
    def placed(self, cell: tuple, player: Player) -> Iterator[None]:
        """Occupy `cell` for the duration of the block, then always vacate it."""
        self.place(cell, player)
        try:
            yield
        finally:
            self.remove(cell)

    def __len__(self) -> int:
        return len(self._grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self._grid == other._grid


def parse_board(text: str, size: int, make_cell: CellFactory) -> Board:
    """Build a Board from a text grid of X / O / . characters.

    Whitespace inside a row is ignored, blank lines are skipped.
    Raises ValueError if the grid is not `size` x `size`.
    """
    rows = ["".join(line.split()) for line in text.strip().splitlines()]
    rows = [row for row in rows if row]
    if len(rows) != size or any(len(row) != size for row in rows):
        raise ValueError(f"expected a {size}x{size} grid")

    board = Board(size)
    for i, row in enumerate(rows):
        for j, ch in enumerate(row.upper()):
            if ch == EMPTY_SYMBOL:
                continue
            if ch == SYMBOLS[Player.BLACK]:
                board.place(make_cell(i, j), Player.BLACK)
            elif ch == SYMBOLS[Player.WHITE]:
                board.place(make_cell(i, j), Player.WHITE)
            else:
                raise ValueError(f"unknown cell symbol {ch!r}")
    return board


def render_board(board: Board, make_cell: CellFactory) -> str:
    """Inverse of parse_board."""
    lines = []
    for i in range(board.size):
        row = []
        for j in range(board.size):
            player = board.get(make_cell(i, j))
            row.append(EMPTY_SYMBOL if player is None else SYMBOLS[player])
        lines.append("".join(row))
    return "\n".join(lines)
