"""Falling-block playfield: tetromino shapes, the static stack, collisions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

COLS = 10
ROWS = 20

FILLED = "#"
EMPTY_SYMBOL = "."

Shape = list[list[int]]
# Row 0 is the top of the well. Cells hold None or an opaque filled marker.
Stack = list[list[Optional[str]]]


@dataclass(frozen=True)
class Tetromino:
    kind: str
    shape: tuple[tuple[int, ...], ...]
    color: str  # render-only

    def rotations(self) -> list[Shape]:
        """The four clockwise rotations, starting with the spawn orientation."""
        result = []
        current = [list(row) for row in self.shape]
        for _ in range(4):
            result.append(current)
            current = rotate_matrix(current)
        return result


TETROMINOS: dict[str, Tetromino] = {
    "I": Tetromino("I", ((1, 1, 1, 1),), "#06b6d4"),
    "J": Tetromino("J", ((1, 0, 0), (1, 1, 1)), "#3b82f6"),
    "L": Tetromino("L", ((0, 0, 1), (1, 1, 1)), "#f97316"),
    "O": Tetromino("O", ((1, 1), (1, 1)), "#eab308"),
    "S": Tetromino("S", ((0, 1, 1), (1, 1, 0)), "#22c55e"),
    "T": Tetromino("T", ((0, 1, 0), (1, 1, 1)), "#a855f7"),
    "Z": Tetromino("Z", ((1, 1, 0), (0, 1, 1)), "#ef4444"),
}


def rotate_matrix(matrix: Shape) -> Shape:
    """Rotate a shape 90 degrees clockwise."""
    return [list(reversed(col)) for col in zip(*matrix)]


def empty_stack(rows: int = ROWS, cols: int = COLS) -> Stack:
    return [[None] * cols for _ in range(rows)]


def parse_stack(text: str) -> Stack:
    """Parse a stack drawn with '.' for empty and any other character for filled."""
    lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
    if not lines or len({len(line) for line in lines}) != 1:
        raise ValueError("stack rows must be non-empty and of equal width")
    return [[None if ch == EMPTY_SYMBOL else FILLED for ch in line] for line in lines]


def render_stack(stack: Stack) -> str:
    return "\n".join(
        "".join(EMPTY_SYMBOL if cell is None else FILLED for cell in row)
        for row in stack
    )


def shape_cells(shape: Shape, x: int, y: int) -> list[tuple[int, int]]:
    """(row, col) of every filled cell of `shape` with its top-left at (x, y)."""
    return [
        (y + dy, x + dx)
        for dy, row in enumerate(shape)
        for dx, value in enumerate(row)
        if value
    ]


def collides(stack: Stack, shape: Shape, x: int, y: int) -> bool:
    """True if the shape at (x, y) leaves the well or overlaps a filled cell.

    Rows above the top of the well (negative y) are free space.
    """
    rows, cols = len(stack), len(stack[0])
    for by, bx in shape_cells(shape, x, y):
        if bx < 0 or bx >= cols or by >= rows:
            return True
        if by >= 0 and stack[by][bx] is not None:
            return True
    return False


def lock_piece(stack: Stack, shape: Shape, x: int, y: int, marker: str = FILLED) -> Stack:
    """Return a copy of the stack with the shape written into it."""
    result = [list(row) for row in stack]
    rows, cols = len(stack), len(stack[0])
    for by, bx in shape_cells(shape, x, y):
        if 0 <= by < rows and 0 <= bx < cols:
            result[by][bx] = marker
    return result


def clear_full_rows(stack: Stack) -> tuple[Stack, int]:
    """Drop completed rows; returns the new stack and how many were cleared."""
    cols = len(stack[0])
    kept = [list(row) for row in stack if any(cell is None for cell in row)]
    cleared = len(stack) - len(kept)
    return [[None] * cols for _ in range(cleared)] + kept, cleared


def is_topped_out(stack: Stack) -> bool:
    return any(cell is not None for cell in stack[0])
