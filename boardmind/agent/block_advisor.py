"""Falling-block placement advisor.

Not adversarial: tries every rotation and column for the current piece,
drops it, and scores the resulting stack with four linear features. There is
no lookahead to the next piece. The advisor only recommends; callers decide
whether to apply the placement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from boardmind.game.blocks import (
    FILLED,
    Shape,
    Stack,
    Tetromino,
    clear_full_rows,
    collides,
    is_topped_out,
    lock_piece,
)

logger = logging.getLogger(__name__)

# Linear feature weights
HEIGHT_WEIGHT = -0.51
LINES_WEIGHT = 0.76
HOLES_WEIGHT = -0.36
BUMPINESS_WEIGHT = -0.18


class StackFeatures(NamedTuple):
    aggregate_height: int
    complete_lines: int
    holes: int
    bumpiness: int


def column_heights(stack: Stack) -> list[int]:
    rows, cols = len(stack), len(stack[0])
    heights = [0] * cols
    for c in range(cols):
        for r in range(rows):
            if stack[r][c] is not None:
                heights[c] = rows - r
                break
    return heights


def stack_features(stack: Stack) -> StackFeatures:
    heights = column_heights(stack)
    complete = sum(1 for row in stack if all(cell is not None for cell in row))

    # Empty cells with a filled cell somewhere above them
    holes = 0
    for c in range(len(stack[0])):
        covered = False
        for row in stack:
            if row[c] is not None:
                covered = True
            elif covered:
                holes += 1

    bumpiness = sum(abs(a - b) for a, b in zip(heights, heights[1:]))
    return StackFeatures(sum(heights), complete, holes, bumpiness)


def evaluate(stack: Stack) -> float:
    f = stack_features(stack)
    return (
        f.aggregate_height * HEIGHT_WEIGHT
        + f.complete_lines * LINES_WEIGHT
        + f.holes * HOLES_WEIGHT
        + f.bumpiness * BUMPINESS_WEIGHT
    )


def landing_row(stack: Stack, shape: Shape, x: int) -> Optional[int]:
    """Row where `shape` comes to rest when dropped in column offset `x`.

    The piece spawns just above the well. Returns None if it cannot spawn
    there (off the walls). A negative result means the piece rests partly
    above the top row; locking it tops the stack out.
    """
    y = -len(shape)
    if collides(stack, shape, x, y):
        return None
    while not collides(stack, shape, x, y + 1):
        y += 1
    return y


@dataclass(frozen=True)
class Placement:
    x: int
    rotation: int
    y: int  # landing row of the shape's top edge
    shape: tuple[tuple[int, ...], ...]
    score: float


class BlockAdvisor:
    """Greedy single-ply placement search."""

    @property
    def name(self) -> str:
        return self.__class__.__name__

    def detect_terminal(self, stack: Stack) -> bool:
        return is_topped_out(stack)

    def evaluate(self, stack: Stack) -> float:
        return evaluate(stack)

    def generate_candidates(self, stack: Stack, piece: Tetromino) -> list[Placement]:
        """Every reachable resting position, rotation-major then left to right."""
        placements = []
        for rotation, shape in enumerate(piece.rotations()):
            for x in range(len(stack[0])):
                y = landing_row(stack, shape, x)
                if y is None:
                    continue
                simulated = lock_piece(stack, shape, x, y)
                placements.append(
                    Placement(
                        x=x,
                        rotation=rotation,
                        y=y,
                        shape=tuple(tuple(row) for row in shape),
                        score=evaluate(simulated),
                    )
                )
        return placements

    def choose_move(self, stack: Stack, piece: Tetromino) -> Optional[Placement]:
        """Best placement for `piece`; the first one found wins ties."""
        best: Optional[Placement] = None
        for placement in self.generate_candidates(stack, piece):
            if best is None or placement.score > best.score:
                best = placement
        if best is not None:
            logger.debug(
                "%s: rotation %d at x=%d, y=%d (score %.2f)",
                piece.kind, best.rotation, best.x, best.y, best.score,
            )
        return best

    def apply(self, stack: Stack, placement: Placement, marker: str = FILLED) -> tuple[Stack, int]:
        """Lock the recommended placement and clear rows; returns (stack, rows cleared)."""
        shape = [list(row) for row in placement.shape]
        return clear_full_rows(lock_piece(stack, shape, placement.x, placement.y, marker))
