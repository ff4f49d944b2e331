"""Classical five-in-a-row openings, matched under the 8 board symmetries.

Black opens on the center, White answers next to it either orthogonally
("direct") or diagonally ("indirect"), and Black's second stone names the
opening. Offsets are (row, col) relative to the first stone, normalised so
that White's stone sits at (0, 1) for direct openings and (1, 1) for
indirect ones.
"""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Sequence

from boardmind.game.gomoku import CENTER
from boardmind.game.types import Point

BLACK_FAVOURED = "black favoured"
WHITE_FAVOURED = "white favoured"
BALANCED = "balanced"

DIRECT = "direct"
INDIRECT = "indirect"


class Opening(NamedTuple):
    name: str
    status: str
    description: str = ""


OPENINGS: dict[tuple[str, int, int], Opening] = {
    (INDIRECT, 0, 1): Opening("Han Xing", BLACK_FAVOURED, "Few variations; easy for Black to steer."),
    (INDIRECT, 0, 2): Opening("Xi Yue", BLACK_FAVOURED),
    (INDIRECT, -1, 1): Opening("Shu Xing", BALANCED),
    (INDIRECT, -1, 2): Opening("Hua Yue", BLACK_FAVOURED, "The strongest opening for Black."),
    (INDIRECT, -2, 2): Opening("Can Yue", BLACK_FAVOURED),
    (INDIRECT, -2, 1): Opening("Yu Yue", BLACK_FAVOURED),
    (INDIRECT, -2, 0): Opening("Jin Xing", BLACK_FAVOURED),
    (INDIRECT, -2, -1): Opening("Song Yue", BLACK_FAVOURED),
    (INDIRECT, -1, -1): Opening("Qiu Yue", BALANCED),
    (INDIRECT, -1, -2): Opening("Xin Yue", BLACK_FAVOURED),
    (INDIRECT, 0, -2): Opening("Rui Xing", BALANCED),
    (INDIRECT, 1, -2): Opening("Shan Yue", BLACK_FAVOURED),
    (INDIRECT, 1, -1): Opening("You Xing", WHITE_FAVOURED),
    (DIRECT, 0, 1): Opening("Chang Xing", WHITE_FAVOURED),
    (DIRECT, 0, 2): Opening("Xia Yue", BLACK_FAVOURED),
    (DIRECT, 1, 2): Opening("Heng Xing", BLACK_FAVOURED),
    (DIRECT, 1, 1): Opening("Shui Yue", BLACK_FAVOURED),
    (DIRECT, 2, 1): Opening("Liu Xing", WHITE_FAVOURED),
    (DIRECT, 2, 0): Opening("Yun Yue", BLACK_FAVOURED),
    (DIRECT, 2, -1): Opening("Pu Yue", BLACK_FAVOURED, "With Hua Yue, one of the two great winning openings."),
    (DIRECT, 1, -1): Opening("Lan Yue", BLACK_FAVOURED),
    (DIRECT, 1, -2): Opening("Yin Yue", BLACK_FAVOURED),
    (DIRECT, 0, -2): Opening("Ming Xing", BLACK_FAVOURED),
    (DIRECT, -1, -2): Opening("Xie Yue", BALANCED),
    (DIRECT, -1, -1): Opening("Ming Yue", BLACK_FAVOURED),
    (DIRECT, -1, 1): Opening("Hui Xing", WHITE_FAVOURED),
}

# White's second stone after normalisation
CANONICAL_REPLY: dict[tuple[int, int], str] = {(0, 1): DIRECT, (1, 1): INDIRECT}

Transform = Callable[[int, int], tuple[int, int]]

# The dihedral group of the square: identity, reflections, rotations
SYMMETRIES: list[Transform] = [
    lambda x, y: (x, y),
    lambda x, y: (-x, y),
    lambda x, y: (x, -y),
    lambda x, y: (-x, -y),
    lambda x, y: (y, x),
    lambda x, y: (-y, x),
    lambda x, y: (y, -x),
    lambda x, y: (-y, -x),
]


class OpeningMatch(NamedTuple):
    opening: Opening
    kind: str
    symmetry: int  # index into SYMMETRIES that normalised the game


def classify_opening(history: Sequence[tuple]) -> Optional[OpeningMatch]:
    """Name the opening formed by the first three moves, if it is a known one.

    Only applies when the first stone was played on the center point.
    """
    if len(history) < 3:
        return None
    first, second, third = (Point(*m) for m in history[:3])
    if first != CENTER:
        return None

    dx2, dy2 = second.row - first.row, second.col - first.col
    dx3, dy3 = third.row - first.row, third.col - first.col

    for index, transform in enumerate(SYMMETRIES):
        kind = CANONICAL_REPLY.get(transform(dx2, dy2))
        if kind is None:
            continue
        tx3, ty3 = transform(dx3, dy3)
        opening = OPENINGS.get((kind, tx3, ty3))
        if opening is not None:
            return OpeningMatch(opening=opening, kind=kind, symmetry=index)
    return None
