"""Five-in-a-row engine: tactical forcer, line-pattern evaluation, alpha-beta.

The board is flattened into a list of 225 codes seen from the engine's side
(0 empty, 1 own, 2 opponent) so the search can scan and mutate it cheaply.
Every call also produces a human-readable reasoning trace.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from boardmind.agent.base import Engine, SearchResult
from boardmind.agent.openings import classify_opening
from boardmind.game.board import Board
from boardmind.game.gomoku import (
    BOARD_SIZE,
    CENTER,
    DIRECTIONS,
    WIN_LENGTH,
    GomokuRules,
    format_point,
)
from boardmind.game.types import Player, Point

logger = logging.getLogger(__name__)

EMPTY, OWN, OPPONENT = 0, 1, 2
BOARD_AREA = BOARD_SIZE * BOARD_SIZE

# ---------------------------------------------------------------------------
# Pattern table: each line scores its strongest matching category only
# ---------------------------------------------------------------------------

WIN = 100_000_000
BLOCK_WIN = 50_000_000
LIVE_4 = 1_000_000   # .XXXX.
DEAD_4 = 10_000      # .XXXXO and split fours
LIVE_3 = 10_000      # .XXX.
LIVE_2 = 500

# Line alphabet: 1 = stone of the side being scored, 0 = empty,
# 2 = opponent stone or the board edge
PATTERNS: list[tuple[str, int, tuple[str, ...]]] = [
    ("five", WIN, ("11111",)),
    ("open four", LIVE_4, ("011110",)),
    ("closed four", DEAD_4, ("011112", "211110", "10111", "11011", "11101")),
    ("open three", LIVE_3, ("01110", "010110", "011010")),
    ("open two", LIVE_2, ("001100", "01010", "010010")),
]

# Opponent threats count for more than our own
OPPONENT_WEIGHT = 1.5

STRATEGY_LABELS = [
    (LIVE_4, "open-four attack"),
    (LIVE_3, "open-three extension"),
    (LIVE_2, "open-two development"),
]

NEIGHBOR_RADIUS = 2
BRANCH_WIDTH = 12       # candidates searched at interior nodes
LEAF_BRANCH_WIDTH = 8   # candidates searched one ply above the leaves
DEFAULT_DEPTH = 3


def _index(row: int, col: int) -> int:
    return row * BOARD_SIZE + col


def _to_point(idx: int) -> Point:
    return Point(*divmod(idx, BOARD_SIZE))


def _build_lines() -> list[list[int]]:
    """Index lists for every row, column and diagonal of length >= 5."""
    lines = [[_index(r, c) for c in range(BOARD_SIZE)] for r in range(BOARD_SIZE)]
    lines += [[_index(r, c) for r in range(BOARD_SIZE)] for c in range(BOARD_SIZE)]

    starts = [(0, c) for c in range(BOARD_SIZE)] + [(r, 0) for r in range(1, BOARD_SIZE)]
    anti_starts = [(0, c) for c in range(BOARD_SIZE)] + [
        (r, BOARD_SIZE - 1) for r in range(1, BOARD_SIZE)
    ]
    for (dr, dc), origins in (((1, 1), starts), ((1, -1), anti_starts)):
        for r, c in origins:
            line = []
            while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE:
                line.append(_index(r, c))
                r += dr
                c += dc
            if len(line) >= WIN_LENGTH:
                lines.append(line)
    return lines


LINES = _build_lines()


# ---------------------------------------------------------------------------
# Board conversion
# ---------------------------------------------------------------------------

def to_cells(board: Board, player: Player) -> list[int]:
    """Flatten `board` into codes relative to `player`."""
    cells = [EMPTY] * BOARD_AREA
    for cell, occupant in board.items():
        cells[_index(*cell)] = OWN if occupant is player else OPPONENT
    return cells


# ---------------------------------------------------------------------------
# Tactical forcer
# ---------------------------------------------------------------------------

def creates_five(cells: list[int], idx: int, code: int) -> bool:
    """Would a `code` stone at `idx` complete five (or more) in a row?"""
    row, col = divmod(idx, BOARD_SIZE)
    for dr, dc in DIRECTIONS:
        count = 1
        for sign in (1, -1):
            r, c = row + sign * dr, col + sign * dc
            while 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and cells[_index(r, c)] == code:
                count += 1
                r += sign * dr
                c += sign * dc
        if count >= WIN_LENGTH:
            return True
    return False


def has_neighbor(cells: list[int], idx: int, radius: int = NEIGHBOR_RADIUS) -> bool:
    row, col = divmod(idx, BOARD_SIZE)
    for dr in range(-radius, radius + 1):
        for dc in range(-radius, radius + 1):
            if dr == 0 and dc == 0:
                continue
            r, c = row + dr, col + dc
            if 0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE and cells[_index(r, c)] != EMPTY:
                return True
    return False


def find_forced_move(cells: list[int]) -> Optional[tuple[int, str]]:
    """Return (index, "win") for an own five, else (index, "block") for an
    opponent five that must be stopped, else None."""
    candidates = [
        i for i in range(BOARD_AREA) if cells[i] == EMPTY and has_neighbor(cells, i)
    ]
    for idx in candidates:
        if creates_five(cells, idx, OWN):
            return idx, "win"
    for idx in candidates:
        if creates_five(cells, idx, OPPONENT):
            return idx, "block"
    return None


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def line_score(line: str) -> int:
    """Weight of the strongest pattern found in an encoded line."""
    for _label, weight, shapes in PATTERNS:
        if any(shape in line for shape in shapes):
            return weight
    return 0


def evaluate_for(cells: list[int], code: int) -> int:
    """Sum of line scores for the side whose stones are `code`."""
    symbols = {EMPTY: "0", code: "1", OWN + OPPONENT - code: "2"}
    total = 0
    for line in LINES:
        # Off-board on both ends blocks like an enemy stone
        encoded = "2" + "".join(symbols[cells[i]] for i in line) + "2"
        total += line_score(encoded)
    return total


def evaluate_cells(cells: list[int]) -> float:
    return evaluate_for(cells, OWN) - OPPONENT_WEIGHT * evaluate_for(cells, OPPONENT)


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------

def _center_distance(idx: int) -> int:
    row, col = divmod(idx, BOARD_SIZE)
    return abs(row - CENTER.row) + abs(col - CENTER.col)


def candidate_indices(cells: list[int], limit: Optional[int] = None) -> list[int]:
    """Empty cells within NEIGHBOR_RADIUS of a stone, most central first."""
    seen = [False] * BOARD_AREA
    candidates = []
    for i in range(BOARD_AREA):
        if cells[i] == EMPTY:
            continue
        row, col = divmod(i, BOARD_SIZE)
        for dr in range(-NEIGHBOR_RADIUS, NEIGHBOR_RADIUS + 1):
            for dc in range(-NEIGHBOR_RADIUS, NEIGHBOR_RADIUS + 1):
                r, c = row + dr, col + dc
                if not (0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE):
                    continue
                n = _index(r, c)
                if cells[n] == EMPTY and not seen[n]:
                    seen[n] = True
                    candidates.append(n)

    candidates.sort(key=lambda n: (_center_distance(n), n))
    if limit is not None:
        candidates = candidates[:limit]
    return candidates


# ---------------------------------------------------------------------------
# Minimax with alpha-beta
# ---------------------------------------------------------------------------

@dataclass
class SearchStats:
    nodes: int = 0


def minimax(
    cells: list[int],
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    stats: SearchStats,
) -> tuple[float, Optional[int]]:
    """Alpha-beta over the flat board; OWN maximizes.

    Returns (score, best index). Placements are undone before returning.
    """
    stats.nodes += 1
    if depth == 0:
        return evaluate_cells(cells), None

    width = BRANCH_WIDTH if depth > 1 else LEAF_BRANCH_WIDTH
    moves = candidate_indices(cells, width)
    if not moves:
        return evaluate_cells(cells), None

    code = OWN if maximizing else OPPONENT
    best_score = -float("inf") if maximizing else float("inf")
    best_idx: Optional[int] = None

    for idx in moves:
        if creates_five(cells, idx, code):
            return (WIN if maximizing else -WIN), idx

        cells[idx] = code
        try:
            score, _ = minimax(cells, depth - 1, alpha, beta, not maximizing, stats)
        finally:
            cells[idx] = EMPTY

        if maximizing:
            if score > best_score:
                best_score, best_idx = score, idx
            alpha = max(alpha, score)
        else:
            if score < best_score:
                best_score, best_idx = score, idx
            beta = min(beta, score)
        if beta <= alpha:
            break

    return best_score, best_idx


def strategy_label(score: float) -> str:
    for threshold, label in STRATEGY_LABELS:
        if score >= threshold:
            return label
    return "balanced"


# ---------------------------------------------------------------------------
# GomokuEngine
# ---------------------------------------------------------------------------

class GomokuEngine(Engine):
    """Forced-move scan, then alpha-beta; explains itself in a trace."""

    def __init__(self, depth: int = DEFAULT_DEPTH) -> None:
        self.depth = depth
        self.rules = GomokuRules()

    @property
    def name(self) -> str:
        return f"GomokuEngine(d={self.depth})"

    def generate_candidates(self, board: Board) -> list[Point]:
        cells = to_cells(board, Player.BLACK)
        if not any(cells):
            return [CENTER]
        return [_to_point(i) for i in candidate_indices(cells)]

    def evaluate(self, board: Board, player: Player) -> float:
        return evaluate_cells(to_cells(board, player))

    def choose_move(
        self,
        board: Board,
        history: Sequence[tuple],
        engine_player: Player,
    ) -> SearchResult:
        trace: list[str] = []
        cells = to_cells(board, engine_player)
        trace.append(f"[init] Board flattened; {board.occupied_count} stones in play")

        forced = find_forced_move(cells)
        if forced is not None:
            idx, tag = forced
            move = _to_point(idx)
            if tag == "win":
                trace.append("[tactics] Winning move available: five in a row")
                trace.append(f"[decision] {format_point(move)} (win) - completes five")
                score = WIN
            else:
                trace.append("[tactics] Warning: opponent threatens five")
                trace.append(f"[decision] {format_point(move)} (block) - forced defence")
                score = BLOCK_WIN
            logger.debug("%s forced %s at %s", engine_player, tag, format_point(move))
            return SearchResult(move=move, score=score, trace=trace)
        trace.append("[tactics] Safe: no immediate win or loss on the board")

        if board.occupied_count == 0:
            trace.append("[opening] Empty board")
            trace.append(f"[decision] {format_point(CENTER)} (opening book) - center point")
            return SearchResult(move=CENTER, score=0.0, trace=trace)

        match = classify_opening(history)
        if match is not None:
            opening = match.opening
            trace.append(f"[opening] {opening.name} ({match.kind}, {opening.status})")

        trace.append(f"[search] Minimax with alpha-beta pruning, depth {self.depth}")
        candidates = candidate_indices(cells)
        width = BRANCH_WIDTH if self.depth > 1 else LEAF_BRANCH_WIDTH
        trace.append(
            f"[candidates] {len(candidates)} cells near stones; "
            f"searching the {min(width, len(candidates))} most central"
        )

        stats = SearchStats()
        score, idx = minimax(cells, self.depth, -float("inf"), float("inf"), True, stats)
        if idx is None and candidates:
            idx = candidates[0]
        trace.append(f"[stats] {stats.nodes} nodes searched")

        if idx is None:
            trace.append("[decision] No legal move")
            return SearchResult(move=None, score=score, trace=trace)

        move = _to_point(idx)
        trace.append(
            f"[decision] {format_point(move)} - score {score:.0f}, "
            f"strategy: {strategy_label(score)}"
        )
        logger.debug("%s plays %s after %d nodes", engine_player, format_point(move), stats.nodes)
        return SearchResult(move=move, score=score, trace=trace)
