"""Connection-game engine: shortest-path evaluation and alpha-beta minimax.

Each side's distance to victory is the number of empty cells it still has to
fill to join its two edges (Dijkstra over own = 0, empty = 1, opponent =
blocked). The evaluation rewards a short own path, penalises a short enemy
path, and adds a small bonus for central stones.
"""

from __future__ import annotations

import heapq
import logging
from typing import Optional, Sequence

from boardmind.agent.base import Engine, SearchResult
from boardmind.game.board import Board
from boardmind.game.hex import BOARD_SIZE, HexRules, center, is_end_edge, neighbors, start_edge
from boardmind.game.types import Hex, Player

logger = logging.getLogger(__name__)

# Path cost sentinel for "no path"; compare with >=
INF = 999_999
WIN_SCORE = 1_000_000
# Scores within this margin of WIN_SCORE are treated as decided
WIN_MARGIN = 1_000
SHUT_OUT_MARGIN = 100

DISTANCE_EXPONENT = 1.4
DISTANCE_SCALE = 1000
SCORE_SCALE = 100
# How much the opponent's progress weighs against ours. WHITE moves second
# and has to defend harder.
DEFENSE_FACTOR: dict[Player, float] = {Player.WHITE: 1.8, Player.BLACK: 1.1}
CENTRALITY_BASE = 15

BEAM_WIDTH = 25
DEFAULT_DEPTH = 2


# ---------------------------------------------------------------------------
# Shortest path
# ---------------------------------------------------------------------------

def _step_cost(occupant: Optional[Player], player: Player) -> int:
    if occupant is player:
        return 0
    if occupant is None:
        return 1
    return INF


def shortest_path(board: Board, player: Player) -> int:
    """Minimum number of empty cells `player` must fill to connect its edges.

    Returns 0 if already connected and INF if the opponent has cut every path.
    """
    size = board.size
    dist: dict[Hex, int] = {}
    heap: list[tuple[int, Hex]] = []

    def relax(cell: Hex, d: int) -> None:
        if d < dist.get(cell, INF):
            dist[cell] = d
            heapq.heappush(heap, (d, cell))

    for cell in start_edge(player, size):
        cost = _step_cost(board.get(cell), player)
        if cost < INF:
            relax(cell, cost)

    while heap:
        d, cell = heapq.heappop(heap)
        if d > dist.get(cell, INF):
            continue
        # Costs are non-negative, so the first end-edge cell popped is optimal
        if is_end_edge(cell, player, size):
            return d
        for n in neighbors(cell, size):
            cost = _step_cost(board.get(n), player)
            if cost < INF:
                relax(n, d + cost)

    return INF


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def center_distance(cell: Hex, size: int = BOARD_SIZE) -> float:
    """Manhattan distance from `cell` to the middle of the board."""
    mid = (size - 1) / 2
    return abs(cell.q - mid) + abs(cell.r - mid)


def centrality(board: Board, player: Player) -> float:
    return sum(
        CENTRALITY_BASE - center_distance(Hex(*cell), board.size)
        for cell in board.cells_of(player)
    )


def evaluate(board: Board, player: Player) -> float:
    """Score the position from `player`'s point of view.

    +/-WIN_SCORE for a completed connection, +/-(WIN_SCORE - 100) when one
    side has no path left.
    """
    my_dist = shortest_path(board, player)
    opp_dist = shortest_path(board, player.other)

    if my_dist == 0:
        return WIN_SCORE
    if opp_dist == 0:
        return -WIN_SCORE
    if my_dist >= INF:
        return -WIN_SCORE + SHUT_OUT_MARGIN
    if opp_dist >= INF:
        return WIN_SCORE - SHUT_OUT_MARGIN

    my_score = DISTANCE_SCALE / my_dist ** DISTANCE_EXPONENT
    opp_score = DISTANCE_SCALE / opp_dist ** DISTANCE_EXPONENT
    defense = DEFENSE_FACTOR[player]
    return (my_score - opp_score * defense) * SCORE_SCALE + centrality(board, player)


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------

def generate_candidates(board: Board, depth: int = 0) -> list[Hex]:
    """Empty cells touching any stone, nearest to the center first.

    On an empty board, returns the center. With two or more plies left to
    search the list is cut to the BEAM_WIDTH most central cells.
    """
    size = board.size
    if board.occupied_count == 0:
        return [center(size)]

    seen: set[Hex] = set()
    candidates: list[Hex] = []
    for cell, _ in board.items():
        for n in neighbors(Hex(*cell), size):
            if board.is_empty(n) and n not in seen:
                seen.add(n)
                candidates.append(n)

    candidates.sort(key=lambda h: (center_distance(h, size), h))
    if depth >= 2:
        candidates = candidates[:BEAM_WIDTH]
    return candidates


# ---------------------------------------------------------------------------
# Forced moves
# ---------------------------------------------------------------------------

def find_forced_move(board: Board, player: Player) -> Optional[tuple[Hex, str]]:
    """Return (cell, "win") if `player` connects at once, else (cell, "block")
    for a cell the opponent would connect with, else None.

    Scans every empty cell next to a stone; the search beam does not apply.
    """
    candidates = generate_candidates(board)
    for side, tag in ((player, "win"), (player.other, "block")):
        for cell in candidates:
            with board.placed(cell, side):
                connected = shortest_path(board, side) == 0
            if connected:
                return cell, tag
    return None


# ---------------------------------------------------------------------------
# Minimax with alpha-beta
# ---------------------------------------------------------------------------

def minimax(
    board: Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    player: Player,
) -> tuple[float, Optional[Hex]]:
    """Alpha-beta search; `player` is the maximizing side.

    Stones are placed on `board` and always removed before returning.
    Returns (score, best move); the move is None at leaves.
    """
    static = evaluate(board, player)
    if depth == 0 or abs(static) > WIN_SCORE - WIN_MARGIN:
        return static, None

    moves = generate_candidates(board, depth)
    if not moves:
        return static, None

    mover = player if maximizing else player.other
    best_score = -float("inf") if maximizing else float("inf")
    best_move: Optional[Hex] = None

    for move in moves:
        with board.placed(move, mover):
            score, _ = minimax(board, depth - 1, alpha, beta, not maximizing, player)

        if maximizing:
            if score > best_score:
                best_score, best_move = score, move
            alpha = max(alpha, score)
        else:
            if score < best_score:
                best_score, best_move = score, move
            beta = min(beta, score)
        if beta <= alpha:
            break

    return best_score, best_move


# ---------------------------------------------------------------------------
# HexEngine
# ---------------------------------------------------------------------------

class HexEngine(Engine):
    """Depth-limited alpha-beta over the shortest-path heuristic."""

    def __init__(self, depth: int = DEFAULT_DEPTH, size: int = BOARD_SIZE) -> None:
        self.depth = depth
        self.rules = HexRules(size)

    @property
    def name(self) -> str:
        return f"HexEngine(d={self.depth})"

    def generate_candidates(self, board: Board) -> list[Hex]:
        return generate_candidates(board, self.depth)

    def evaluate(self, board: Board, player: Player) -> float:
        return evaluate(board, player)

    def choose_move(
        self,
        board: Board,
        history: Sequence[tuple],
        engine_player: Player,
    ) -> SearchResult:
        mid = center(board.size)
        if board.occupied_count == 0:
            return SearchResult(move=mid)

        # Against a center opening, block toward the short diagonal
        if (
            board.occupied_count == 1
            and engine_player is Player.WHITE
            and board.get(mid) is Player.BLACK
        ):
            return SearchResult(move=Hex(mid.q + 1, mid.r - 1))

        scratch = board.copy()
        forced = find_forced_move(scratch, engine_player)
        if forced is not None:
            move, tag = forced
            with scratch.placed(move, engine_player):
                score = evaluate(scratch, engine_player)
            logger.debug("%s forced %s at %s", engine_player, tag, move)
            return SearchResult(move=move, score=score)

        score, move = minimax(
            scratch, self.depth, -float("inf"), float("inf"), True, engine_player
        )
        if move is None:
            fallback = generate_candidates(board)
            move = fallback[0] if fallback else None

        logger.debug("%s plays %s (score %.1f)", engine_player, move, score)
        return SearchResult(move=move, score=score)
