"""Tests for the connection-game engine."""

from boardmind.agent.hex_agent import (
    BEAM_WIDTH,
    INF,
    WIN_MARGIN,
    WIN_SCORE,
    HexEngine,
    centrality,
    center_distance,
    evaluate,
    find_forced_move,
    generate_candidates,
    shortest_path,
)
from boardmind.game.board import Board
from boardmind.game.hex import BOARD_SIZE, center
from boardmind.game.types import Hex, Player


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_board(black=(), white=()) -> Board:
    b = Board(BOARD_SIZE)
    for cell in black:
        b.place(Hex(*cell), Player.BLACK)
    for cell in white:
        b.place(Hex(*cell), Player.WHITE)
    return b


def midgame_board() -> Board:
    return make_board(
        black=[(5, 5), (4, 6), (6, 3), (3, 7)],
        white=[(5, 4), (6, 4), (4, 5), (2, 8)],
    )


# ---------------------------------------------------------------------------
# Shortest path
# ---------------------------------------------------------------------------

class TestShortestPath:
    def test_empty_board_needs_a_full_row(self):
        b = make_board()
        assert shortest_path(b, Player.BLACK) == BOARD_SIZE
        assert shortest_path(b, Player.WHITE) == BOARD_SIZE

    def test_own_stones_are_free(self):
        b = make_board(black=[(q, 5) for q in range(BOARD_SIZE) if q != 6])
        assert shortest_path(b, Player.BLACK) == 1

    def test_connected_is_zero(self):
        b = make_board(black=[(q, 2) for q in range(BOARD_SIZE)])
        assert shortest_path(b, Player.BLACK) == 0

    def test_wall_blocks_every_path(self):
        b = make_board(white=[(5, r) for r in range(BOARD_SIZE)])
        assert shortest_path(b, Player.BLACK) >= INF


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

class TestEvaluate:
    def test_own_connection_scores_win(self):
        b = make_board(black=[(q, 2) for q in range(BOARD_SIZE)])
        assert evaluate(b, Player.BLACK) >= WIN_SCORE

    def test_opponent_connection_scores_loss(self):
        b = make_board(white=[(3, r) for r in range(BOARD_SIZE)])
        assert evaluate(b, Player.BLACK) <= -WIN_SCORE

    def test_white_defends_harder_on_equal_distance(self):
        b = make_board()
        assert evaluate(b, Player.WHITE) < evaluate(b, Player.BLACK) < 0

    def test_shorter_path_is_better(self):
        near = make_board(black=[(q, 5) for q in range(6)])
        far = make_board(black=[(q, 5) for q in range(2)])
        assert evaluate(near, Player.BLACK) > evaluate(far, Player.BLACK)

    def test_centrality(self):
        b = make_board(black=[(5, 5), (0, 0)])
        assert center_distance(Hex(5, 5)) == 0
        assert centrality(b, Player.BLACK) == 15 + (15 - 10)
        assert centrality(b, Player.WHITE) == 0


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------

class TestGenerateCandidates:
    def test_empty_board_returns_center(self):
        assert generate_candidates(make_board()) == [center()]

    def test_neighbors_of_center_stone(self):
        cands = generate_candidates(make_board(black=[(5, 5)]))
        assert len(cands) == 6
        assert [center_distance(h) for h in cands] == [1, 1, 1, 1, 2, 2]

    def test_candidates_are_empty_and_deduplicated(self):
        b = midgame_board()
        cands = generate_candidates(b)
        assert len(cands) == len(set(cands))
        assert all(b.is_empty(h) for h in cands)

    def test_sorted_by_distance_to_center(self):
        cands = generate_candidates(midgame_board())
        distances = [center_distance(h) for h in cands]
        assert distances == sorted(distances)

    def test_beam_limit_applies_with_two_plies_left(self):
        b = make_board(black=[(q, 1) for q in range(0, 11, 2)], white=[(q, 8) for q in range(0, 11, 2)])
        assert len(generate_candidates(b, depth=1)) > BEAM_WIDTH
        assert len(generate_candidates(b, depth=2)) == BEAM_WIDTH


# ---------------------------------------------------------------------------
# HexEngine
# ---------------------------------------------------------------------------

class TestHexEngine:
    def test_name(self):
        assert HexEngine(depth=2).name == "HexEngine(d=2)"

    def test_empty_board_plays_center(self):
        result = HexEngine().choose_move(make_board(), [], Player.BLACK)
        assert result.move == center()

    def test_white_answers_center_opening(self):
        b = make_board(black=[(5, 5)])
        result = HexEngine().choose_move(b, [Hex(5, 5)], Player.WHITE)
        assert result.move == Hex(6, 4)

    def test_completes_winning_chain(self):
        b = make_board(
            black=[(q, 5) for q in range(BOARD_SIZE) if q != 6],
            white=[(q, 9) for q in range(BOARD_SIZE - 1)],
        )
        result = HexEngine().choose_move(b, [], Player.BLACK)
        assert result.move == Hex(6, 5)
        assert result.score >= WIN_SCORE - WIN_MARGIN

    def test_returns_empty_on_board_cell(self):
        b = midgame_board()
        result = HexEngine().choose_move(b, [], Player.BLACK)
        assert result.move is not None
        assert b.is_on_grid(result.move)
        assert b.is_empty(result.move)

    def test_board_is_not_mutated(self):
        b = midgame_board()
        before = b.snapshot()
        HexEngine().choose_move(b, [], Player.WHITE)
        assert b.snapshot() == before

    def test_deterministic(self):
        b = midgame_board()
        engine = HexEngine()
        first = engine.choose_move(b, [], Player.BLACK)
        second = engine.choose_move(b, [], Player.BLACK)
        assert first == second

    def test_full_board_has_no_move(self):
        b = make_board(
            black=[(q, r) for q in range(BOARD_SIZE) for r in range(BOARD_SIZE) if (q + r) % 2 == 0],
            white=[(q, r) for q in range(BOARD_SIZE) for r in range(BOARD_SIZE) if (q + r) % 2 == 1],
        )
        result = HexEngine().choose_move(b, [], Player.BLACK)
        assert result.move is None

    def test_detect_terminal(self):
        engine = HexEngine()
        b = make_board(black=[(q, 0) for q in range(BOARD_SIZE)])
        outcome = engine.detect_terminal(b)
        assert outcome.is_over
        assert outcome.winner is Player.BLACK
        assert not engine.detect_terminal(make_board()).is_over


# ---------------------------------------------------------------------------
# Forced moves
# ---------------------------------------------------------------------------

def edge_win_board() -> Board:
    """Black is one stone from the left edge; the gap is far from the center."""
    return make_board(
        black=[(q, 5) for q in range(1, BOARD_SIZE)],
        white=[(4, 2), (6, 2), (4, 8), (6, 8), (3, 3), (7, 7), (2, 8), (8, 2), (10, 0), (0, 10)],
    )


def edge_block_board() -> Board:
    """White is one stone from the bottom edge at F11; E11 is already Black."""
    return make_board(
        black=[(4, 10), (0, 2), (1, 2), (2, 2), (8, 8), (9, 8), (10, 8), (0, 7), (9, 1), (10, 1)],
        white=[(5, r) for r in range(BOARD_SIZE - 1)],
    )


class TestForcedMoves:
    def test_winning_cell_is_outside_the_beam(self):
        b = edge_win_board()
        assert Hex(0, 5) not in generate_candidates(b, depth=2)
        assert find_forced_move(b, Player.BLACK) == (Hex(0, 5), "win")

    def test_block(self):
        assert find_forced_move(edge_block_board(), Player.BLACK) == (Hex(5, 10), "block")

    def test_quiet_position(self):
        assert find_forced_move(midgame_board(), Player.BLACK) is None

    def test_scan_leaves_board_untouched(self):
        b = edge_win_board()
        before = b.snapshot()
        find_forced_move(b, Player.WHITE)
        assert b.snapshot() == before

    def test_engine_plays_edge_win(self):
        result = HexEngine().choose_move(edge_win_board(), [], Player.BLACK)
        assert result.move == Hex(0, 5)
        assert result.score == WIN_SCORE

    def test_engine_blocks_edge_connection(self):
        result = HexEngine().choose_move(edge_block_board(), [], Player.BLACK)
        assert result.move == Hex(5, 10)
