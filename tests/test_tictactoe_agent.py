"""Tests for the tic-tac-toe engine."""

from boardmind.agent.tictactoe_agent import TicTacToeEngine, empty_cells, minimax
from boardmind.game.board import Board
from boardmind.game.tictactoe import CENTER, TicTacToeRules, parse_ttt_board, render_ttt_board
from boardmind.game.types import Player, Point

RULES = TicTacToeRules()


def engine_never_loses(board: Board, engine: TicTacToeEngine, engine_player: Player, to_move: Player) -> bool:
    """Play every opponent reply against the engine's choices to the end."""
    winner = RULES.winner(board)
    if winner is not None:
        return winner is engine_player
    if RULES.is_full(board):
        return True

    if to_move is engine_player:
        move = engine.choose_move(board, [], engine_player).move
        assert move is not None and board.is_empty(move)
        with board.placed(move, engine_player):
            return engine_never_loses(board, engine, engine_player, to_move.other)

    for move in empty_cells(board):
        with board.placed(move, to_move):
            if not engine_never_loses(board, engine, engine_player, to_move.other):
                return False
    return True


class TestRules:
    def test_row_win(self):
        assert RULES.winner(parse_ttt_board("XXX\nOO.\n...")) is Player.BLACK

    def test_diagonal_win(self):
        assert RULES.winner(parse_ttt_board("O.X\n.OX\nX.O")) is Player.WHITE

    def test_draw(self):
        b = parse_ttt_board("XOX\nXOO\nOXX")
        outcome = RULES.outcome(b)
        assert outcome.is_draw

    def test_notation(self):
        assert RULES.format_cell(Point(1, 1)) == "b2"
        assert RULES.parse_cell("c1") == Point(0, 2)
        assert RULES.parse_cell("d1") is None

    def test_render(self):
        text = "X..\n.O.\n..X"
        assert render_ttt_board(parse_ttt_board(text)) == text


class TestMinimax:
    def test_decided_win_scores_full_value(self):
        b = parse_ttt_board("XX.\nOO.\n...")
        with b.placed(Point(0, 2), Player.BLACK):
            assert minimax(b, 0, False, Player.BLACK) == 10

    def test_loss_is_negative(self):
        # X completes the top row on the next ply
        b = parse_ttt_board("XX.\nOO.\n...")
        assert minimax(b, 0, False, Player.WHITE) == -9

    def test_empty_board_is_draw(self):
        assert minimax(Board(3), 0, True, Player.BLACK) == 0


class TestTicTacToeEngine:
    def test_empty_board_takes_center(self):
        assert TicTacToeEngine().choose_move(Board(3), [], Player.BLACK).move == CENTER

    def test_reply_to_corner_is_center(self):
        b = parse_ttt_board("X..\n...\n...")
        assert TicTacToeEngine().choose_move(b, [], Player.WHITE).move == CENTER

    def test_reply_to_center_is_corner(self):
        b = parse_ttt_board("...\n.X.\n...")
        assert TicTacToeEngine().choose_move(b, [], Player.WHITE).move == Point(0, 0)

    def test_takes_immediate_win(self):
        b = parse_ttt_board("XX.\nOO.\n...")
        result = TicTacToeEngine().choose_move(b, [], Player.BLACK)
        assert result.move == Point(0, 2)
        assert result.score == 10

    def test_blocks_immediate_loss(self):
        b = parse_ttt_board("XX.\n.O.\n...")
        assert TicTacToeEngine().choose_move(b, [], Player.WHITE).move == Point(0, 2)

    def test_stops_fork(self):
        b = parse_ttt_board("X..\n.X.\n..O")
        engine = TicTacToeEngine()
        move = engine.choose_move(b, [], Player.WHITE).move
        assert move in (Point(0, 2), Point(2, 0))
        with b.placed(move, Player.WHITE):
            assert engine_never_loses(b, engine, Player.WHITE, Player.BLACK)

    def test_never_loses_after_center_reply(self):
        b = parse_ttt_board("X..\n.O.\n...")
        assert engine_never_loses(b, TicTacToeEngine(), Player.WHITE, Player.BLACK)

    def test_never_loses_full_game_as_o(self):
        assert engine_never_loses(Board(3), TicTacToeEngine(), Player.WHITE, Player.BLACK)

    def test_never_loses_full_game_as_x(self):
        assert engine_never_loses(Board(3), TicTacToeEngine(), Player.BLACK, Player.BLACK)

    def test_full_board_has_no_move(self):
        b = parse_ttt_board("XOX\nXOO\nOXX")
        assert TicTacToeEngine().choose_move(b, [], Player.BLACK).move is None

    def test_board_is_not_mutated(self):
        b = parse_ttt_board("X..\n.X.\n..O")
        before = b.snapshot()
        TicTacToeEngine().choose_move(b, [], Player.WHITE)
        assert b.snapshot() == before
