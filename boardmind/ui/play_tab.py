"""Play tab: human vs engine for the three board games."""

from __future__ import annotations

import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from boardmind.agent.base import Engine
from boardmind.agent.registry import GameKind, create_engine
from boardmind.game.gomoku import GomokuRules
from boardmind.game.hex import HexRules
from boardmind.game.state import GameState, Rules
from boardmind.game.tictactoe import TicTacToeRules
from boardmind.game.types import Player
from boardmind.ui.board_component import render_board_html

RULES: dict[GameKind, type[Rules]] = {
    GameKind.HEX: HexRules,
    GameKind.GOMOKU: GomokuRules,
    GameKind.TICTACTOE: TicTacToeRules,
}

COORD_HINTS: dict[GameKind, str] = {
    GameKind.HEX: "F6",
    GameKind.GOMOKU: "H8",
    GameKind.TICTACTOE: "b2",
}


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    kind: GameKind = GameKind.GOMOKU
    game: Optional[GameState] = None
    engine: Optional[Engine] = None
    human_player: Player = Player.BLACK
    trace: list[str] = field(default_factory=list)
    _turn_start: float = field(default_factory=_time.time)

    def __post_init__(self) -> None:
        if self.game is None:
            self.game = GameState(RULES[self.kind]())
        if self.engine is None:
            self.engine = create_engine(self.kind)

    @property
    def ai_player(self) -> Player:
        return self.human_player.other

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = GameState(RULES[self.kind]())
        self.trace = []
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def game_over_banner(self) -> str:
        """Short text for the result banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is not None:
            if g.winner == self.human_player:
                return "You win!"
            return "AI wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None:
                who = "You win!" if g.winner == self.human_player else "AI wins!"
                return f"Game over: {who} ({g.winner})"
            return "Game over: Draw!"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"AI is thinking... ({g.current_player})"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(i + 1), str(move.player), self.game.rules.format_cell(move.cell), t])
        return rows

    @property
    def trace_text(self) -> str:
        return "\n".join(self.trace)

    def play_engine_move(self) -> None:
        """Let the engine move if it is its turn."""
        g = self.game
        if g.is_over or g.current_player != self.ai_player:
            return
        t0 = _time.time()
        result = self.engine.choose_move(g.board, g.history, self.ai_player)
        self.trace = result.trace
        if result.move is None:
            return
        g.apply_move(result.move, elapsed=_time.time() - t0)
        self.mark_turn_start()


def _outputs(session: GameSession, status: Optional[str] = None):
    return (
        render_board_html(session.game, game_over_message=session.game_over_banner),
        status if status is not None else session.status_text,
        session.move_history_table,
        session.trace_text,
        session,
    )


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the engine respond."""
    game = session.game
    if game.is_over:
        return _outputs(session) + ("",)

    if game.current_player != session.human_player:
        return _outputs(session, "Wait, it's the AI's turn.") + ("",)

    cell = game.rules.parse_cell(coord_text)
    if cell is None:
        hint = COORD_HINTS[session.kind]
        return _outputs(session, f"Invalid coordinate: '{coord_text}'. Use format like {hint}.") + ("",)

    if not game.board.is_empty(cell):
        return _outputs(session, f"{game.rules.format_cell(cell)} is already occupied.") + ("",)

    game.apply_move(cell, elapsed=session.elapsed_since_turn_start())
    session.play_engine_move()
    return _outputs(session) + ("",)


def _new_game_with_color(color_choice: str, session: GameSession):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.BLACK, Player.WHITE])
    elif color_choice == "White":
        human = Player.WHITE
    else:
        human = Player.BLACK

    session.reset(human_player=human)
    # Engine moves first when the human takes White
    session.play_engine_move()
    if human is Player.BLACK:
        session.mark_turn_start()

    assigned = "Black" if human is Player.BLACK else "White"
    return _outputs(session) + (f"You are {assigned}.",)


def _undo_move(session: GameSession):
    """Undo the last move pair (AI + human)."""
    game = session.game
    if not game.moves:
        return _outputs(session, "Nothing to undo.")

    if game.moves[-1].player != session.human_player:
        game.undo_move()
    if game.moves:
        game.undo_move()
    session.trace = []
    # Undoing the engine's opening move hands the turn back to the engine
    session.play_engine_move()
    session.mark_turn_start()
    return _outputs(session)


def _resign(session: GameSession):
    """The human gives up; the engine is recorded as the winner."""
    if session.game.is_over:
        return _outputs(session)
    session.game.resign(session.human_player)
    return _outputs(session)


def build_play_tab(kind: GameKind) -> None:
    """Construct a Play tab for `kind` inside a gr.Blocks context."""

    session_state = gr.State(GameSession(kind=kind))

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_html(GameState(RULES[kind]())),
                label="Board",
            )
            trace_box = gr.Textbox(label="Engine reasoning", interactive=False, lines=8)
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Black.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Black", "White"],
                value="Black",
                label="Play as",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label=f"Coordinate (e.g. {COORD_HINTS[kind]})",
                placeholder=COORD_HINTS[kind],
                lines=1,
            )
            coord_submit = gr.Button("Submit Move")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
                column_count=4,
            )

    board_outputs = [board_html, status_text, move_table, trace_box, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, session_state],
        outputs=board_outputs + [color_info],
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )

    resign_btn.click(
        fn=_resign,
        inputs=[session_state],
        outputs=board_outputs,
    )
