"""Monospace board renderer for the Gradio tabs."""

from __future__ import annotations

import html

from boardmind.game.board import EMPTY_SYMBOL, SYMBOLS
from boardmind.game.hex import HexRules
from boardmind.game.state import GameState
from boardmind.game.types import Hex, Point

# Banner colors
WIN_COLOR = "#4ADE80"
LOSS_COLOR = "#F87171"
DRAW_COLOR = "#FFFFFF"
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"


def _label(game_state: GameState, j: int) -> str:
    """Column label of text column j, taken from the rules' own formatting."""
    return game_state.rules.format_cell(_cell(game_state, 0, j))[0]


def _cell(game_state: GameState, i: int, j: int) -> tuple:
    if isinstance(game_state.rules, HexRules):
        return Hex(j, i)
    return Point(i, j)


def render_board_text(game_state: GameState, highlight_last: bool = True) -> str:
    """Render the board as text. The last move is shown in lower case.

    Hex rows are indented one step per row so the rhombus reads correctly;
    the column letters sit above the first row and below the last.
    """
    size = game_state.rules.size
    last = game_state.moves[-1].cell if game_state.moves else None
    is_hex = isinstance(game_state.rules, HexRules)

    header = "    " + " ".join(_label(game_state, j) for j in range(size))
    lines = [header]
    for i in range(size):
        row = []
        for j in range(size):
            cell = _cell(game_state, i, j)
            player = game_state.board.get(cell)
            if player is None:
                row.append(EMPTY_SYMBOL)
                continue
            symbol = SYMBOLS[player]
            if highlight_last and cell == last:
                symbol = symbol.lower()
            row.append(symbol)
        indent = " " * i if is_hex else ""
        lines.append(f"{indent}{i + 1:>3} " + " ".join(row))
    if is_hex:
        # Repeat the letters under the last, most indented row
        lines.append(" " * (size - 1) + header)
    return "\n".join(lines)


def render_board_html(game_state: GameState, game_over_message: str = "") -> str:
    """Wrap the text board in a <pre> block, with an optional result banner."""
    parts = [
        f'<pre class="boardmind-board" style="background:{BG_COLOR};'
        f'color:{LINE_COLOR};padding:12px;font-size:16px;line-height:1.3">'
        f"{html.escape(render_board_text(game_state))}</pre>"
    ]
    if game_over_message:
        if "You win" in game_over_message:
            color = WIN_COLOR
        elif "AI wins" in game_over_message:
            color = LOSS_COLOR
        else:
            color = DRAW_COLOR
        parts.append(
            f'<div class="boardmind-banner" style="color:{color};'
            f'font-weight:bold;font-size:20px">{html.escape(game_over_message)}</div>'
        )
    return "\n".join(parts)
