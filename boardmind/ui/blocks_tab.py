"""Blocks tab: paste a stack, pick a piece, get a placement hint."""

from __future__ import annotations

import gradio as gr

from boardmind.agent.block_advisor import BlockAdvisor
from boardmind.game.blocks import TETROMINOS, empty_stack, parse_stack, render_stack

ADVISOR = BlockAdvisor()


def _suggest_placement(stack_text: str, piece_kind: str) -> tuple[str, str]:
    """Return (summary, stack after applying the hint)."""
    try:
        stack = parse_stack(stack_text)
    except ValueError as exc:
        return f"Invalid stack: {exc}", stack_text

    piece = TETROMINOS.get(piece_kind)
    if piece is None:
        return f"Unknown piece: '{piece_kind}'", stack_text

    if ADVISOR.detect_terminal(stack):
        return "Stack has reached the top: game over.", stack_text

    placement = ADVISOR.choose_move(stack, piece)
    if placement is None:
        return f"No room for piece {piece.kind}.", stack_text

    after, cleared = ADVISOR.apply(stack, placement)
    summary = (
        f"Piece {piece.kind}: rotate {placement.rotation}x clockwise, "
        f"drop at column {placement.x} (lands on row {placement.y}), "
        f"score {placement.score:.2f}, clears {cleared} row(s)"
    )
    return summary, render_stack(after)


def build_blocks_tab() -> None:
    """Construct the Blocks hint tab inside a gr.Blocks context."""
    with gr.Row():
        with gr.Column(scale=2):
            stack_input = gr.Textbox(
                value=render_stack(empty_stack()),
                label="Stack ('.' empty, '#' filled, top row first)",
                lines=20,
            )
        with gr.Column(scale=1):
            piece_choice = gr.Dropdown(
                choices=list(TETROMINOS.keys()),
                value="T",
                label="Current piece",
            )
            suggest_btn = gr.Button("Suggest placement", variant="primary")
            summary_box = gr.Textbox(label="Hint", interactive=False, lines=3)
            result_box = gr.Textbox(label="Stack after hint", interactive=False, lines=20)

    suggest_btn.click(
        fn=_suggest_placement,
        inputs=[stack_input, piece_choice],
        outputs=[summary_box, result_box],
    )
