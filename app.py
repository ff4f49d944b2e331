"""boardmind: Gradio web app entry point."""

import logging

import gradio as gr

from boardmind.agent.registry import GameKind
from boardmind.ui.blocks_tab import build_blocks_tab
from boardmind.ui.play_tab import build_play_tab

logging.basicConfig(level=logging.INFO)

with gr.Blocks(title="boardmind") as demo:
    gr.Markdown("# boardmind")
    gr.Markdown("Search-based opponents for Hex, Gomoku, Tic-tac-toe and a falling-block advisor.")

    with gr.Tab("Gomoku"):
        build_play_tab(GameKind.GOMOKU)

    with gr.Tab("Hex"):
        build_play_tab(GameKind.HEX)

    with gr.Tab("Tic-tac-toe"):
        build_play_tab(GameKind.TICTACTOE)

    with gr.Tab("Blocks"):
        build_blocks_tab()

if __name__ == "__main__":
    demo.launch(theme=gr.themes.Soft())
