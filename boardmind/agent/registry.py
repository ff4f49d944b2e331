from __future__ import annotations

import enum
from typing import Union

from boardmind.agent.base import Engine
from boardmind.agent.block_advisor import BlockAdvisor
from boardmind.agent.gomoku_agent import GomokuEngine
from boardmind.agent.hex_agent import HexEngine
from boardmind.agent.tictactoe_agent import TicTacToeEngine


class GameKind(enum.Enum):
    HEX = "hex"
    GOMOKU = "gomoku"
    TICTACTOE = "tictactoe"
    BLOCKS = "blocks"

    def __str__(self) -> str:
        return self.value


def create_engine(kind: GameKind) -> Union[Engine, BlockAdvisor]:
    """Build the engine for a game; chosen once when the game is set up."""
    if kind is GameKind.HEX:
        return HexEngine()
    if kind is GameKind.GOMOKU:
        return GomokuEngine()
    if kind is GameKind.TICTACTOE:
        return TicTacToeEngine()
    return BlockAdvisor()
