"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys

import pytest

from chessrules.core.board import Board
from chessrules.core.notation import board_from_fen

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture
def initial_board() -> Board:
    return Board.initial()


@pytest.fixture
def castling_board() -> Board:
    """Both white rooks and the king on their home squares, nothing between."""
    return board_from_fen("4k3/8/8/8/8/8/8/R3K2R")
