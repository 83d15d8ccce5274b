"""Tests for FEN placement parsing and serialisation."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.notation import (
    STARTING_PLACEMENT,
    board_from_fen,
    board_to_fen,
    color_from_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.types import A1, D5, E1, E4, H8, Square


class TestBoardFromFen:
    def test_starting_placement(self) -> None:
        assert board_from_fen(STARTING_PLACEMENT) == Board.initial()

    def test_full_fen_accepted(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
        assert board_from_fen(fen) == Board.initial()

    def test_first_rank_in_fen_is_row_zero(self) -> None:
        board = board_from_fen("7r/8/8/8/8/8/8/R7")
        assert board[H8] == Piece(Color.BLACK, PieceType.ROOK)
        assert board[A1] == Piece(Color.WHITE, PieceType.ROOK)

    def test_has_moved_inferred(self) -> None:
        rook = board_from_fen("4k3/8/8/8/8/8/8/4K1R1")[Square(7, 6)]
        assert rook is not None and rook.has_moved
        board = board_from_fen("4k3/8/8/3p4/4P3/8/8/4K3")
        assert board[E1] is not None and not board[E1].has_moved
        assert board[E4] is not None and board[E4].has_moved
        assert board[D5] is not None and board[D5].has_moved

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8",
            "9/8/8/8/8/8/8/8",
            "ppppppppp/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "x7/8/8/8/8/8/8/8",
        ],
    )
    def test_invalid_placement(self, fen: str) -> None:
        with pytest.raises(ValueError):
            board_from_fen(fen)


class TestBoardToFen:
    def test_round_trip(self) -> None:
        fen = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R"
        assert board_to_fen(board_from_fen(fen)) == fen

    def test_empty_board(self) -> None:
        assert board_to_fen(Board()) == "8/8/8/8/8/8/8/8"


class TestColorFromFen:
    def test_side_field(self) -> None:
        assert color_from_fen("8/8/8/8/8/8/8/8 b - - 0 1") == Color.BLACK
        assert color_from_fen("8/8/8/8/8/8/8/8 w - - 0 1") == Color.WHITE

    def test_missing_field_defaults_to_white(self) -> None:
        assert color_from_fen(STARTING_PLACEMENT) == Color.WHITE

    def test_invalid_field(self) -> None:
        with pytest.raises(ValueError, match="side-to-move"):
            color_from_fen("8/8/8/8/8/8/8/8 x - - 0 1")
