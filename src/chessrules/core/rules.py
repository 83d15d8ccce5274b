"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameStatus
from chessrules.core.move import LastMove
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    Every query takes the board and the color explicitly. ``last_move`` only
    matters where en passant can be the sole escape.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(
        board: Board, color: Color, last_move: LastMove | None = None
    ) -> bool:
        gen = MoveGenerator(board, last_move)
        if not gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(
        board: Board, color: Color, last_move: LastMove | None = None
    ) -> bool:
        gen = MoveGenerator(board, last_move)
        if gen.is_in_check(color):
            return False
        return not gen.has_legal_move(color)

    @staticmethod
    def has_legal_moves(
        board: Board, color: Color, last_move: LastMove | None = None
    ) -> bool:
        return MoveGenerator(board, last_move).has_legal_move(color)

    @staticmethod
    def all_legal_moves(
        board: Board, color: Color, last_move: LastMove | None = None
    ) -> dict[Square, frozenset[Square]]:
        return MoveGenerator(board, last_move).generate_legal_moves(color)

    @staticmethod
    def threatened_pieces(board: Board, color: Color) -> frozenset[Square]:
        """Squares of *color*'s pieces currently attacked by the opponent."""
        gen = MoveGenerator(board)
        opponent = color.opposite
        return frozenset(
            sq
            for sq, _piece in board.pieces(color)
            if gen.is_square_attacked(sq, opponent)
        )

    @staticmethod
    def status(
        board: Board, color: Color, last_move: LastMove | None = None
    ) -> GameStatus:
        """Classify the position for the side *color* about to move."""
        gen = MoveGenerator(board, last_move)
        in_check = gen.is_in_check(color)
        can_move = gen.has_legal_move(color)

        if not can_move:
            return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
        if in_check:
            return GameStatus.CHECK
        return GameStatus.IN_PROGRESS
