"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, Color, MoveGenerator, Rules, apply_move, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    print(sorted(gen.legal_moves(parse_square("e2"))))
    result = apply_move(board, parse_square("e2"), parse_square("e4"))
    print(Rules.status(result.board, Color.BLACK, result.record.last_move))
"""

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_CHOICES,
    Color,
    GameStatus,
    MoveKind,
    PieceType,
)
from chessrules.core.errors import (
    ChessRulesError,
    IllegalMoveError,
    InvalidPromotionChoiceError,
    KingNotFoundError,
    NoPendingPromotionError,
    PromotionPendingError,
)
from chessrules.core.executor import apply_move, resolve_promotion, undo_move
from chessrules.core.move import LastMove, MoveRecord, MoveResult, PromotionPending
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    STARTING_PLACEMENT,
    board_from_fen,
    board_to_fen,
    color_from_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.types import (
    ALL_SQUARES,
    Square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "MoveKind",
    "PieceType",
    "PROMOTION_CHOICES",
    # Types / helpers
    "ALL_SQUARES",
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "LastMove",
    "MoveGenerator",
    "MoveRecord",
    "MoveResult",
    "Piece",
    "PromotionPending",
    "Rules",
    # Executor
    "apply_move",
    "resolve_promotion",
    "undo_move",
    # Notation
    "STARTING_PLACEMENT",
    "board_from_fen",
    "board_to_fen",
    "color_from_fen",
    # Errors
    "ChessRulesError",
    "IllegalMoveError",
    "InvalidPromotionChoiceError",
    "KingNotFoundError",
    "NoPendingPromotionError",
    "PromotionPendingError",
]
