"""Move executor: apply, promote and undo moves on board snapshots.

Every function here returns a fresh :class:`Board` and leaves its input
untouched, so callers can keep the previous board for history. Legality is
*not* re-checked; callers draw destinations from
:meth:`MoveGenerator.legal_moves` first.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_CHOICES, MoveKind, PieceType
from chessrules.core.errors import InvalidPromotionChoiceError
from chessrules.core.move import LastMove, MoveRecord, MoveResult, PromotionPending
from chessrules.core.move_generator import (
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_FILE,
    is_castling_move,
    is_en_passant_move,
)
from chessrules.core.piece import Piece
from chessrules.core.types import Square, square_name

_LOGGER = logging.getLogger(__name__)


def _castling_rook_squares(row: int, kingside: bool) -> tuple[Square, Square]:
    """(rook origin, rook destination) for a castle on *row*."""
    if kingside:
        return Square(row, KINGSIDE_ROOK_FILE), Square(row, 5)
    return Square(row, QUEENSIDE_ROOK_FILE), Square(row, 3)


def apply_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    last_move: LastMove | None = None,
) -> MoveResult:
    """Apply the move *from_sq* → *to_sq* and return the resulting board.

    A pawn reaching the last row is not placed: the result carries a
    :class:`PromotionPending` and an unchanged copy of *board* until
    :func:`resolve_promotion` is called.

    ``last_move`` is accepted for symmetry with the generator; en passant is
    recognised structurally (a pawn moving diagonally onto an empty square).
    """
    piece = board[from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(from_sq)}")

    if (
        piece.piece_type == PieceType.PAWN
        and to_sq.row == piece.color.promotion_row
    ):
        pending = PromotionPending(from_sq, to_sq, piece.color)
        _LOGGER.debug(
            "Promotion pending for %s %s%s",
            piece.color,
            square_name(from_sq),
            square_name(to_sq),
        )
        return MoveResult(board=board.copy(), promotion=pending)

    new_board = board.copy()
    captured = board[to_sq]
    captured_sq: Square | None = to_sq if captured is not None else None
    kind = MoveKind.NORMAL

    if is_en_passant_move(board, piece, from_sq, to_sq):
        # The passed pawn sits beside the mover, not on the destination
        captured_sq = Square(from_sq.row, to_sq.col)
        captured = new_board[captured_sq]
        new_board[captured_sq] = None
        kind = MoveKind.EN_PASSANT
    elif is_castling_move(piece, from_sq, to_sq):
        kingside = to_sq.col > from_sq.col
        rook_from, rook_to = _castling_rook_squares(from_sq.row, kingside)
        rook = new_board[rook_from]
        if rook is None:
            raise ValueError(f"No rook on {square_name(rook_from)} to castle with")
        new_board[rook_from] = None
        new_board[rook_to] = rook.moved()
        kind = MoveKind.CASTLE_KINGSIDE if kingside else MoveKind.CASTLE_QUEENSIDE
    elif piece.piece_type == PieceType.PAWN and abs(to_sq.row - from_sq.row) == 2:
        kind = MoveKind.DOUBLE_PAWN

    new_board[from_sq] = None
    new_board[to_sq] = piece.moved()

    record = MoveRecord(
        from_sq=from_sq,
        to_sq=to_sq,
        piece=piece,
        captured_piece=captured,
        kind=kind,
        captured_sq=captured_sq if captured is not None else None,
    )
    _LOGGER.debug("Applied %s (%s)", record, kind.name)
    return MoveResult(board=new_board, record=record)


def resolve_promotion(
    board: Board, pending: PromotionPending, piece_type: PieceType
) -> MoveResult:
    """Finish a pending promotion by placing a *piece_type* on the last row."""
    if piece_type not in PROMOTION_CHOICES:
        name = getattr(piece_type, "name", repr(piece_type))
        raise InvalidPromotionChoiceError(f"Cannot promote to {name}")

    pawn = board[pending.from_sq]
    if pawn is None or pawn.piece_type != PieceType.PAWN:
        raise ValueError(f"No pawn on {square_name(pending.from_sq)} to promote")

    new_board = board.copy()
    captured = board[pending.to_sq]
    new_board[pending.from_sq] = None
    new_board[pending.to_sq] = Piece(pending.color, piece_type, has_moved=True)

    record = MoveRecord(
        from_sq=pending.from_sq,
        to_sq=pending.to_sq,
        piece=pawn,
        captured_piece=captured,
        kind=MoveKind.PROMOTION,
        captured_sq=pending.to_sq if captured is not None else None,
        promotion=piece_type,
    )
    _LOGGER.debug("Promoted %s", record)
    return MoveResult(board=new_board, record=record)


def undo_move(board: Board, record: MoveRecord) -> Board:
    """Reverse *record*, which must be the last move applied to *board*."""
    new_board = board.copy()
    new_board[record.to_sq] = None
    new_board[record.from_sq] = record.piece

    if record.captured_piece is not None:
        captured_sq = record.captured_sq if record.captured_sq is not None else record.to_sq
        new_board[captured_sq] = record.captured_piece

    if record.is_castling:
        kingside = record.kind == MoveKind.CASTLE_KINGSIDE
        rook_from, rook_to = _castling_rook_squares(record.from_sq.row, kingside)
        rook = new_board[rook_to]
        if rook is None:
            raise ValueError(f"No rook on {square_name(rook_to)} to uncastle")
        new_board[rook_to] = None
        # Castling requires an unmoved rook, so its prior flag was False
        new_board[rook_from] = replace(rook, has_moved=False)

    _LOGGER.debug("Undid %s", record)
    return new_board
