"""Move value objects: last-move context, history records, promotion state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, MoveKind, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square, square_name

if TYPE_CHECKING:
    from chessrules.core.board import Board

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class LastMove:
    """The most recent committed move; enough context for en passant."""

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A committed move, carrying everything needed to undo it.

    ``piece`` is the mover as it stood before the move. ``captured_sq``
    equals ``to_sq`` except for en passant, where the captured pawn sat
    beside the mover.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured_piece: Piece | None = None
    kind: MoveKind = MoveKind.NORMAL
    captured_sq: Square | None = None
    promotion: PieceType | None = None

    @property
    def last_move(self) -> LastMove:
        return LastMove(self.from_sq, self.to_sq)

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    @property
    def is_castling(self) -> bool:
        return self.kind in (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base


@dataclass(frozen=True, slots=True)
class PromotionPending:
    """A pawn move to the last row waiting for the promotion piece."""

    from_sq: Square
    to_sq: Square
    color: Color


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of an executor call.

    Exactly one of ``record`` and ``promotion`` is set. While a promotion is
    pending ``board`` is an unchanged copy of the input board.
    """

    board: Board
    record: MoveRecord | None = None
    promotion: PromotionPending | None = None

    @property
    def is_pending(self) -> bool:
        return self.promotion is not None
