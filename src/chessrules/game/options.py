"""Game session configuration."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_CHOICES, Color, PieceType
from chessrules.core.errors import InvalidPromotionChoiceError


@dataclass(slots=True, frozen=True)
class SessionOptions:
    """Settings applied when a :class:`GameSession` starts.

    Args:
        start_board: Position to start from; the standard set-up when omitted.
        side_to_move: Color to move first.
        auto_promote: Promote to this piece without asking. ``None`` keeps
            the interactive two-step promotion.
    """

    start_board: Board | None = None
    side_to_move: Color = Color.WHITE
    auto_promote: PieceType | None = None

    def __post_init__(self) -> None:
        if self.auto_promote is not None and self.auto_promote not in PROMOTION_CHOICES:
            raise InvalidPromotionChoiceError(
                f"Cannot auto-promote to {self.auto_promote.name}"
            )
