"""GameSession — turn order, history, promotion and undo over the rules engine.

The session owns the current board snapshot and the move history. Every
change goes through the executor, so each ply replaces the board with a new
value. Listeners subscribe through :class:`GameEvents`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameStatus, PieceType
from chessrules.core.errors import (
    IllegalMoveError,
    NoPendingPromotionError,
    PromotionPendingError,
)
from chessrules.core.executor import apply_move, resolve_promotion, undo_move
from chessrules.core.move import LastMove, MoveRecord, MoveResult, PromotionPending
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.rules import Rules
from chessrules.core.types import Square, square_name
from chessrules.game.options import SessionOptions

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameStatus], None]  # record, status after
PromotionCallback = Callable[[PromotionPending], None]
StatusCallback = Callable[[GameStatus], None]
UndoCallback = Callable[[MoveRecord], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_required: list[PromotionCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_undo: list[UndoCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """A single game between two sides sharing one board.

    Validates turn order and legality before handing moves to the executor;
    illegal attempts raise :class:`IllegalMoveError` and leave the session
    untouched. Designed for a single thread.
    """

    __slots__ = (
        "_options",
        "_board",
        "_side_to_move",
        "_history",
        "_captured",
        "_pending",
        "_status",
        "events",
    )

    def __init__(self, options: SessionOptions | None = None) -> None:
        self._options = options if options is not None else SessionOptions()
        self.events = GameEvents()
        self._board = Board.initial()
        self._side_to_move = Color.WHITE
        self._history: list[MoveRecord] = []
        self._captured: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}
        self._pending: PromotionPending | None = None
        self._status = GameStatus.IN_PROGRESS
        self.reset()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def options(self) -> SessionOptions:
        return self._options

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def last_move(self) -> LastMove | None:
        if not self._history:
            return None
        return self._history[-1].last_move

    @property
    def pending_promotion(self) -> PromotionPending | None:
        return self._pending

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_game_over(self) -> bool:
        return self._status.is_terminal

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    def captured(self, color: Color) -> list[Piece]:
        """Pieces of *color* taken so far, in capture order."""
        return list(self._captured[color])

    # ── Lifecycle ────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Start over from the configured position."""
        start = self._options.start_board
        self._board = start.copy() if start is not None else Board.initial()
        self._side_to_move = self._options.side_to_move
        self._history.clear()
        self._captured = {Color.WHITE: [], Color.BLACK: []}
        self._pending = None
        self._status = Rules.status(self._board, self._side_to_move)

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> frozenset[Square]:
        """Legal destinations for the piece on *sq*.

        Empty for empty squares, for the waiting side's pieces, while a
        promotion is pending and once the game is over.
        """
        if self._pending is not None or self.is_game_over:
            return frozenset()
        piece = self._board[sq]
        if piece is None or piece.color != self._side_to_move:
            return frozenset()
        return MoveGenerator(self._board, self.last_move).legal_moves(sq, piece)

    def is_legal(self, from_sq: Square, to_sq: Square) -> bool:
        return to_sq in self.legal_moves(from_sq)

    def threatened_pieces(self, color: Color | None = None) -> frozenset[Square]:
        """Squares of *color*'s pieces under attack (side to move by default)."""
        return Rules.threatened_pieces(
            self._board, self._side_to_move if color is None else color
        )

    # ── Moves ────────────────────────────────────────────────────────────

    def move(self, from_sq: Square, to_sq: Square) -> MoveResult:
        """Play *from_sq* → *to_sq* for the side to move.

        Returns a pending result when a pawn reaches the last row and no
        auto-promotion is configured; finish it with :meth:`promote`.
        """
        if self._pending is not None:
            raise PromotionPendingError("Resolve the pending promotion first")
        if not self.is_legal(from_sq, to_sq):
            raise IllegalMoveError(
                f"Illegal move {square_name(from_sq)}{square_name(to_sq)}"
            )

        result = apply_move(self._board, from_sq, to_sq, self.last_move)
        if result.promotion is None:
            self._commit(result)
            return result

        self._pending = result.promotion
        if self._options.auto_promote is not None:
            return self.promote(self._options.auto_promote)

        for cb in self.events.on_promotion_required:
            cb(result.promotion)
        return result

    def promote(self, piece_type: PieceType) -> MoveResult:
        """Resolve the pending promotion with *piece_type*.

        An invalid choice raises and keeps the promotion pending.
        """
        pending = self._pending
        if pending is None:
            raise NoPendingPromotionError("No promotion is pending")
        result = resolve_promotion(self._board, pending, piece_type)
        self._pending = None
        self._commit(result)
        return result

    def cancel_promotion(self) -> bool:
        """Drop a pending promotion. Returns whether one was pending."""
        if self._pending is None:
            return False
        _LOGGER.debug("Cancelled promotion %s", self._pending)
        self._pending = None
        return True

    def undo(self) -> MoveRecord | None:
        """Take back the last ply.

        A pending promotion is cancelled instead, returning ``None``. Returns
        ``None`` as well when there is nothing to undo.
        """
        if self.cancel_promotion():
            return None
        if not self._history:
            return None

        record = self._history.pop()
        self._board = undo_move(self._board, record)
        if record.captured_piece is not None:
            self._captured[record.captured_piece.color].pop()
        self._side_to_move = self._side_to_move.opposite

        for cb in self.events.on_undo:
            cb(record)
        self._set_status(Rules.status(self._board, self._side_to_move, self.last_move))
        return record

    # ── Internal ─────────────────────────────────────────────────────────

    def _commit(self, result: MoveResult) -> None:
        record = result.record
        assert record is not None
        self._board = result.board
        self._history.append(record)
        if record.captured_piece is not None:
            self._captured[record.captured_piece.color].append(record.captured_piece)
        self._side_to_move = self._side_to_move.opposite

        status = Rules.status(self._board, self._side_to_move, record.last_move)
        for cb in self.events.on_move:
            cb(record, status)
        self._set_status(status)

    def _set_status(self, status: GameStatus) -> None:
        if status == self._status:
            return
        self._status = status
        if status.is_terminal:
            _LOGGER.info(
                "Game over after %d plies: %s to move, %s",
                len(self._history),
                self._side_to_move,
                status.name.lower(),
            )
        for cb in self.events.on_status_changed:
            cb(status)
