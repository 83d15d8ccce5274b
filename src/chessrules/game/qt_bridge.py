"""Qt bridge exposing a :class:`GameSession` through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.enums import GameStatus, PieceType
from chessrules.core.errors import ChessRulesError
from chessrules.core.move import MoveRecord, PromotionPending
from chessrules.core.types import Square
from chessrules.game.session import GameSession


class SessionBridge(QObject):
    """Main-thread adapter between a session and a Qt front-end.

    Rejected input is reported through ``move_rejected`` instead of
    propagating, so a click handler can simply reset its selection.
    """

    move_made = pyqtSignal(object, int)  # MoveRecord, GameStatus
    promotion_required = pyqtSignal(object)  # PromotionPending
    status_changed = pyqtSignal(int)  # GameStatus
    move_undone = pyqtSignal(object)  # MoveRecord
    move_rejected = pyqtSignal(str)

    def __init__(self, session: GameSession | None = None) -> None:
        super().__init__()
        self._session = session if session is not None else GameSession()
        events = self._session.events
        events.on_move.append(self._on_move)
        events.on_promotion_required.append(self._on_promotion_required)
        events.on_status_changed.append(self._on_status_changed)
        events.on_undo.append(self._on_undo)

    @property
    def session(self) -> GameSession:
        return self._session

    @pyqtSlot(object, object)
    def request_move(self, from_obj: object, to_obj: object) -> None:
        """Try to play *from_obj* → *to_obj* (both :class:`Square`)."""
        if not isinstance(from_obj, Square) or not isinstance(to_obj, Square):
            self.move_rejected.emit("Bridge received invalid squares")
            return
        try:
            self._session.move(from_obj, to_obj)
        except ChessRulesError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(int)
    def promote(self, piece_type: int) -> None:
        """Answer a ``promotion_required`` signal."""
        try:
            self._session.promote(PieceType(piece_type))
        except (ChessRulesError, ValueError) as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot()
    def undo(self) -> None:
        self._session.undo()

    # ── Session callbacks ────────────────────────────────────────────────

    def _on_move(self, record: MoveRecord, status: GameStatus) -> None:
        self.move_made.emit(record, int(status))

    def _on_promotion_required(self, pending: PromotionPending) -> None:
        self.promotion_required.emit(pending)

    def _on_status_changed(self, status: GameStatus) -> None:
        self.status_changed.emit(int(status))

    def _on_undo(self, record: MoveRecord) -> None:
        self.move_undone.emit(record)
