"""Tests for GameSession: turn order, promotion, undo and events."""

import logging

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, GameStatus, MoveKind, PieceType
from chessrules.core.errors import (
    IllegalMoveError,
    InvalidPromotionChoiceError,
    NoPendingPromotionError,
    PromotionPendingError,
)
from chessrules.core.move import MoveRecord, PromotionPending
from chessrules.core.notation import board_from_fen
from chessrules.core.piece import Piece
from chessrules.core.types import (
    D5, D6, D7, D8, E2, E4, E5, E7, F2, F3, F7, G1, G2, G4, G6, H4,
)
from chessrules.game.options import SessionOptions
from chessrules.game.session import GameSession

PROMOTION_FEN = "7k/3P4/8/8/8/8/8/4K3"


def _session(fen: str | None = None, **kwargs: object) -> GameSession:
    """Helper: session from a placement, white to move unless overridden."""
    board = board_from_fen(fen) if fen is not None else None
    return GameSession(SessionOptions(start_board=board, **kwargs))  # type: ignore[arg-type]


def _play_fools_mate(session: GameSession) -> None:
    session.move(F2, F3)
    session.move(E7, E5)
    session.move(G2, G4)
    session.move(D8, H4)


class TestNewSession:
    def test_defaults(self) -> None:
        session = GameSession()
        assert session.board == Board.initial()
        assert session.side_to_move == Color.WHITE
        assert session.status == GameStatus.IN_PROGRESS
        assert session.history == ()
        assert session.last_move is None
        assert session.pending_promotion is None
        assert session.ply_count == 0

    def test_custom_start(self) -> None:
        session = _session("4k3/8/8/8/8/8/8/4K3", side_to_move=Color.BLACK)
        assert session.side_to_move == Color.BLACK
        assert len(session.board.pieces(Color.WHITE)) == 1

    def test_start_board_not_shared(self) -> None:
        start = Board.initial()
        session = GameSession(SessionOptions(start_board=start))
        session.move(E2, E4)
        assert start == Board.initial()

    def test_invalid_auto_promote(self) -> None:
        with pytest.raises(InvalidPromotionChoiceError):
            SessionOptions(auto_promote=PieceType.KING)


class TestTurnOrder:
    def test_move_switches_side(self) -> None:
        session = GameSession()
        result = session.move(E2, E4)
        assert result.record is not None
        assert session.side_to_move == Color.BLACK
        assert session.ply_count == 1
        assert str(session.last_move) == "e2e4"
        assert session.board[E4] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)

    def test_waiting_side_cannot_move(self) -> None:
        session = GameSession()
        with pytest.raises(IllegalMoveError):
            session.move(E7, E5)
        assert session.legal_moves(E7) == frozenset()

    def test_illegal_move_leaves_session_untouched(self) -> None:
        session = GameSession()
        with pytest.raises(IllegalMoveError, match="Illegal move e2e5"):
            session.move(E2, E5)
        assert session.board == Board.initial()
        assert session.side_to_move == Color.WHITE
        assert session.history == ()

    def test_black_first_when_configured(self) -> None:
        session = GameSession(SessionOptions(side_to_move=Color.BLACK))
        assert not session.is_legal(E2, E4)
        session.move(E7, E5)
        assert session.side_to_move == Color.WHITE

    def test_empty_square_has_no_moves(self) -> None:
        assert GameSession().legal_moves(E4) == frozenset()

    def test_en_passant_uses_last_move(self) -> None:
        session = _session("4k3/3p4/8/4P3/8/8/8/4K3", side_to_move=Color.BLACK)
        session.move(D7, D5)
        assert D6 in session.legal_moves(E5)
        result = session.move(E5, D6)
        assert result.record is not None
        assert result.record.kind == MoveKind.EN_PASSANT
        assert session.board[D5] is None
        assert len(session.captured(Color.BLACK)) == 1


class TestPromotion:
    def test_two_step_promotion(self) -> None:
        session = _session(PROMOTION_FEN)
        prompts: list[PromotionPending] = []
        session.events.on_promotion_required.append(prompts.append)

        result = session.move(D7, D8)
        assert result.is_pending
        assert prompts == [PromotionPending(D7, D8, Color.WHITE)]
        assert session.pending_promotion == prompts[0]
        assert session.side_to_move == Color.WHITE
        assert session.history == ()

        done = session.promote(PieceType.QUEEN)
        assert done.record is not None
        assert session.board[D8] == Piece(Color.WHITE, PieceType.QUEEN, has_moved=True)
        assert session.pending_promotion is None
        assert session.side_to_move == Color.BLACK
        assert session.status == GameStatus.CHECK

    def test_moves_blocked_while_pending(self) -> None:
        session = _session(PROMOTION_FEN)
        session.move(D7, D8)
        assert session.legal_moves(D7) == frozenset()
        with pytest.raises(PromotionPendingError):
            session.move(D7, D8)

    def test_invalid_choice_keeps_pending(self) -> None:
        session = _session(PROMOTION_FEN)
        session.move(D7, D8)
        with pytest.raises(InvalidPromotionChoiceError):
            session.promote(PieceType.KING)
        assert session.pending_promotion is not None
        session.promote(PieceType.ROOK)
        assert session.board[D8] is not None
        assert session.board[D8].piece_type == PieceType.ROOK

    def test_promote_without_pending(self) -> None:
        with pytest.raises(NoPendingPromotionError):
            GameSession().promote(PieceType.QUEEN)

    def test_auto_promote(self) -> None:
        session = _session(PROMOTION_FEN, auto_promote=PieceType.KNIGHT)
        prompts: list[PromotionPending] = []
        session.events.on_promotion_required.append(prompts.append)

        result = session.move(D7, D8)
        assert not result.is_pending
        assert result.record is not None
        assert result.record.promotion == PieceType.KNIGHT
        assert prompts == []
        assert session.side_to_move == Color.BLACK

    def test_cancel_promotion(self) -> None:
        session = _session(PROMOTION_FEN)
        assert not session.cancel_promotion()
        session.move(D7, D8)
        assert session.cancel_promotion()
        assert session.pending_promotion is None
        assert session.side_to_move == Color.WHITE


class TestUndo:
    def test_nothing_to_undo(self) -> None:
        assert GameSession().undo() is None

    def test_undo_restores_position(self) -> None:
        session = GameSession()
        undone: list[MoveRecord] = []
        session.events.on_undo.append(undone.append)
        session.move(E2, E4)

        record = session.undo()
        assert record is not None
        assert undone == [record]
        assert session.board == Board.initial()
        assert session.side_to_move == Color.WHITE
        assert session.history == ()

    def test_undo_while_pending_cancels_only(self) -> None:
        session = _session(PROMOTION_FEN)
        before = session.board
        session.move(D7, D8)
        assert session.undo() is None
        assert session.pending_promotion is None
        assert session.board == before

    def test_undo_returns_captured_piece(self) -> None:
        session = _session("4k3/8/8/3p4/4P3/8/8/4K3")
        session.move(E4, D5)
        assert session.captured(Color.BLACK) == [
            Piece(Color.BLACK, PieceType.PAWN, has_moved=True)
        ]
        session.undo()
        assert session.captured(Color.BLACK) == []
        assert session.board[D5] == Piece(Color.BLACK, PieceType.PAWN, has_moved=True)

    def test_undo_out_of_checkmate(self) -> None:
        session = GameSession()
        _play_fools_mate(session)
        session.undo()
        assert session.status == GameStatus.IN_PROGRESS
        assert not session.is_game_over
        assert session.side_to_move == Color.BLACK


class TestStatus:
    def test_fools_mate_ends_game(self, caplog: pytest.LogCaptureFixture) -> None:
        session = GameSession()
        changes: list[GameStatus] = []
        session.events.on_status_changed.append(changes.append)

        with caplog.at_level(logging.INFO, logger="chessrules.game.session"):
            _play_fools_mate(session)

        assert session.status == GameStatus.CHECKMATE
        assert session.is_game_over
        assert changes == [GameStatus.CHECKMATE]
        assert session.legal_moves(E2) == frozenset()
        with pytest.raises(IllegalMoveError):
            session.move(E2, E4)
        assert "checkmate" in caplog.text

    def test_stalemate(self) -> None:
        session = _session("7k/8/5K2/8/8/8/8/6Q1")
        session.move(G1, G6)
        assert session.status == GameStatus.STALEMATE
        assert session.is_game_over

    def test_on_move_receives_status_after(self) -> None:
        session = _session(PROMOTION_FEN, auto_promote=PieceType.QUEEN)
        seen: list[tuple[str, GameStatus]] = []
        session.events.on_move.append(lambda rec, status: seen.append((str(rec), status)))
        session.move(D7, D8)
        assert seen == [("d7d8q", GameStatus.CHECK)]

    def test_threatened_pieces(self) -> None:
        session = _session("4k3/5p2/8/8/8/8/8/5RK1")
        assert session.threatened_pieces() == frozenset()
        assert session.threatened_pieces(Color.BLACK) == {F7}

    def test_reset(self) -> None:
        session = GameSession()
        _play_fools_mate(session)
        session.reset()
        assert session.board == Board.initial()
        assert session.status == GameStatus.IN_PROGRESS
        assert session.history == ()
        assert session.captured(Color.WHITE) == []

    def test_history_is_a_snapshot(self) -> None:
        session = GameSession()
        session.move(E2, E4)
        history = session.history
        session.move(E7, E5)
        assert len(history) == 1
        assert [str(r) for r in session.history] == ["e2e4", "e7e5"]

    def test_queen_diagonal_opens_after_pawn_moves(self) -> None:
        session = GameSession()
        session.move(G2, G4)
        session.move(E7, E5)
        session.move(F2, F3)
        assert H4 in session.legal_moves(D8)
