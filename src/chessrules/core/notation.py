"""Board set-up from FEN piece placement and back.

Only the placement field is read. FEN carries no per-piece move history, so
``has_moved`` is inferred: kings and rooks off their home squares and pawns
off their starting row count as moved.
"""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import BOARD_SIZE, Square

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

_HOME_COLS: dict[PieceType, tuple[int, ...]] = {
    PieceType.KING: (4,),
    PieceType.ROOK: (0, 7),
}


def _infer_has_moved(piece: Piece, sq: Square) -> bool:
    if piece.piece_type == PieceType.PAWN:
        return sq.row != piece.color.pawn_row
    home_cols = _HOME_COLS.get(piece.piece_type)
    if home_cols is None:
        return False
    return sq.row != piece.color.home_row or sq.col not in home_cols


def board_from_fen(fen: str) -> Board:
    """Parse the placement field of *fen* into a :class:`Board`."""
    fields = fen.split()
    if not fields:
        raise ValueError("Empty FEN")
    ranks = fields[0].split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                sq = Square(row, col)
                piece = Piece.from_char(ch)
                board[sq] = Piece(
                    piece.color, piece.piece_type, _infer_has_moved(piece, sq)
                )
                col += 1
            if col > BOARD_SIZE:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    return board


def board_to_fen(board: Board) -> str:
    """Placement field for *board* (row 0 first, as in FEN)."""
    ranks: list[str] = []
    for row in board.rows():
        text = ""
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def color_from_fen(fen: str) -> Color:
    """Side to move from a full FEN, white when the field is absent."""
    fields = fen.split()
    if len(fields) < 2 or fields[1] == "w":
        return Color.WHITE
    if fields[1] == "b":
        return Color.BLACK
    raise ValueError(f"Invalid FEN side-to-move field: {fields[1]!r}")
