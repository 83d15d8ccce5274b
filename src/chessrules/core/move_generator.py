"""Raw and legal move generation + attack detection."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.move import LastMove
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, Square, in_bounds

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

KING_FILE = 4
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for sq in ALL_SQUARES:
        moves: list[Square] = []
        for dr, dc in offsets:
            r = sq.row + dr
            c = sq.col + dc
            if in_bounds(r, c):
                moves.append(Square(r, c))
        targets[sq] = tuple(moves)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r = sq.row + dr
            c = sq.col + dc
            ray: list[Square] = []
            while in_bounds(r, c):
                ray.append(Square(r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_SLIDING_RAYS: dict[PieceType, dict[Square, tuple[tuple[Square, ...], ...]]] = {
    PieceType.BISHOP: _build_rays(BISHOP_DIRS),
    PieceType.ROOK: _build_rays(ROOK_DIRS),
    PieceType.QUEEN: _build_rays(QUEEN_DIRS),
}


def is_castling_move(piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """A king moving two files along its row."""
    return (
        piece.piece_type == PieceType.KING
        and from_sq.row == to_sq.row
        and abs(to_sq.col - from_sq.col) == 2
    )


def is_en_passant_move(
    board: Board, piece: Piece, from_sq: Square, to_sq: Square
) -> bool:
    """A pawn moving diagonally onto an empty square."""
    return (
        piece.piece_type == PieceType.PAWN
        and from_sq.col != to_sq.col
        and board.is_empty(to_sq)
    )


class MoveGenerator:
    """Generates raw and legal destinations for pieces on a :class:`Board`.

    The generator never changes the board it was given. King-safety checks
    run against scratch copies.
    """

    __slots__ = ("_board", "_last_move")

    def __init__(self, board: Board, last_move: LastMove | None = None) -> None:
        self._board = board
        self._last_move = last_move

    @property
    def board(self) -> Board:
        return self._board

    # -- Public API ---------------------------------------------------------

    def raw_moves(self, sq: Square, piece: Piece | None = None) -> frozenset[Square]:
        """Geometrically reachable destinations, ignoring check."""
        if piece is None:
            piece = self._board[sq]
            if piece is None:
                return frozenset()
        return frozenset(self._targets(sq, piece, attacks_only=False))

    def legal_moves(self, sq: Square, piece: Piece | None = None) -> frozenset[Square]:
        """Raw destinations that do not leave the mover's king attacked."""
        if piece is None:
            piece = self._board[sq]
            if piece is None:
                return frozenset()

        color = piece.color
        opponent = color.opposite
        in_check: bool | None = None
        legal: set[Square] = set()

        for to_sq in self.raw_moves(sq, piece):
            if is_castling_move(piece, sq, to_sq):
                if in_check is None:
                    in_check = self.is_in_check(color)
                if in_check:
                    continue
                step = 1 if to_sq.col > sq.col else -1
                transit = Square(sq.row, sq.col + step)
                if self.is_square_attacked(transit, opponent):
                    continue
            if self._exposes_king(sq, to_sq, piece):
                continue
            legal.add(to_sq)
        return frozenset(legal)

    def generate_legal_moves(self, color: Color) -> dict[Square, frozenset[Square]]:
        """Legal destinations for every *color* piece that has at least one."""
        result: dict[Square, frozenset[Square]] = {}
        for sq, piece in self._board.pieces(color):
            moves = self.legal_moves(sq, piece)
            if moves:
                result[sq] = moves
        return result

    def has_legal_move(self, color: Color) -> bool:
        """Whether any *color* piece can move; stops at the first that can."""
        for sq, piece in self._board.pieces(color):
            if self.legal_moves(sq, piece):
                return True
        return False

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.find_king(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        for from_sq, piece in self._board.pieces(by_color):
            if sq in self._targets(from_sq, piece, attacks_only=True):
                return True
        return False

    # -- Simulation ---------------------------------------------------------

    def _exposes_king(self, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
        board = self._board
        scratch = board.copy()
        if is_en_passant_move(board, piece, from_sq, to_sq):
            scratch[Square(from_sq.row, to_sq.col)] = None
        scratch[from_sq] = None
        scratch[to_sq] = piece

        if piece.piece_type == PieceType.KING:
            king_sq = to_sq
        else:
            king_sq = scratch.find_king(piece.color)
        return MoveGenerator(scratch).is_square_attacked(king_sq, piece.color.opposite)

    # -- Piece-specific generators (private) -------------------------------

    def _targets(self, sq: Square, piece: Piece, *, attacks_only: bool) -> list[Square]:
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            return self._gen_pawn(sq, piece, attacks_only)
        if pt == PieceType.KNIGHT:
            return self._gen_step(sq, piece, _KNIGHT_TARGETS[sq])
        if pt == PieceType.KING:
            moves = self._gen_step(sq, piece, _KING_TARGETS[sq])
            if not attacks_only:
                self._gen_castling(sq, piece, moves)
            return moves
        return self._gen_sliding(sq, piece, _SLIDING_RAYS[pt][sq])

    def _gen_pawn(self, sq: Square, piece: Piece, attacks_only: bool) -> list[Square]:
        board = self._board
        color = piece.color
        forward = color.forward
        moves: list[Square] = []

        if not attacks_only:
            one_step = sq.offset(forward, 0)
            if one_step is not None and board.is_empty(one_step):
                moves.append(one_step)
                if sq.row == color.pawn_row:
                    two_step = sq.offset(2 * forward, 0)
                    if two_step is not None and board.is_empty(two_step):
                        moves.append(two_step)

        for d_col in (-1, 1):
            cap_sq = sq.offset(forward, d_col)
            if cap_sq is None:
                continue
            if attacks_only:
                moves.append(cap_sq)
                continue
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(cap_sq)
            elif self._is_en_passant_target(sq, cap_sq, color):
                moves.append(cap_sq)
        return moves

    def _is_en_passant_target(self, sq: Square, cap_sq: Square, color: Color) -> bool:
        last = self._last_move
        if last is None:
            return False
        if last.to_sq != Square(sq.row, cap_sq.col):
            return False
        if last.from_sq.col != last.to_sq.col:
            return False
        if abs(last.from_sq.row - last.to_sq.row) != 2:
            return False
        passed = self._board[last.to_sq]
        return (
            passed is not None
            and passed.piece_type == PieceType.PAWN
            and passed.color != color
        )

    def _gen_step(
        self, sq: Square, piece: Piece, targets: tuple[Square, ...]
    ) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        for to_sq in targets:
            target = board[to_sq]
            if target is None or target.color != piece.color:
                moves.append(to_sq)
        return moves

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        rays: tuple[tuple[Square, ...], ...],
    ) -> list[Square]:
        board = self._board
        moves: list[Square] = []
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(to_sq)
                    continue
                if target.color != piece.color:
                    moves.append(to_sq)
                break
        return moves

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Square]) -> None:
        if king.has_moved or king_sq.col != KING_FILE:
            return

        board = self._board
        row = king_sq.row

        if self._unmoved_rook(Square(row, KINGSIDE_ROOK_FILE), king.color) and all(
            board.is_empty(Square(row, col))
            for col in range(KING_FILE + 1, KINGSIDE_ROOK_FILE)
        ):
            moves.append(Square(row, KING_FILE + 2))

        if self._unmoved_rook(Square(row, QUEENSIDE_ROOK_FILE), king.color) and all(
            board.is_empty(Square(row, col))
            for col in range(QUEENSIDE_ROOK_FILE + 1, KING_FILE)
        ):
            moves.append(Square(row, KING_FILE - 2))

    def _unmoved_rook(self, sq: Square, color: Color) -> bool:
        rook = self._board[sq]
        return (
            rook is not None
            and rook.piece_type == PieceType.ROOK
            and rook.color == color
            and not rook.has_moved
        )
