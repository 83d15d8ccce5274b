"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.errors import KingNotFoundError
from chessrules.core.piece import Piece
from chessrules.core.types import ALL_SQUARES, BOARD_SIZE, Square

Row = list[Piece | None]

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """8x8 row-major grid of optional pieces.

    Engine functions treat boards as immutable values: they copy before
    changing anything and hand the copy back. Item assignment exists for
    building positions and for those scratch copies.
    """

    __slots__ = ("_grid",)

    def __init__(self, rows: Iterable[Iterable[Piece | None]] | None = None) -> None:
        if rows is None:
            self._grid: list[Row] = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
            return
        grid = [list(row) for row in rows]
        if len(grid) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in grid):
            raise ValueError("Board must be exactly 8 rows of 8 squares")
        self._grid = grid

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._grid[sq.row][sq.col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._grid[sq.row][sq.col] = piece

    def is_empty(self, sq: Square) -> bool:
        return self._grid[sq.row][sq.col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Every occupied square with its piece, in row-major order."""
        grid = self._grid
        for sq in ALL_SQUARES:
            piece = grid[sq.row][sq.col]
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color) -> list[tuple[Square, Piece]]:
        """Squares and pieces belonging to *color*."""
        return [(sq, p) for sq, p in self.occupied() if p.color == color]

    def find_king(self, color: Color) -> Square:
        """Return the king square for *color*."""
        for sq, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return sq
        raise KingNotFoundError(f"No {color.name} king on board")

    def rows(self) -> list[list[Piece | None]]:
        """Copy of the grid as nested lists."""
        return [row.copy() for row in self._grid]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board.__new__(Board)
        b._grid = [row.copy() for row in self._grid]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b._grid[Color.BLACK.home_row][col] = Piece(Color.BLACK, pt)
            b._grid[Color.BLACK.pawn_row][col] = Piece(Color.BLACK, PieceType.PAWN)
            b._grid[Color.WHITE.pawn_row][col] = Piece(Color.WHITE, PieceType.PAWN)
            b._grid[Color.WHITE.home_row][col] = Piece(Color.WHITE, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for row_idx, row in enumerate(self._grid):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{BOARD_SIZE - row_idx} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
