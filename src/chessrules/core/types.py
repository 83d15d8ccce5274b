"""Square value type and coordinate helpers.

Board layout (row-major, row 0 is black's back rank)::

    row 0:  a8 b8 c8 d8 e8 f8 g8 h8
    row 1:  a7 ...
    ...
    row 7:  a1 b1 c1 d1 e1 f1 g1 h1
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8
_FILES = "abcdefgh"


def in_bounds(row: int, col: int) -> bool:
    """Whether ``(row, col)`` lies on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """Immutable board coordinate, zero-based."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not in_bounds(self.row, self.col):
            raise ValueError(f"Square out of range: ({self.row}, {self.col})")

    def offset(self, d_row: int, d_col: int) -> Square | None:
        """Neighbouring square, or ``None`` when it would leave the board."""
        row = self.row + d_row
        col = self.col + d_col
        if not in_bounds(row, col):
            return None
        return Square(row, col)

    @property
    def name(self) -> str:
        return square_name(self)

    def __str__(self) -> str:
        return square_name(self)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(0, 0)`` → ``'a8'``."""
    return _FILES[sq.col] + str(BOARD_SIZE - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. ``'e4'`` → ``Square(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), _FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
