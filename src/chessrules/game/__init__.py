"""Game management layer — session state, history, promotion and undo.

Quick start::

    from chessrules.core import parse_square
    from chessrules.game import GameSession

    session = GameSession()
    session.move(parse_square("e2"), parse_square("e4"))
    session.undo()

The Qt bridge lives in :mod:`chessrules.game.qt_bridge` and needs PyQt6.
"""

from chessrules.game.options import SessionOptions
from chessrules.game.session import GameEvents, GameSession

__all__ = [
    "GameEvents",
    "GameSession",
    "SessionOptions",
]
