"""Exceptions raised by the rules engine and the game session."""

from __future__ import annotations


class ChessRulesError(Exception):
    """Base class for all chessrules errors."""


class KingNotFoundError(ChessRulesError, LookupError):
    """A color has no king on the board during a check query."""


class IllegalMoveError(ChessRulesError, ValueError):
    """A move outside the legal-move set was submitted to a session."""


class InvalidPromotionChoiceError(ChessRulesError, ValueError):
    """Promotion piece is not one of queen, rook, bishop or knight."""


class NoPendingPromotionError(ChessRulesError, RuntimeError):
    """A promotion choice was supplied while no promotion is pending."""


class PromotionPendingError(ChessRulesError, RuntimeError):
    """A move was submitted before the pending promotion was resolved."""
