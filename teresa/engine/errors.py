from __future__ import annotations


class InvalidFormatError(ValueError):
    """Raised when a text record (square, move, FEN) cannot be parsed."""


class InvalidSquareError(InvalidFormatError):
    """Raised for a square name or mask that does not denote exactly one square."""


class InvalidMoveError(ValueError):
    """Raised when a move does not fit the position it is applied to."""
