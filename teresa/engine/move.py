from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidFormatError
from .square import square_to_str, str_to_square


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Attributes:
        from_sq (int): Origin square index (0-based).
        to_sq (int): Destination square index (0-based).
        piece (Optional[int]): Index of the moving piece's bitboard when the
            generator knows it. Not part of equality, so a move parsed from
            text compares equal to the generated one.
    """

    from_sq: int
    to_sq: int
    piece: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        # Validates both indices
        square_to_str(self.from_sq)
        square_to_str(self.to_sq)

    @property
    def from_mask(self) -> int:
        return 1 << self.from_sq

    @property
    def to_mask(self) -> int:
        return 1 << self.to_sq

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form.

        Returns:
            str: Move encoded like ``"e2e4"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)

    def __str__(self) -> str:
        return self.to_uci()


def parse_uci(uci: str) -> Move:
    """Parse a four-character move string.

    Args:
        uci (str): Source and destination squares, e.g. ``"e2e4"``.

    Returns:
        Move: Parsed move without a piece tag.

    Raises:
        InvalidFormatError: If the string is not exactly two valid squares.
            Promotion suffixes are not supported.
    """
    if not isinstance(uci, str) or len(uci) != 4:
        raise InvalidFormatError(f"invalid move text: {uci!r}")
    return Move(str_to_square(uci[0:2]), str_to_square(uci[2:4]))
