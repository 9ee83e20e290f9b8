from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .square import FULL, is_single_bit


# Piece indices for bitboards
WP, WN, WB, WR, WQ, WK, BP, BN, BB, BR, BQ, BK = range(12)
PIECE_ORDER = (WP, WN, WB, WR, WQ, WK, BP, BN, BB, BR, BQ, BK)
WHITE_PIECES = (WP, WN, WB, WR, WQ, WK)
BLACK_PIECES = (BP, BN, BB, BR, BQ, BK)
PAWNS = (WP, BP)
PIECE_TO_CHAR = {
    WP: "P",
    WN: "N",
    WB: "B",
    WR: "R",
    WQ: "Q",
    WK: "K",
    BP: "p",
    BN: "n",
    BB: "b",
    BR: "r",
    BQ: "q",
    BK: "k",
}
CHAR_TO_PIECE = {v: k for k, v in PIECE_TO_CHAR.items()}
PIECE_NAMES = {
    WP: "white pawn",
    WN: "white knight",
    WB: "white bishop",
    WR: "white rook",
    WQ: "white queen",
    WK: "white king",
    BP: "black pawn",
    BN: "black knight",
    BB: "black bishop",
    BR: "black rook",
    BQ: "black queen",
    BK: "black king",
}


def pieces_of(side: str) -> Tuple[int, ...]:
    """Piece indices belonging to ``side`` ('w' or 'b'), pawns first."""
    return WHITE_PIECES if side == "w" else BLACK_PIECES


def opponent(side: str) -> str:
    return "b" if side == "w" else "w"


@dataclass(frozen=True)
class CastlingRights:
    """Four independent castling flags."""

    white_kingside: bool = False
    white_queenside: bool = False
    black_kingside: bool = False
    black_queenside: bool = False

    @classmethod
    def from_fen(cls, field_: str) -> "CastlingRights":
        # '-' and unknown characters grant nothing
        return cls(
            white_kingside="K" in field_,
            white_queenside="Q" in field_,
            black_kingside="k" in field_,
            black_queenside="q" in field_,
        )

    def to_fen(self) -> str:
        flags = (
            ("K", self.white_kingside),
            ("Q", self.white_queenside),
            ("k", self.black_kingside),
            ("q", self.black_queenside),
        )
        out = "".join(ch for ch, on in flags if on)
        return out or "-"


NO_CASTLING = CastlingRights()


@dataclass(frozen=True)
class Board:
    """Immutable position: twelve piece bitboards plus game state.

    Notes:
    - Squares are 0..63 (a1=0 .. h8=63), rank-major from white's perspective.
    - ``ep_target`` is a single-bit mask or ``None``.
    - Every transition builds a new Board; nothing mutates an existing one.
    """

    # 12 piece bitboards, indexed by constants above
    bb: Tuple[int, ...]
    side_to_move: str = "w"  # 'w' or 'b'
    castling: CastlingRights = NO_CASTLING
    ep_target: Optional[int] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def __post_init__(self) -> None:
        if len(self.bb) != 12:
            raise ValueError("board needs exactly 12 bitboards")
        if any(b < 0 or b > FULL for b in self.bb):
            raise ValueError("bitboards must fit in 64 bits")
        if self.side_to_move not in ("w", "b"):
            raise ValueError("side to move must be 'w' or 'b'")
        if self.ep_target is not None and not is_single_bit(self.ep_target):
            raise ValueError("en passant target must be a single square")
        if self.halfmove_clock < 0 or self.fullmove_number < 1:
            raise ValueError("invalid move counters")
        # Accept lists from callers but always store a tuple
        object.__setattr__(self, "bb", tuple(self.bb))

    # --- Occupancy ---
    @property
    def white(self) -> int:
        return self.bb[WP] | self.bb[WN] | self.bb[WB] | self.bb[WR] | self.bb[WQ] | self.bb[WK]

    @property
    def black(self) -> int:
        return self.bb[BP] | self.bb[BN] | self.bb[BB] | self.bb[BR] | self.bb[BQ] | self.bb[BK]

    @property
    def occupied(self) -> int:
        return self.white | self.black

    def side_occupancy(self, side: str) -> int:
        return self.white if side == "w" else self.black

    def piece_at(self, mask: int) -> Optional[int]:
        """Return the piece index whose bitboard intersects ``mask``, if any."""
        for idx in PIECE_ORDER:
            if self.bb[idx] & mask:
                return idx
        return None

    def piece_char_at(self, sq: int) -> Optional[str]:
        idx = self.piece_at(1 << sq)
        return PIECE_TO_CHAR[idx] if idx is not None else None

    def is_disjoint(self) -> bool:
        """True when no square is claimed by two bitboards."""
        seen = 0
        for b in self.bb:
            if seen & b:
                return False
            seen |= b
        return True
