from __future__ import annotations

from typing import Iterator

from .errors import InvalidSquareError


FULL = (1 << 64) - 1

FILE_A = 0x0101010101010101
FILE_B = FILE_A << 1
FILE_G = FILE_A << 6
FILE_H = FILE_A << 7

RANK_1 = 0xFF
RANK_2 = RANK_1 << 8
RANK_7 = RANK_1 << 48

FILES = "abcdefgh"
RANKS = "12345678"


def str_to_square(s: str) -> int:
    """Convert algebraic notation into a 0-based square index.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        int: Zero-based square index (a1=0, h1=7, a8=56, h8=63).

    Raises:
        InvalidSquareError: If ``s`` is not exactly a file ``a``-``h``
            followed by a rank ``1``-``8``.
    """
    if not isinstance(s, str) or len(s) != 2 or s[0] not in FILES or s[1] not in RANKS:
        raise InvalidSquareError(f"invalid square: {s!r}")
    return RANKS.index(s[1]) * 8 + FILES.index(s[0])


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into algebraic notation.

    Raises:
        InvalidSquareError: If ``idx`` is outside the valid square range.
    """
    if idx < 0 or idx > 63:
        raise InvalidSquareError(f"invalid square index: {idx}")
    return FILES[idx % 8] + RANKS[idx // 8]


def is_single_bit(mask: int) -> bool:
    return 0 < mask <= FULL and mask & (mask - 1) == 0


def mask_to_square(mask: int) -> int:
    """Return the index of the only bit set in ``mask``.

    Raises:
        InvalidSquareError: If ``mask`` is zero, has several bits set, or
            does not fit in 64 bits.
    """
    if not is_single_bit(mask):
        raise InvalidSquareError(f"mask does not denote one square: {mask:#x}")
    return mask.bit_length() - 1


def mask_to_str(mask: int) -> str:
    """Name the square held by a single-bit mask, e.g. ``1 << 12`` -> ``"e2"``."""
    return square_to_str(mask_to_square(mask))


def str_to_mask(s: str) -> int:
    """Inverse of :func:`mask_to_str`."""
    return 1 << str_to_square(s)


def iter_bits(mask: int) -> Iterator[int]:
    """Yield each set bit of ``mask`` as a single-bit mask, lowest square first."""
    while mask:
        bit = mask & -mask
        yield bit
        mask ^= bit
