from __future__ import annotations

from typing import List, Tuple

from .board import BN, BP, WN, WP, Board
from .move import Move
from .square import FILE_A, FILE_B, FILE_G, FILE_H, FULL, RANK_2, RANK_7, iter_bits


# (delta, files the source must not be on)
KNIGHT_STEPS: Tuple[Tuple[int, int], ...] = (
    (17, FILE_H),
    (15, FILE_A),
    (10, FILE_G | FILE_H),
    (6, FILE_A | FILE_B),
    (-6, FILE_G | FILE_H),
    (-10, FILE_A | FILE_B),
    (-15, FILE_H),
    (-17, FILE_A),
)


def _shift(mask: int, delta: int) -> int:
    """Shift toward higher squares for positive ``delta``; bits leaving the board drop."""
    if delta >= 0:
        return (mask << delta) & FULL
    return mask >> -delta


def _index(mask: int) -> int:
    return mask.bit_length() - 1


def generate_moves(board: Board) -> List[Move]:
    """Return pseudo-legal moves for the side to move.

    Returns:
        List[Move]: Pawn moves followed by knight moves, each block ordered by
            ascending source square.

    Notes:
        Only pawns and knights move. Moves are not checked for leaving the
        mover's king attacked; castling, en passant captures and promotions
        are never produced.
    """
    return generate_pawn_moves(board) + generate_knight_moves(board)


def generate_pawn_moves(board: Board) -> List[Move]:
    """Pawn pushes, double pushes from the home rank and diagonal captures."""
    moves: List[Move] = []
    empty = ~board.occupied & FULL
    if board.side_to_move == "w":
        piece, forward, home = WP, 8, RANK_2
        enemy = board.black
        # (delta, edge file that blocks it)
        captures = ((7, FILE_A), (9, FILE_H))
    else:
        piece, forward, home = BP, -8, RANK_7
        enemy = board.white
        captures = ((-9, FILE_A), (-7, FILE_H))

    for src in iter_bits(board.bb[piece]):
        from_sq = _index(src)
        one = _shift(src, forward)
        if one & empty:
            moves.append(Move(from_sq, _index(one), piece))
            if src & home:
                two = _shift(one, forward)
                if two & empty:
                    moves.append(Move(from_sq, _index(two), piece))
        for delta, edge in captures:
            if src & edge:
                continue
            dst = _shift(src, delta)
            if dst & enemy:
                moves.append(Move(from_sq, _index(dst), piece))
    return moves


def generate_knight_moves(board: Board) -> List[Move]:
    """Knight jumps onto empty or enemy-held squares."""
    moves: List[Move] = []
    if board.side_to_move == "w":
        piece, enemy = WN, board.black
    else:
        piece, enemy = BN, board.white
    empty = ~board.occupied & FULL

    for src in iter_bits(board.bb[piece]):
        from_sq = _index(src)
        for delta, blocked in KNIGHT_STEPS:
            if src & blocked:
                continue
            dst = _shift(src, delta)
            if dst & (empty | enemy):
                moves.append(Move(from_sq, _index(dst), piece))
    return moves
