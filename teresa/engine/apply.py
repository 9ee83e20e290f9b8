from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .board import (
    BK,
    BR,
    PAWNS,
    WK,
    WR,
    Board,
    CastlingRights,
    opponent,
    pieces_of,
)
from .errors import InvalidMoveError
from .move import Move


# Rook home squares and the castling right each one guards
_ROOK_HOMES = {
    (WR, 0): "white_queenside",
    (WR, 7): "white_kingside",
    (BR, 56): "black_queenside",
    (BR, 63): "black_kingside",
}


@dataclass(frozen=True)
class MoveEvent:
    """What a move does to a position, for callers that report on play."""

    move: Move
    side: str
    piece: int
    captured: Optional[int]

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_pawn_move(self) -> bool:
        return self.piece in PAWNS


def _identify(board: Board, move: Move) -> Tuple[int, Optional[int]]:
    """Return (moving piece, captured piece) for ``move`` on ``board``.

    Raises:
        InvalidMoveError: If the source square holds no piece of the side to
            move, the destination holds one of its own pieces, or the move's
            piece tag disagrees with the board.
    """
    src, dst = move.from_mask, move.to_mask
    side = board.side_to_move

    moved = next((p for p in pieces_of(side) if board.bb[p] & src), None)
    if moved is None:
        raise InvalidMoveError(f"no piece of the side to move on {move.to_uci()[:2]}")
    if move.piece is not None and move.piece != moved:
        raise InvalidMoveError(f"move {move.to_uci()} is tagged for another piece")
    if board.side_occupancy(side) & dst:
        raise InvalidMoveError(f"destination of {move.to_uci()} holds an own piece")

    captured = next((p for p in pieces_of(opponent(side)) if board.bb[p] & dst), None)
    return moved, captured


def describe_move(board: Board, move: Move) -> MoveEvent:
    """Report the moving and captured piece without applying the move."""
    moved, captured = _identify(board, move)
    return MoveEvent(move=move, side=board.side_to_move, piece=moved, captured=captured)


def apply_move(board: Board, move: Move) -> Board:
    """Return a new Board with ``move`` played.

    Steps:
    - Find the moving piece among the side to move's bitboards.
    - Remove any opposing piece on the destination.
    - Clear the source square on every bitboard, then set the destination on
      the moving piece's bitboard.
    - Toggle the side to move; reset the half-move clock on pawn moves and
      captures, otherwise increment it; bump the full-move number after
      Black's move.
    - Set the en passant target after a pawn double push, clear it otherwise;
      drop castling rights when a king or rook leaves home or a rook is taken
      on its home square.

    Raises:
        InvalidMoveError: See :func:`describe_move`.
    """
    event = describe_move(board, move)
    moved, captured = event.piece, event.captured
    src, dst = move.from_mask, move.to_mask

    bb = list(board.bb)
    if captured is not None:
        bb[captured] &= ~dst
    bb = [b & ~src for b in bb]
    bb[moved] |= dst

    side = opponent(board.side_to_move)

    if event.is_pawn_move or event.is_capture:
        halfmove_clock = 0
    else:
        halfmove_clock = board.halfmove_clock + 1
    fullmove_number = board.fullmove_number + (1 if side == "w" else 0)

    ep_target: Optional[int] = None
    if event.is_pawn_move and abs(move.to_sq - move.from_sq) == 16:
        ep_target = 1 << ((move.from_sq + move.to_sq) // 2)

    return replace(
        board,
        bb=tuple(bb),
        side_to_move=side,
        castling=_update_castling(board.castling, move, moved, captured),
        ep_target=ep_target,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
    )


def _update_castling(
    rights: CastlingRights, move: Move, moved: int, captured: Optional[int]
) -> CastlingRights:
    """Update castling flags based on king/rook moves and rook captures."""
    lost = set()
    if moved == WK:
        lost.update(("white_kingside", "white_queenside"))
    elif moved == BK:
        lost.update(("black_kingside", "black_queenside"))
    elif (moved, move.from_sq) in _ROOK_HOMES:
        lost.add(_ROOK_HOMES[(moved, move.from_sq)])
    if captured is not None and (captured, move.to_sq) in _ROOK_HOMES:
        lost.add(_ROOK_HOMES[(captured, move.to_sq)])
    if not lost:
        return rights
    return replace(rights, **{name: False for name in lost})
