from __future__ import annotations

from typing import List, Optional

from .board import CHAR_TO_PIECE, Board, CastlingRights
from .errors import InvalidFormatError
from .square import mask_to_str, str_to_mask


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


def parse_fen(fen: str) -> Board:
    """Create a board from a Forsyth-Edwards Notation (FEN) string.

    Args:
        fen (str): FEN record. The placement, active colour, castling and
            en passant fields are required; the half-move clock and full-move
            number are optional and default to ``0`` and ``1``.

    Returns:
        Board: Board initialized with the state encoded in ``fen``.

    Raises:
        InvalidFormatError: If ``fen`` has fewer than 4 or more than 6 fields,
            or contains invalid piece placement, active colour or move
            counters.
        InvalidSquareError: If the en passant field is not ``-`` or a square.

    Notes:
        Uppercase letters are White pieces, lowercase Black. Characters in the
        castling field other than ``KQkq`` are ignored.
    """
    if not fen or not isinstance(fen, str):
        raise InvalidFormatError("FEN must be a non-empty string")
    parts = fen.split()
    if len(parts) < 4:
        raise InvalidFormatError("FEN needs at least 4 fields")
    if len(parts) > 6:
        raise InvalidFormatError("FEN has more than 6 fields")
    placement, stm, castling, ep = parts[:4]

    bb = _parse_placement(placement)

    if stm not in ("w", "b"):
        raise InvalidFormatError("side to move must be 'w' or 'b'")

    ep_target: Optional[int] = None
    if ep != "-":
        ep_target = str_to_mask(ep)

    halfmove_clock = _parse_counter(parts[4], "halfmove clock") if len(parts) > 4 else 0
    fullmove_number = _parse_counter(parts[5], "fullmove number") if len(parts) > 5 else 1
    if fullmove_number < 1:
        raise InvalidFormatError("fullmove number must be positive")

    return Board(
        bb=tuple(bb),
        side_to_move=stm,
        castling=CastlingRights.from_fen(castling),
        ep_target=ep_target,
        halfmove_clock=halfmove_clock,
        fullmove_number=fullmove_number,
    )


def _parse_placement(placement: str) -> List[int]:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidFormatError("FEN board must have 8 ranks")
    bb = [0] * 12
    # First rank in the record is rank 8
    for rank_idx, rank in zip(range(7, -1, -1), ranks):
        file_idx = 0
        for ch in rank:
            if ch in "12345678":
                file_idx += int(ch)
            elif ch in CHAR_TO_PIECE:
                if file_idx >= 8:
                    raise InvalidFormatError("too many squares in FEN rank")
                bb[CHAR_TO_PIECE[ch]] |= 1 << (rank_idx * 8 + file_idx)
                file_idx += 1
            else:
                raise InvalidFormatError(f"invalid piece in FEN: {ch!r}")
        if file_idx != 8:
            raise InvalidFormatError("rank does not sum to 8 squares in FEN")
    return bb


def _parse_counter(text: str, name: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise InvalidFormatError(f"invalid {name} in FEN: {text!r}")
    return int(text)


def to_fen(board: Board) -> str:
    """Serialize a board into a FEN string with all six fields.

    Returns:
        str: FEN string describing the board state.
    """
    ranks_str: List[str] = []
    for rank_idx in range(7, -1, -1):  # 7..0 maps to ranks 8..1
        run = 0
        row = []
        for file_idx in range(8):
            ch = board.piece_char_at(rank_idx * 8 + file_idx)
            if ch is None:
                run += 1
            else:
                if run > 0:
                    row.append(str(run))
                    run = 0
                row.append(ch)
        if run > 0:
            row.append(str(run))
        ranks_str.append("".join(row))
    placement = "/".join(ranks_str)

    ep = mask_to_str(board.ep_target) if board.ep_target is not None else "-"
    return (
        f"{placement} {board.side_to_move} {board.castling.to_fen()} {ep} "
        f"{board.halfmove_clock} {board.fullmove_number}"
    )


def startpos() -> Board:
    """Board for the standard initial layout."""
    return parse_fen(STARTPOS_FEN)
