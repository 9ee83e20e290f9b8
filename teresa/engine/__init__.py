"""Bitboard chess core: positions, FEN, pawn/knight move generation."""

from .apply import MoveEvent, apply_move, describe_move
from .board import Board, CastlingRights
from .errors import InvalidFormatError, InvalidMoveError, InvalidSquareError
from .fen import STARTPOS_FEN, parse_fen, startpos, to_fen
from .move import Move, parse_uci
from .movegen import generate_moves

__all__ = [
    "Board",
    "CastlingRights",
    "InvalidFormatError",
    "InvalidMoveError",
    "InvalidSquareError",
    "Move",
    "MoveEvent",
    "STARTPOS_FEN",
    "apply_move",
    "describe_move",
    "generate_moves",
    "parse_fen",
    "parse_uci",
    "startpos",
    "to_fen",
]
