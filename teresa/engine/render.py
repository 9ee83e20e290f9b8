from __future__ import annotations

from typing import Dict

from .board import PIECE_TO_CHAR, Board


UNICODE_GLYPHS: Dict[str, str] = {
    "P": "♙",
    "N": "♘",
    "B": "♗",
    "R": "♖",
    "Q": "♕",
    "K": "♔",
    "p": "♟",
    "n": "♞",
    "b": "♝",
    "r": "♜",
    "q": "♛",
    "k": "♚",
}
ASCII_GLYPHS: Dict[str, str] = {ch: ch for ch in PIECE_TO_CHAR.values()}


def render_board(board: Board, *, unicode: bool = True, coordinates: bool = False) -> str:
    """Draw the board as 8 lines, rank 8 first, empty squares as ``.``."""
    glyphs = UNICODE_GLYPHS if unicode else ASCII_GLYPHS
    lines = []
    for rank_idx in range(7, -1, -1):
        cells = []
        for file_idx in range(8):
            ch = board.piece_char_at(rank_idx * 8 + file_idx)
            cells.append(glyphs[ch] if ch is not None else ".")
        row = " ".join(cells)
        lines.append(f"{rank_idx + 1} {row}" if coordinates else row)
    if coordinates:
        lines.append("  a b c d e f g h")
    return "\n".join(lines)
