from __future__ import annotations

from typing import Dict

from .apply import apply_move
from .board import Board
from .movegen import generate_moves


def perft(board: Board, depth: int) -> int:
    """Compute the perft node count for ``board`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all pseudo-legal child positions'
      perft(depth-1).

    Only pawn and knight moves are generated, so counts differ from
    full-rules perft tables once other pieces could move.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    nodes = 0
    for m in generate_moves(board):
        nodes += perft(apply_move(board, m), depth - 1)
    return nodes


def divide(board: Board, depth: int) -> Dict[str, int]:
    """Per-root-move node counts, keyed by move text."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    return {m.to_uci(): perft(apply_move(board, m), depth - 1) for m in generate_moves(board)}
