from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .apply import MoveEvent, apply_move, describe_move
from .board import PIECE_NAMES, Board
from .errors import InvalidMoveError
from .fen import parse_fen, startpos, to_fen
from .move import Move
from .movegen import generate_moves


logger = logging.getLogger(__name__)


def select_random_move(moves: Sequence[Move], rng: Optional[random.Random] = None) -> Move:
    """Pick one move uniformly at random.

    Raises:
        ValueError: If ``moves`` is empty.
    """
    if not moves:
        raise ValueError("no moves to choose from")
    return (rng or random).choice(list(moves))


@dataclass(frozen=True)
class PlayoutResult:
    moves: List[Move]
    final: Board
    reason: str  # 'no_moves' or 'max_plies'
    stalled_side: Optional[str]  # side left without moves, if any

    @property
    def plies(self) -> int:
        return len(self.moves)


@dataclass
class Game:
    """Game wrapper around a sequence of boards.

    Responsibility: track the current board, expose candidate moves, apply
    and undo moves, and drive random playouts.
    """

    board: Board
    move_stack: List[Move] = field(default_factory=list)
    _boards: List[Board] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        return cls(board=parse_fen(fen))

    def to_fen(self) -> str:
        return to_fen(self.board)

    def moves(self) -> List[Move]:
        return generate_moves(self.board)

    def apply_move(self, move: Move) -> Board:
        """Play ``move`` if it is one of the current candidate moves.

        Raises:
            InvalidMoveError: If the move is not generated for this position.
        """
        candidates = self.moves()
        if move not in candidates:
            raise InvalidMoveError(f"move not available: {move.to_uci()}")
        # Use the generated move so the piece tag travels with it
        move = candidates[candidates.index(move)]
        event = describe_move(self.board, move)
        new_board = apply_move(self.board, move)
        _log_event(event)
        self._boards.append(self.board)
        self.move_stack.append(move)
        self.board = new_board
        return new_board

    def undo_move(self) -> Move:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        self.board = self._boards.pop()
        return self.move_stack.pop()

    def play_random(self, rng: Optional[random.Random] = None) -> Optional[Move]:
        """Apply one randomly chosen move; return None when none exist."""
        candidates = self.moves()
        if not candidates:
            return None
        move = select_random_move(candidates, rng)
        self.apply_move(move)
        return move

    def play_out(self, rng: Optional[random.Random] = None, max_plies: int = 200) -> PlayoutResult:
        """Play random moves until a side has none or ``max_plies`` is reached.

        A side without moves may be stalemated or mated; the two are not told
        apart.
        """
        if max_plies < 0:
            raise ValueError("max_plies must be >= 0")
        played: List[Move] = []
        while len(played) < max_plies:
            move = self.play_random(rng)
            if move is None:
                side = self.board.side_to_move
                logger.info(
                    "no_moves",
                    extra={"side": side, "plies": len(played), "fen": self.to_fen()},
                )
                return PlayoutResult(played, self.board, "no_moves", side)
            played.append(move)
        return PlayoutResult(played, self.board, "max_plies", None)

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]


def _log_event(event: MoveEvent) -> None:
    fields = {
        "side": event.side,
        "move": event.move.to_uci(),
        "piece": PIECE_NAMES[event.piece],
    }
    logger.debug("move", extra=fields)
    if event.is_capture:
        logger.info("capture", extra={**fields, "captured": PIECE_NAMES[event.captured]})
