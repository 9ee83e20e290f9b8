from __future__ import annotations

import random
import threading
import uuid
from typing import Dict, Optional

from ...engine.game import Game


class InMemorySessionStore:
    """Thread-safe in-memory game session store keyed by UUID ``game_id``.

    Each session also owns one random source for its random moves, so
    consecutive draws continue a single sequence. ``seed`` seeds new sources;
    ``None`` leaves them seeded from the system.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._lock = threading.RLock()
        self._games: Dict[str, Game] = {}
        self._rngs: Dict[str, random.Random] = {}
        self._seed = seed

    def create(self, game: Optional[Game] = None) -> str:
        """Store ``game`` (a fresh start position if omitted) and return its id."""
        gid = str(uuid.uuid4())
        with self._lock:
            self._games[gid] = game if game is not None else Game.new()
        return gid

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def set(self, game_id: str, game: Game) -> None:
        with self._lock:
            if game_id not in self._games:
                raise KeyError(game_id)
            self._games[game_id] = game

    def rng(self, game_id: str, seed: Optional[int] = None) -> random.Random:
        """Return the session's random source; a ``seed`` restarts it."""
        with self._lock:
            rng = self._rngs.get(game_id)
            if rng is None or seed is not None:
                rng = random.Random(seed if seed is not None else self._seed)
                self._rngs[game_id] = rng
            return rng

    def delete(self, game_id: str) -> bool:
        with self._lock:
            self._rngs.pop(game_id, None)
            return self._games.pop(game_id, None) is not None
