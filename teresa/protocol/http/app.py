from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    chess_error_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from ... import __version__
from ...config import Settings, get_settings
from ...engine.apply import apply_move
from ...engine.errors import InvalidFormatError, InvalidMoveError
from ...engine.fen import parse_fen, to_fen
from ...engine.game import Game
from ...engine.move import parse_uci
from ...engine.movegen import generate_moves
from ...engine.perft import perft as perft_nodes
from ...engine.render import render_board
from ...engine.square import mask_to_str


logger = logging.getLogger(__name__)

MAX_PERFT_DEPTH = 5


class CreateGameRequest(BaseModel):
    fen: Optional[str] = Field(default=None, description="FEN string (default: startpos)")


class CreateGameResponse(BaseModel):
    game_id: str
    fen: str


class SetPositionRequest(BaseModel):
    fen: str = Field(..., description="FEN string")


class MoveRequest(BaseModel):
    move: str = Field(..., description="Move text, e.g. e2e4")


class RandomMoveRequest(BaseModel):
    seed: Optional[int] = None


class PositionRequest(BaseModel):
    fen: str


class ApplyRequest(BaseModel):
    fen: str
    move: str


class PerftRequest(BaseModel):
    fen: str
    depth: int = Field(default=1, ge=0, le=MAX_PERFT_DEPTH)


class GameState(BaseModel):
    game_id: str
    fen: str
    side_to_move: str
    castling: str
    en_passant: Optional[str]
    halfmove_clock: int
    fullmove_number: int
    moves: List[str]
    last_move: Optional[str]
    move_history: List[str]
    board: str


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Teresa Chess API", version=__version__)

    logging.basicConfig(level=settings.log_level.upper())

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(InvalidFormatError, chess_error_handler)
    app.add_exception_handler(InvalidMoveError, chess_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    store = InMemorySessionStore(seed=settings.seed)
    app.state.sessions = store

    def state_of(game_id: str, game: Game) -> GameState:
        board = game.board
        history = game.move_history_uci()
        return GameState(
            game_id=game_id,
            fen=game.to_fen(),
            side_to_move=board.side_to_move,
            castling=board.castling.to_fen(),
            en_passant=mask_to_str(board.ep_target) if board.ep_target is not None else None,
            halfmove_clock=board.halfmove_clock,
            fullmove_number=board.fullmove_number,
            moves=[m.to_uci() for m in game.moves()],
            last_move=history[-1] if history else None,
            move_history=history,
            board=render_board(board, unicode=settings.unicode_board),
        )

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game(req: Optional[CreateGameRequest] = None) -> CreateGameResponse:
        game = Game.from_fen(req.fen) if req and req.fen else Game.new()
        game_id = store.create(game)
        return CreateGameResponse(game_id=game_id, fen=game.to_fen())

    @app.get("/api/games/{game_id}/state", response_model=GameState)
    async def get_state(game_id: str) -> GameState:
        return state_of(game_id, _require_game(store, game_id))

    @app.post("/api/games/{game_id}/position", response_model=GameState)
    async def set_position(game_id: str, req: SetPositionRequest) -> GameState:
        _require_game(store, game_id)
        try:
            game = Game.from_fen(req.fen)
        except InvalidFormatError:
            raise HTTPException(status_code=400, detail="invalid FEN")
        store.set(game_id, game)
        return state_of(game_id, game)

    @app.post("/api/games/{game_id}/move", response_model=GameState)
    async def make_move(game_id: str, req: MoveRequest) -> GameState:
        game = _require_game(store, game_id)
        move = parse_uci(req.move)
        try:
            game.apply_move(move)
        except InvalidMoveError:
            raise HTTPException(status_code=400, detail="illegal move")
        return state_of(game_id, game)

    @app.post("/api/games/{game_id}/random", response_model=GameState)
    async def random_move(game_id: str, req: Optional[RandomMoveRequest] = None) -> GameState:
        game = _require_game(store, game_id)
        rng = store.rng(game_id, req.seed if req else None)
        if game.play_random(rng) is None:
            raise HTTPException(status_code=409, detail="no moves available")
        return state_of(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameState)
    async def undo(game_id: str) -> GameState:
        game = _require_game(store, game_id)
        try:
            game.undo_move()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return state_of(game_id, game)

    @app.delete("/api/games/{game_id}", status_code=204)
    async def delete_game(game_id: str) -> Response:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return Response(status_code=204)

    @app.post("/api/positions/moves")
    async def position_moves(req: PositionRequest) -> Dict[str, List[str]]:
        board = parse_fen(req.fen)
        return {"moves": [m.to_uci() for m in generate_moves(board)]}

    @app.post("/api/positions/apply")
    async def position_apply(req: ApplyRequest) -> Dict[str, str]:
        board = parse_fen(req.fen)
        move = parse_uci(req.move)
        if move not in generate_moves(board):
            raise HTTPException(status_code=400, detail="illegal move")
        return {"fen": to_fen(apply_move(board, move))}

    @app.post("/api/perft")
    async def perft(req: PerftRequest) -> Dict[str, int]:
        return {"nodes": perft_nodes(parse_fen(req.fen), req.depth)}

    return app


def _require_game(store: InMemorySessionStore, game_id: str) -> Game:
    game = store.get(game_id)
    if game is None:
        raise HTTPException(status_code=404, detail="game not found")
    return game
