from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from typing import Optional, Sequence

import uvicorn

from ..config import get_settings
from ..engine.apply import apply_move
from ..engine.errors import InvalidMoveError
from ..engine.fen import STARTPOS_FEN, parse_fen, to_fen
from ..engine.game import Game
from ..engine.move import parse_uci
from ..engine.movegen import generate_moves
from ..engine.perft import divide, perft
from ..engine.render import render_board


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="teresa", description="Bitboard chess toolkit")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    show = sub.add_parser("show", help="Draw a position")
    show.add_argument("--fen", default=STARTPOS_FEN, help="FEN string (default: startpos)")
    show.add_argument("--ascii", action="store_true", help="Use piece letters")

    moves = sub.add_parser("moves", help="List candidate moves")
    moves.add_argument("--fen", default=STARTPOS_FEN, help="FEN string (default: startpos)")

    apply_ = sub.add_parser("apply", help="Play one move and print the new FEN")
    apply_.add_argument("fen", help="FEN string")
    apply_.add_argument("move", help="Move text, e.g. e2e4")

    perft_ = sub.add_parser("perft", help="Count move-tree nodes")
    perft_.add_argument("--fen", default=STARTPOS_FEN, help="FEN string (default: startpos)")
    perft_.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    perft_.add_argument("--divide", action="store_true", help="Show counts per root move")

    play = sub.add_parser("play", help="Random playout until a side has no moves")
    play.add_argument("--fen", default=STARTPOS_FEN, help="FEN string (default: startpos)")
    play.add_argument("--seed", type=int, default=settings.seed)
    play.add_argument("--max-plies", type=int, default=settings.max_plies)
    play.add_argument("--quiet", action="store_true", help="Only print the summary")
    return parser


def cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run(
        "teresa.protocol.http.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
    )
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    board = parse_fen(args.fen)
    unicode = get_settings().unicode_board and not args.ascii
    print(render_board(board, unicode=unicode, coordinates=True))
    return 0


def cmd_moves(args: argparse.Namespace) -> int:
    for m in generate_moves(parse_fen(args.fen)):
        print(m.to_uci())
    return 0


def cmd_apply(args: argparse.Namespace) -> int:
    board = parse_fen(args.fen)
    move = parse_uci(args.move)
    if move not in generate_moves(board):
        raise InvalidMoveError(f"move not available: {args.move}")
    print(to_fen(apply_move(board, move)))
    return 0


def cmd_perft(args: argparse.Namespace) -> int:
    board = parse_fen(args.fen)
    start = time.perf_counter()
    if args.divide:
        counts = divide(board, args.depth)
        for uci, n in counts.items():
            print(f"{uci}: {n}")
        nodes = sum(counts.values())
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    game = Game.from_fen(args.fen)
    rng = random.Random(args.seed)
    result = game.play_out(rng, max_plies=args.max_plies)
    if not args.quiet:
        print(" ".join(m.to_uci() for m in result.moves))
        print(render_board(result.final, unicode=get_settings().unicode_board))
    print(to_fen(result.final))
    if result.stalled_side is not None:
        side = "White" if result.stalled_side == "w" else "Black"
        print(f"{side} has no moves after {result.plies} plies")
    else:
        print(f"stopped after {result.plies} plies")
    return 0


COMMANDS = {
    "serve": cmd_serve,
    "show": cmd_show,
    "moves": cmd_moves,
    "apply": cmd_apply,
    "perft": cmd_perft,
    "play": cmd_play,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        level = logging.getLevelName(args.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"unknown log level: {args.log_level}")
        logging.basicConfig(level=level)
        return COMMANDS[args.command](args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
