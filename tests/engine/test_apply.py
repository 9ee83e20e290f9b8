from __future__ import annotations

import pytest

from teresa.engine.apply import apply_move, describe_move
from teresa.engine.board import BP, PAWNS, WN, WP
from teresa.engine.errors import InvalidMoveError
from teresa.engine.fen import STARTPOS_FEN, parse_fen, to_fen
from teresa.engine.move import Move, parse_uci
from teresa.engine.movegen import generate_moves
from teresa.engine.square import str_to_square


SAMPLE_FENS = [
    STARTPOS_FEN,
    "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R w KQ - 2 3",
    "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b KQ - 2 3",
    "8/8/8/8/8/1p6/2P5/N7 w - - 0 1",
    "8/3p4/2P1P3/8/8/8/8/8 b - - 4 9",
    "r3k2r/8/1N6/8/8/8/8/4K3 w kq - 3 20",
]


def test_lone_pawn_double_push_scenario() -> None:
    b = parse_fen("8/8/8/8/8/8/P7/8 w - - 0 1")
    b2 = apply_move(b, parse_uci("a2a4"))
    assert to_fen(b2) == "8/8/8/8/P7/8/8/8 b - a3 0 1"
    assert b2.side_to_move == "b"
    assert b2.halfmove_clock == 0
    assert b2.fullmove_number == 1
    # Original untouched
    assert to_fen(b) == "8/8/8/8/8/8/P7/8 w - - 0 1"


def test_opening_moves_update_counters_and_en_passant() -> None:
    b = apply_move(parse_fen(STARTPOS_FEN), parse_uci("e2e4"))
    assert to_fen(b) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

    b = apply_move(b, parse_uci("g8f6"))
    assert to_fen(b) == "rnbqkb1r/pppppppp/5n2/8/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 1 2"

    b = apply_move(b, parse_uci("e4e5"))
    assert b.halfmove_clock == 0
    assert b.ep_target is None


def test_pawn_capture_removes_captured_piece() -> None:
    b = parse_fen("8/8/8/8/8/1p6/P7/8 w - - 5 10")
    b2 = apply_move(b, parse_uci("a2b3"))
    assert b2.bb[BP] == 0
    assert b2.bb[WP] == 1 << str_to_square("b3")
    assert to_fen(b2) == "8/8/8/8/8/1P6/8/8 b - - 0 10"


def test_knight_moves_and_halfmove_clock() -> None:
    quiet = apply_move(parse_fen("8/8/8/8/8/8/8/N7 w - - 5 10"), parse_uci("a1c2"))
    assert quiet.halfmove_clock == 6
    assert quiet.fullmove_number == 10
    assert quiet.bb[WN] == 1 << str_to_square("c2")

    capture = apply_move(parse_fen("8/8/8/8/8/1p6/8/N7 w - - 5 10"), parse_uci("a1b3"))
    assert capture.halfmove_clock == 0
    assert capture.bb[BP] == 0


def test_fullmove_increments_after_black() -> None:
    b = parse_fen("7n/8/8/8/8/8/8/N7 b - - 0 4")
    b2 = apply_move(b, parse_uci("h8g6"))
    assert b2.fullmove_number == 5
    assert b2.side_to_move == "w"
    b3 = apply_move(b2, parse_uci("a1b3"))
    assert b3.fullmove_number == 5


def test_castling_rights_follow_king_and_rook() -> None:
    b = parse_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    b = apply_move(b, parse_uci("h1h2"))
    assert b.castling.to_fen() == "Qkq"
    b = apply_move(b, parse_uci("e8e7"))
    assert b.castling.to_fen() == "Q"
    b = apply_move(b, parse_uci("a1a2"))
    assert b.castling.to_fen() == "-"


def test_capturing_rook_on_home_square_drops_right() -> None:
    b = parse_fen("r3k2r/8/1N6/8/8/8/8/4K3 w kq - 3 20")
    b2 = apply_move(b, parse_uci("b6a8"))
    assert b2.castling.to_fen() == "k"
    assert b2.halfmove_clock == 0


@pytest.mark.parametrize(
    "move",
    [
        Move(str_to_square("e3"), str_to_square("e4")),  # empty source
        Move(str_to_square("e7"), str_to_square("e5")),  # opponent's piece
        Move(str_to_square("b1"), str_to_square("d2")),  # own piece on target
        Move(str_to_square("e2"), str_to_square("e4"), piece=WN),  # wrong tag
    ],
)
def test_rejects_moves_that_do_not_fit(move: Move) -> None:
    with pytest.raises(InvalidMoveError):
        apply_move(parse_fen(STARTPOS_FEN), move)


@pytest.mark.parametrize("fen", SAMPLE_FENS)
def test_generated_moves_keep_bitboards_disjoint(fen: str) -> None:
    b = parse_fen(fen)
    for m in generate_moves(b):
        child = apply_move(b, m)
        assert child.is_disjoint()
        for reply in generate_moves(child):
            assert apply_move(child, reply).is_disjoint()


@pytest.mark.parametrize("fen", SAMPLE_FENS)
def test_halfmove_clock_law(fen: str) -> None:
    b = parse_fen(fen)
    for m in generate_moves(b):
        resets = m.piece in PAWNS or bool(b.occupied & m.to_mask)
        expected = 0 if resets else b.halfmove_clock + 1
        assert apply_move(b, m).halfmove_clock == expected


def test_describe_move() -> None:
    b = parse_fen("8/8/8/8/8/1p6/P7/8 w - - 0 1")
    push = describe_move(b, parse_uci("a2a3"))
    assert push.piece == WP and push.captured is None
    assert push.is_pawn_move and not push.is_capture

    take = describe_move(b, parse_uci("a2b3"))
    assert take.captured == BP
    assert take.side == "w"
