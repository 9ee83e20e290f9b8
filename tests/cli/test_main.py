from __future__ import annotations

import pytest

from teresa.cli.main import build_parser, main


LONE_PAWN = "8/8/8/8/8/8/P7/8 w - - 0 1"


def test_moves(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["moves", "--fen", LONE_PAWN]) == 0
    assert capsys.readouterr().out.split() == ["a2a3", "a2a4"]


def test_apply(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["apply", LONE_PAWN, "a2a4"]) == 0
    assert capsys.readouterr().out.strip() == "8/8/8/8/P7/8/8/8 b - a3 0 1"


def test_apply_unavailable_move(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["apply", LONE_PAWN, "a2a5"]) == 2
    assert capsys.readouterr().err.startswith("error: ")


def test_bad_fen_reports_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["moves", "--fen", "not a fen"]) == 2
    assert "error: " in capsys.readouterr().err


def test_perft(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["perft", "--depth", "1"]) == 0
    assert capsys.readouterr().out.startswith("nodes=20 depth=1")


def test_perft_divide(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["perft", "--fen", LONE_PAWN, "--depth", "1", "--divide"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[:2] == ["a2a3: 1", "a2a4: 1"]
    assert out[2].startswith("nodes=2 ")


def test_show_ascii(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["show", "--ascii"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "8 r n b q k b n r"
    assert lines[-1] == "  a b c d e f g h"


def test_play_reports_side_without_moves(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["play", "--fen", LONE_PAWN, "--seed", "3", "--quiet"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == "Black has no moves after 1 plies"


def test_play_stops_at_max_plies(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["play", "--seed", "1", "--max-plies", "4", "--quiet"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "stopped after 4 plies"


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_unknown_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--log-level", "FOO", "moves"]) == 2
    assert capsys.readouterr().err.startswith("error: unknown log level")
