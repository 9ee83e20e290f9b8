from __future__ import annotations

from fastapi.testclient import TestClient

from teresa.engine.fen import STARTPOS_FEN


def test_moves_for_position(client: TestClient) -> None:
    r = client.post("/api/positions/moves", json={"fen": "8/8/8/8/8/8/P7/8 w - - 0 1"})
    assert r.status_code == 200
    assert r.json() == {"moves": ["a2a3", "a2a4"]}


def test_apply_to_position(client: TestClient) -> None:
    r = client.post(
        "/api/positions/apply", json={"fen": "8/8/8/8/8/8/P7/8 w - - 0 1", "move": "a2a4"}
    )
    assert r.status_code == 200
    assert r.json() == {"fen": "8/8/8/8/P7/8/8/8 b - a3 0 1"}


def test_apply_rejects_move_not_generated(client: TestClient) -> None:
    r = client.post("/api/positions/apply", json={"fen": STARTPOS_FEN, "move": "e1e2"})
    assert r.status_code == 400


def test_perft(client: TestClient) -> None:
    r = client.post("/api/perft", json={"fen": STARTPOS_FEN, "depth": 2})
    assert r.status_code == 200
    assert r.json() == {"nodes": 400}

    r = client.post("/api/perft", json={"fen": STARTPOS_FEN, "depth": 9})
    assert r.status_code == 422
