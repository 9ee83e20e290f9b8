from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from teresa.config import Settings
from teresa.protocol.http.app import create_app


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app(Settings(_env_file=None))

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=400, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"] == r.headers["x-request-id"]


def test_bad_fen_maps_to_bad_request(client: TestClient) -> None:
    r = client.post("/api/positions/moves", json={"fen": "8/8/8 w - - 0 1"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert "8 ranks" in err["message"]


def test_validation_errors_list_fields(client: TestClient) -> None:
    r = client.post("/api/positions/apply", json={"fen": "8/8/8/8/8/8/P7/8 w - - 0 1"})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(fe["field"].endswith("move") for fe in err["field_errors"])
