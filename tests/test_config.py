from __future__ import annotations

import pytest
from pydantic import ValidationError

from teresa.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TERESA_PORT", "TERESA_SEED", "TERESA_MAX_PLIES", "TERESA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.port == 8000
    assert s.max_plies == 200
    assert s.seed is None
    assert s.unicode_board is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERESA_PORT", "9000")
    monkeypatch.setenv("TERESA_SEED", "7")
    monkeypatch.setenv("TERESA_UNICODE_BOARD", "false")
    s = Settings(_env_file=None)
    assert s.port == 9000
    assert s.seed == 7
    assert s.unicode_board is False


def test_rejects_bad_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TERESA_PORT", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
