from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from teresa.config import Settings
from teresa.protocol.http.app import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(Settings(_env_file=None, unicode_board=False)))
