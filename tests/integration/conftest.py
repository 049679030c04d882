"""Integration-test fixtures.

Websocket flows run through Starlette's TestClient, which drives the app
(lifespan included) on its own portal thread. The autouse fresh_round
fixture in tests/conftest.py has already swapped in an empty round.
"""

from collections.abc import Iterator

import pytest
from starlette.testclient import TestClient

from src.main import app


@pytest.fixture
def ws_client() -> Iterator[TestClient]:
    with TestClient(app) as client:
        yield client
