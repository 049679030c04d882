"""Shared test fixtures."""

from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient

from src.da_auction.domain.models import AuctionConfig
from src.da_auction.domain.state_machine import AuctionStateMachine
from src.da_gateway.application.dispatcher import CommandDispatcher
from src.da_gateway.session.registry import SessionRegistry
from src.main import app


@pytest.fixture(autouse=True)
def fresh_round() -> AuctionStateMachine:
    """Every test starts from an empty round with default config and no sessions."""
    machine = AuctionStateMachine(default_config())
    registry = SessionRegistry()
    app.state.machine = machine
    app.state.registry = registry
    app.state.dispatcher = CommandDispatcher(machine, registry)
    return machine


@pytest.fixture
def config() -> AuctionConfig:
    return default_config()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def default_config(**overrides: object) -> AuctionConfig:
    values: dict[str, object] = dict(
        shares_per_participant=100,
        pre_auction_price=Decimal("52"),
        buyback_pool=1000,
        price_min=Decimal("50"),
        price_max=Decimal("58"),
    )
    values.update(overrides)
    return AuctionConfig(**values)  # type: ignore[arg-type]
