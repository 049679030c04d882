"""Tests for da_clearing.domain.strike — auto strike discovery."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from src.da_auction.domain.models import ParticipantRecord, Tender
from src.da_clearing.domain.strike import discover_strike_price, flatten_tenders
from src.da_common.errors import NoTendersError


def _record(pid: str, *tenders: tuple[int, str]) -> ParticipantRecord:
    return ParticipantRecord(
        participant_id=pid, name=f"user-{pid}",
        tenders=tuple(Tender(qty, Decimal(price)) for qty, price in tenders),
        submitted_at=datetime.now(UTC),
    )


class TestDiscoverStrikePrice:
    def test_no_participants_raises(self) -> None:
        with pytest.raises(NoTendersError):
            discover_strike_price({}, 1000)

    def test_only_empty_records_raises(self) -> None:
        with pytest.raises(NoTendersError):
            discover_strike_price({"1": _record("1")}, 1000)

    def test_tied_level_fills_pool(self) -> None:
        # cumulative 600 then 1200 >= 1000 at the second 55 tender
        parts = {"1": _record("1", (600, "55")), "2": _record("2", (600, "55"))}
        assert discover_strike_price(parts, 1000) == Decimal("55")

    def test_undersubscribed_uses_highest_price(self) -> None:
        parts = {"1": _record("1", (50, "53"))}
        assert discover_strike_price(parts, 1000) == Decimal("53")

    def test_walks_ascending_regardless_of_submission_order(self) -> None:
        parts = {
            "1": _record("1", (50, "57"), (30, "51")),
            "2": _record("2", (40, "52"), (40, "53")),
        }
        # 51:30, 52:70, 53:110 >= 100
        assert discover_strike_price(parts, 100) == Decimal("53")

    def test_exact_fill_stops_at_that_price(self) -> None:
        parts = {"1": _record("1", (60, "51"), (40, "52")), "2": _record("2", (10, "50.5"))}
        # 50.5:10, 51:70, 52:110
        assert discover_strike_price(parts, 70) == Decimal("51")


def test_flatten_keeps_participant_ids() -> None:
    parts = {"1": _record("1", (10, "51"), (20, "52")), "2": _record("2", (5, "50"))}
    flat = flatten_tenders(parts)
    assert [(pid, t.qty) for pid, t in flat] == [("1", 10), ("1", 20), ("2", 5)]
