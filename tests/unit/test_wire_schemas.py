"""Tests for wire schemas — camelCase keys, numeric decimals, inbound parsing."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.da_auction.application.schemas import ConfigOut, ConfigUpdateIn, RawTenderIn
from src.da_auction.application.snapshots import AdminStateOut, PublicStateOut
from src.da_auction.domain.models import AuctionConfig, ParticipantRecord, RoundSnapshot, Tender
from src.da_common.enums import AuctionPhase
from src.da_gateway.application.schemas import (
    CalculateCommand,
    ErrorEvent,
    SubmitTenderCommand,
)


def _config() -> AuctionConfig:
    return AuctionConfig(
        shares_per_participant=100, pre_auction_price=Decimal("52"), buyback_pool=1000,
        price_min=Decimal("50"), price_max=Decimal("58"),
    )


def _snapshot() -> RoundSnapshot:
    record = ParticipantRecord(
        participant_id="7", name="alice",
        tenders=(Tender(qty=40, price=Decimal("53.50")), Tender(qty=10, price=Decimal("57"))),
        submitted_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    return RoundSnapshot(
        config=_config(), phase=AuctionPhase.OPEN, participants={"7": record},
        strike_price=None, results=None,
    )


class TestOutbound:
    def test_config_is_camel_case_numbers(self) -> None:
        assert ConfigOut.from_domain(_config()).to_wire() == {
            "sharesPerParticipant": 100,
            "preAuctionPrice": 52.0,
            "buybackPool": 1000,
            "priceMin": 50.0,
            "priceMax": 58.0,
        }

    def test_admin_state_summarizes_participants(self) -> None:
        wire = AdminStateOut.from_snapshot(_snapshot()).to_wire()
        assert wire["phase"] == "open"
        assert wire["participantCount"] == 1
        assert wire["participants"] == {
            "7": {"name": "alice", "tenderCount": 2, "submittedAt": 1704067200000},
        }
        assert wire["strikePrice"] is None
        assert wire["results"] is None

    def test_public_state_hides_participants(self) -> None:
        wire = PublicStateOut.from_snapshot(_snapshot()).to_wire()
        assert set(wire) == {"config", "phase", "participantCount"}

    def test_error_event(self) -> None:
        assert ErrorEvent(code=2001, message="Auction is not open").to_wire() == {
            "type": "error", "code": 2001, "message": "Auction is not open",
        }


class TestInbound:
    def test_config_update_keeps_only_sent_fields(self) -> None:
        update = ConfigUpdateIn.model_validate({"buybackPool": 400, "priceMax": None})
        assert update.changes() == {"buyback_pool": 400}

    def test_config_update_rejects_non_positive(self) -> None:
        with pytest.raises(ValidationError):
            ConfigUpdateIn.model_validate({"sharesPerParticipant": 0})

    def test_tender_accepts_numeric_strings(self) -> None:
        raw = RawTenderIn.model_validate({"qty": "12.5", "price": "55.005"}).to_domain()
        assert raw.qty == Decimal("12.5")
        assert raw.price == Decimal("55.005")

    def test_submit_requires_name(self) -> None:
        with pytest.raises(ValidationError):
            SubmitTenderCommand.model_validate({"type": "submit-tender", "tenders": []})

    def test_submit_ignores_type_tag(self) -> None:
        cmd = SubmitTenderCommand.model_validate(
            {"type": "submit-tender", "name": "bob", "tenders": [{"qty": 1, "price": 51}]}
        )
        assert cmd.name == "bob"
        assert len(cmd.tenders) == 1

    def test_calculate_strike_is_optional(self) -> None:
        assert CalculateCommand.model_validate({"type": "calculate"}).strike_price is None
        cmd = CalculateCommand.model_validate({"strikePrice": "54.5"})
        assert cmd.strike_price == Decimal("54.5")
