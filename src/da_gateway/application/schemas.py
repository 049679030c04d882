"""Websocket message schemas.

Inbound commands and outbound events are JSON objects tagged by `type`.
Field names are camelCase on the wire.
"""
from decimal import Decimal
from typing import Literal

from pydantic import Field

from src.da_auction.application.schemas import ConfigOut, ConfigUpdateIn, RawTenderIn, TenderOut
from src.da_auction.application.snapshots import AdminStateOut
from src.da_clearing.application.schemas import ClearingResultOut
from src.da_common.money import WireDecimal
from src.da_common.wire import WireModel

# ---------------------------------------------------------------------------
# Inbound commands
# ---------------------------------------------------------------------------


class UpdateConfigCommand(WireModel):
    config: ConfigUpdateIn


class SubmitTenderCommand(WireModel):
    name: str = Field(min_length=1)
    tenders: list[RawTenderIn]


class CalculateCommand(WireModel):
    """strikePrice present -> fixed-strike clearing; absent -> discovered strike."""

    strike_price: Decimal | None = None


# ---------------------------------------------------------------------------
# Outbound events
# ---------------------------------------------------------------------------


class StateEvent(WireModel):
    type: Literal["state"] = "state"
    state: AdminStateOut


class RegisteredEvent(WireModel):
    """`id` is numeric on the wire; it keys this session in `results.participants`."""

    type: Literal["registered"] = "registered"
    id: int
    config: ConfigOut
    phase: str


class ConfigUpdatedEvent(WireModel):
    type: Literal["config-updated"] = "config-updated"
    config: ConfigOut


class PhaseEvent(WireModel):
    type: Literal["phase"] = "phase"
    phase: str
    config: ConfigOut


class SubmittedEvent(WireModel):
    type: Literal["submitted"] = "submitted"
    tenders: list[TenderOut]


class ResultsEvent(WireModel):
    type: Literal["results"] = "results"
    results: ClearingResultOut
    strike_price: WireDecimal


class ErrorEvent(WireModel):
    type: Literal["error"] = "error"
    code: int
    message: str
