"""Clearing results — pure dataclasses, built once and never mutated."""
from dataclasses import dataclass
from decimal import Decimal

from src.da_auction.domain.models import Tender
from src.da_common.enums import ClearingPolicyName


@dataclass(frozen=True)
class ParticipantOutcome:
    participant_id: str
    name: str
    tenders: tuple[Tender, ...]
    shares_accepted: int  # tendered at prices the policy accepts, before pro-rata
    pro_rata_factor: Decimal
    shares_actually_tendered: int  # allocated: what the buyer actually repurchases
    shares_rejected: int  # tendered above the strike
    shares_remaining: int
    cash_received: Decimal
    remaining_value: Decimal
    total_value: Decimal
    pnl: Decimal  # total_value minus the pre-auction value of the holding


@dataclass(frozen=True)
class ClearingResult:
    policy: ClearingPolicyName
    strike_price: Decimal
    total_tendered_at_or_below: int  # total accepted across all participants
    buyback_pool: int
    pro_rata_factor: Decimal
    oversubscribed: bool
    total_allocated: int
    participants: dict[str, ParticipantOutcome]
