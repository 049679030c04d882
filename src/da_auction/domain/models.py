"""Domain models for da_auction — pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from config.settings import settings
from src.da_common.enums import AuctionPhase

if TYPE_CHECKING:
    from src.da_clearing.domain.models import ClearingResult


@dataclass(frozen=True)
class AuctionConfig:
    shares_per_participant: int
    pre_auction_price: Decimal
    buyback_pool: int
    price_min: Decimal
    price_max: Decimal

    @classmethod
    def from_settings(cls) -> "AuctionConfig":
        return cls(
            shares_per_participant=settings.DEFAULT_SHARES_PER_PARTICIPANT,
            pre_auction_price=settings.DEFAULT_PRE_AUCTION_PRICE,
            buyback_pool=settings.DEFAULT_BUYBACK_POOL,
            price_min=settings.DEFAULT_PRICE_MIN,
            price_max=settings.DEFAULT_PRICE_MAX,
        )

    @property
    def pre_auction_holding_value(self) -> Decimal:
        """What one participant's starting shares are worth before the buyback."""
        return self.shares_per_participant * self.pre_auction_price


@dataclass(frozen=True)
class RawTender:
    """Tender as submitted, before normalization."""

    qty: Decimal
    price: Decimal


@dataclass(frozen=True)
class Tender:
    """Accepted offer to sell qty shares at price. Immutable once stored."""

    qty: int
    price: Decimal  # 2 dp


@dataclass(frozen=True)
class ParticipantRecord:
    participant_id: str
    name: str
    tenders: tuple[Tender, ...]
    submitted_at: datetime

    @property
    def total_qty(self) -> int:
        return sum(t.qty for t in self.tenders)


@dataclass
class RoundState:
    """The single live auction round. Mutated only by AuctionStateMachine."""

    phase: AuctionPhase = AuctionPhase.WAITING
    participants: dict[str, ParticipantRecord] = field(default_factory=dict)
    strike_price: Decimal | None = None
    results: "ClearingResult | None" = None

    def wipe(self) -> None:
        self.participants = {}
        self.strike_price = None
        self.results = None


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only copy of the round handed out for broadcasting."""

    config: AuctionConfig
    phase: AuctionPhase
    participants: dict[str, ParticipantRecord]
    strike_price: Decimal | None
    results: "ClearingResult | None"

    @property
    def participant_count(self) -> int:
        return len(self.participants)
