"""Wire schemas for clearing results (the `results` event and admin snapshots)."""

from src.da_auction.application.schemas import TenderOut
from src.da_clearing.domain.models import ClearingResult, ParticipantOutcome
from src.da_common.money import WireDecimal
from src.da_common.wire import WireModel


class ParticipantOutcomeOut(WireModel):
    name: str
    tenders: list[TenderOut]
    shares_accepted: int
    pro_rata_factor: WireDecimal
    shares_actually_tendered: int
    shares_rejected: int
    shares_remaining: int
    cash_received: WireDecimal
    remaining_value: WireDecimal
    total_value: WireDecimal
    pnl: WireDecimal

    @classmethod
    def from_domain(cls, outcome: ParticipantOutcome) -> "ParticipantOutcomeOut":
        return cls(
            name=outcome.name,
            tenders=[TenderOut.from_domain(t) for t in outcome.tenders],
            shares_accepted=outcome.shares_accepted,
            pro_rata_factor=outcome.pro_rata_factor,
            shares_actually_tendered=outcome.shares_actually_tendered,
            shares_rejected=outcome.shares_rejected,
            shares_remaining=outcome.shares_remaining,
            cash_received=outcome.cash_received,
            remaining_value=outcome.remaining_value,
            total_value=outcome.total_value,
            pnl=outcome.pnl,
        )


class ClearingResultOut(WireModel):
    policy: str
    strike_price: WireDecimal
    total_tendered_at_or_below: int
    buyback_pool: int
    pro_rata_factor: WireDecimal
    oversubscribed: bool
    total_allocated: int
    participants: dict[str, ParticipantOutcomeOut]

    @classmethod
    def from_domain(cls, result: ClearingResult) -> "ClearingResultOut":
        return cls(
            policy=result.policy.value,
            strike_price=result.strike_price,
            total_tendered_at_or_below=result.total_tendered_at_or_below,
            buyback_pool=result.buyback_pool,
            pro_rata_factor=result.pro_rata_factor,
            oversubscribed=result.oversubscribed,
            total_allocated=result.total_allocated,
            participants={
                pid: ParticipantOutcomeOut.from_domain(o)
                for pid, o in result.participants.items()
            },
        )
