"""Allocation policies — how accepted tenders share the buyback pool.

Both policies pay every allocated share at the strike price. They differ in
who gets scaled down when the pool is oversubscribed:

MarginalProRataPolicy (auto strike):
    price <  strike  -> fully accepted
    price == strike  -> pro-rated: factor = min(1, (pool - below) / at_strike)
    price >  strike  -> rejected

UniformProRataPolicy (admin-supplied strike):
    price <= strike  -> accepted, all scaled by factor = min(1, pool / accepted)
    price >  strike  -> rejected

The two give different participants a full fill and are kept separate.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from src.da_auction.domain.models import AuctionConfig, ParticipantRecord
from src.da_clearing.domain.models import ClearingResult, ParticipantOutcome
from src.da_common.enums import ClearingPolicyName
from src.da_common.money import floor_shares, pro_rata_factor, round_currency


@dataclass(frozen=True)
class StrikeSplit:
    """One participant's tendered quantity, bucketed against the strike."""

    below: int
    at: int
    above: int

    @property
    def at_or_below(self) -> int:
        return self.below + self.at


def split_by_strike(record: ParticipantRecord, strike_price: Decimal) -> StrikeSplit:
    below = at = above = 0
    for tender in record.tenders:
        if tender.price < strike_price:
            below += tender.qty
        elif tender.price == strike_price:
            at += tender.qty
        else:
            above += tender.qty
    return StrikeSplit(below=below, at=at, above=above)


def build_outcome(
    record: ParticipantRecord,
    config: AuctionConfig,
    strike_price: Decimal,
    factor: Decimal,
    accepted: int,
    allocated: int,
    rejected: int,
) -> ParticipantOutcome:
    """Value one participant's position after the buyback.

    Tenders are not re-validated when the config changes, so if
    shares_per_participant was lowered after submission the remaining
    shares (and their value) can go negative. Conservation still holds.
    """
    remaining = config.shares_per_participant - allocated
    cash = allocated * strike_price
    remaining_value = remaining * config.pre_auction_price
    total = cash + remaining_value
    return ParticipantOutcome(
        participant_id=record.participant_id,
        name=record.name,
        tenders=record.tenders,
        shares_accepted=accepted,
        pro_rata_factor=factor,
        shares_actually_tendered=allocated,
        shares_rejected=rejected,
        shares_remaining=remaining,
        cash_received=round_currency(cash),
        remaining_value=round_currency(remaining_value),
        total_value=round_currency(total),
        pnl=round_currency(total - config.pre_auction_holding_value),
    )


class ClearingPolicy(Protocol):
    name: ClearingPolicyName

    def allocate(
        self,
        participants: Mapping[str, ParticipantRecord],
        config: AuctionConfig,
        strike_price: Decimal,
    ) -> ClearingResult: ...


class MarginalProRataPolicy:
    """Below-strike tenders fill in full; only the strike level is pro-rated."""

    name = ClearingPolicyName.AUTO

    def allocate(
        self,
        participants: Mapping[str, ParticipantRecord],
        config: AuctionConfig,
        strike_price: Decimal,
    ) -> ClearingResult:
        splits = {pid: split_by_strike(rec, strike_price) for pid, rec in participants.items()}
        total_below = sum(s.below for s in splits.values())
        total_at = sum(s.at for s in splits.values())

        remaining_pool = max(0, config.buyback_pool - total_below)
        factor = pro_rata_factor(remaining_pool, total_at)

        outcomes: dict[str, ParticipantOutcome] = {}
        for pid, record in participants.items():
            split = splits[pid]
            allocated = split.below + floor_shares(split.at * factor)
            outcomes[pid] = build_outcome(
                record, config, strike_price, factor,
                accepted=split.at_or_below,
                allocated=allocated,
                rejected=split.above,
            )

        total_accepted = total_below + total_at
        return ClearingResult(
            policy=self.name,
            strike_price=strike_price,
            total_tendered_at_or_below=total_accepted,
            buyback_pool=config.buyback_pool,
            pro_rata_factor=factor,
            oversubscribed=total_accepted > config.buyback_pool,
            total_allocated=sum(o.shares_actually_tendered for o in outcomes.values()),
            participants=outcomes,
        )


class UniformProRataPolicy:
    """Every accepted share (price <= strike) is scaled by one global factor."""

    name = ClearingPolicyName.FIXED

    def allocate(
        self,
        participants: Mapping[str, ParticipantRecord],
        config: AuctionConfig,
        strike_price: Decimal,
    ) -> ClearingResult:
        splits = {pid: split_by_strike(rec, strike_price) for pid, rec in participants.items()}
        total_accepted = sum(s.at_or_below for s in splits.values())
        factor = pro_rata_factor(config.buyback_pool, total_accepted)

        outcomes: dict[str, ParticipantOutcome] = {}
        for pid, record in participants.items():
            split = splits[pid]
            outcomes[pid] = build_outcome(
                record, config, strike_price, factor,
                accepted=split.at_or_below,
                allocated=floor_shares(split.at_or_below * factor),
                rejected=split.above,
            )

        return ClearingResult(
            policy=self.name,
            strike_price=strike_price,
            total_tendered_at_or_below=total_accepted,
            buyback_pool=config.buyback_pool,
            pro_rata_factor=factor,
            oversubscribed=total_accepted > config.buyback_pool,
            total_allocated=sum(o.shares_actually_tendered for o in outcomes.values()),
            participants=outcomes,
        )
