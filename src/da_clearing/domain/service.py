"""ClearingEngine entry point — pure function of (tenders, config, strike)."""
import logging
from collections.abc import Mapping
from decimal import Decimal

from src.da_auction.domain.models import AuctionConfig, ParticipantRecord
from src.da_clearing.domain.invariants import verify_clearing_invariants
from src.da_clearing.domain.models import ClearingResult
from src.da_clearing.domain.policies import (
    ClearingPolicy,
    MarginalProRataPolicy,
    UniformProRataPolicy,
)
from src.da_clearing.domain.strike import discover_strike_price
from src.da_common.errors import InvalidStrikePriceError, NoTendersError
from src.da_common.money import MAX_PRICE, money_to_display, round_currency

logger = logging.getLogger(__name__)


def select_policy(strike_price: Decimal | None) -> ClearingPolicy:
    """Admin-supplied strike -> uniform pro-rata; otherwise discover and pro-rate the margin."""
    if strike_price is None:
        return MarginalProRataPolicy()
    return UniformProRataPolicy()


def clear_round(
    participants: Mapping[str, ParticipantRecord],
    config: AuctionConfig,
    strike_price: Decimal | None = None,
) -> ClearingResult:
    """Determine the strike (unless given) and allocate the pool.

    Raises NoTendersError when nobody holds a tender, InvalidStrikePriceError
    unless a supplied strike is a positive price up to MAX_PRICE. Identical inputs give identical results.
    """
    if not any(record.tenders for record in participants.values()):
        raise NoTendersError()

    if strike_price is None:
        strike = discover_strike_price(participants, config.buyback_pool)
    else:
        if not strike_price.is_finite() or strike_price <= 0:
            raise InvalidStrikePriceError(f"{strike_price} must be a positive price")
        if strike_price > MAX_PRICE:
            raise InvalidStrikePriceError(f"{strike_price} exceeds {MAX_PRICE}")
        strike = round_currency(strike_price)

    policy = select_policy(strike_price)
    result = policy.allocate(participants, config, strike)
    verify_clearing_invariants(result, config)

    logger.info(
        "Cleared %d participants: policy=%s strike=%s allocated=%d/%d oversubscribed=%s",
        len(result.participants), result.policy.value, money_to_display(strike),
        result.total_allocated, result.buyback_pool, result.oversubscribed,
    )
    return result
