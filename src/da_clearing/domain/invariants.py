"""Clearing invariant verification, run on every result before it is published."""

import logging

from src.da_auction.domain.models import AuctionConfig
from src.da_clearing.domain.models import ClearingResult

logger = logging.getLogger(__name__)


def verify_clearing_invariants(result: ClearingResult, config: AuctionConfig) -> None:
    """Verify a clearing result. Raises AssertionError if violated.

    CLR-1: allocated + remaining == shares_per_participant, per participant
    CLR-2: 0 <= allocated <= accepted, per participant
    CLR-3: total allocated <= buyback_pool
    CLR-4: oversubscribed == (total accepted > buyback_pool)
    """
    for pid, outcome in result.participants.items():
        allocated = outcome.shares_actually_tendered
        assert allocated + outcome.shares_remaining == config.shares_per_participant, (
            f"CLR-1 violated: participant={pid} allocated={allocated} + "
            f"remaining={outcome.shares_remaining} != {config.shares_per_participant}"
        )
        assert 0 <= allocated <= outcome.shares_accepted, (
            f"CLR-2 violated: participant={pid} allocated={allocated} "
            f"accepted={outcome.shares_accepted}"
        )

    assert result.total_allocated <= result.buyback_pool, (
        f"CLR-3 violated: allocated={result.total_allocated} > pool={result.buyback_pool}"
    )
    expected = result.total_tendered_at_or_below > result.buyback_pool
    assert result.oversubscribed == expected, (
        f"CLR-4 violated: oversubscribed={result.oversubscribed}, "
        f"accepted={result.total_tendered_at_or_below}, pool={result.buyback_pool}"
    )

    logger.debug(
        "Clearing invariants OK: strike=%s, allocated=%d/%d",
        result.strike_price, result.total_allocated, result.buyback_pool,
    )
