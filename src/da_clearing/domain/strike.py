"""Strike price discovery for the auto-strike policy."""
from collections.abc import Mapping
from decimal import Decimal

from src.da_auction.domain.models import ParticipantRecord, Tender
from src.da_common.errors import NoTendersError


def flatten_tenders(participants: Mapping[str, ParticipantRecord]) -> list[tuple[str, Tender]]:
    return [
        (pid, tender)
        for pid, record in participants.items()
        for tender in record.tenders
    ]


def discover_strike_price(
    participants: Mapping[str, ParticipantRecord], buyback_pool: int
) -> Decimal:
    """Cheapest price at which cumulative tendered quantity reaches the pool.

    Walks every tender in ascending price order. If the pool is never filled
    the highest tendered price is the strike. Ties need no ordering rule:
    tied tenders share one price level.
    """
    entries = flatten_tenders(participants)
    if not entries:
        raise NoTendersError()

    entries.sort(key=lambda entry: entry[1].price)
    cumulative = 0
    for _, tender in entries:
        cumulative += tender.qty
        if cumulative >= buyback_pool:
            return tender.price

    # Undersubscribed
    return entries[-1][1].price
