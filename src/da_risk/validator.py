"""TenderValidator — normalize and bounds-check one participant's submission.

Order matters:
  1. drop entries with qty <= 0 or price outside the band;
  2. round qty to a whole share and cap it at shares_per_participant;
  3. round price half-up to cents;
  4. reject the whole submission if the normalized quantities sum past
     shares_per_participant.

Entries that normalize to zero shares, or whose rounded price leaves the
band, are dropped as well so every stored tender satisfies the band and
positive-quantity invariants. An empty result is a valid submission.
"""
import logging
from collections.abc import Iterable

from src.da_auction.domain.models import AuctionConfig, RawTender, Tender
from src.da_common.money import round_currency
from src.da_risk.rules.price_band import is_within_band
from src.da_risk.rules.quantity_limit import check_total_quantity, clamp_quantity

logger = logging.getLogger(__name__)


def normalize_tender(raw: RawTender, config: AuctionConfig) -> Tender | None:
    """Return the stored form of one raw tender, or None if it is dropped."""
    if raw.qty <= 0 or not is_within_band(raw.price, config):
        return None
    qty = clamp_quantity(raw.qty, config.shares_per_participant)
    price = round_currency(raw.price)
    if qty <= 0 or not is_within_band(price, config):
        return None
    return Tender(qty=qty, price=price)


def validate_tenders(raw_tenders: Iterable[RawTender], config: AuctionConfig) -> tuple[Tender, ...]:
    """Normalize a submission. Raises QuantityExceededError if it oversells the holding."""
    raw_list = list(raw_tenders)
    tenders = tuple(
        t for t in (normalize_tender(r, config) for r in raw_list) if t is not None
    )
    if len(tenders) < len(raw_list):
        logger.debug("Dropped %d of %d tenders", len(raw_list) - len(tenders), len(raw_list))
    check_total_quantity(tenders, config.shares_per_participant)
    return tenders
