from collections.abc import Iterable
from decimal import Decimal

from src.da_auction.domain.models import Tender
from src.da_common.errors import QuantityExceededError
from src.da_common.money import round_shares


def clamp_quantity(qty: Decimal, limit: int) -> int:
    """Round to the nearest whole share, capped at the participant's holding.

    Capped before rounding so an arbitrarily large qty never reaches quantize.
    """
    return min(round_shares(min(qty, Decimal(limit))), limit)


def check_total_quantity(tenders: Iterable[Tender], limit: int) -> None:
    """Raise QuantityExceededError(3002) if the tenders together sell more than limit shares."""
    total = sum(t.qty for t in tenders)
    if total > limit:
        raise QuantityExceededError(limit)
