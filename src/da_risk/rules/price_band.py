from decimal import Decimal

from src.da_auction.domain.models import AuctionConfig


def is_within_band(price: Decimal, config: AuctionConfig) -> bool:
    """True if price lies in [price_min, price_max], both ends inclusive."""
    return config.price_min <= price <= config.price_max
