from src.da_auction.domain.models import AuctionConfig
from src.da_common.errors import InvalidConfigError
from src.da_common.money import MAX_PRICE, MAX_SHARES


def check_config(config: AuctionConfig) -> None:
    """Raise InvalidConfigError(3003) unless the config describes a playable auction."""
    if config.shares_per_participant <= 0:
        raise InvalidConfigError("sharesPerParticipant must be positive")
    if config.buyback_pool <= 0:
        raise InvalidConfigError("buybackPool must be positive")
    if config.pre_auction_price <= 0:
        raise InvalidConfigError("preAuctionPrice must be positive")
    if max(config.shares_per_participant, config.buyback_pool) > MAX_SHARES:
        raise InvalidConfigError(f"share counts must not exceed {MAX_SHARES}")
    if max(config.pre_auction_price, config.price_max) > MAX_PRICE:
        raise InvalidConfigError(f"prices must not exceed {MAX_PRICE}")
    if not config.price_min < config.price_max:
        raise InvalidConfigError(
            f"priceMin ({config.price_min}) must be below priceMax ({config.price_max})"
        )
