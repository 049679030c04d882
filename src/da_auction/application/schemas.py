"""Wire schemas for auction configuration and tenders."""
from decimal import Decimal
from typing import Any

from pydantic import Field

from src.da_auction.domain.models import AuctionConfig, RawTender, Tender
from src.da_common.money import MAX_PRICE, MAX_SHARES, WireDecimal
from src.da_common.wire import WireModel


class ConfigOut(WireModel):
    shares_per_participant: int
    pre_auction_price: WireDecimal
    buyback_pool: int
    price_min: WireDecimal
    price_max: WireDecimal

    @classmethod
    def from_domain(cls, config: AuctionConfig) -> "ConfigOut":
        return cls(
            shares_per_participant=config.shares_per_participant,
            pre_auction_price=config.pre_auction_price,
            buyback_pool=config.buyback_pool,
            price_min=config.price_min,
            price_max=config.price_max,
        )


class ConfigUpdateIn(WireModel):
    """Partial configuration; omitted (or null) fields keep their current value."""

    shares_per_participant: int | None = Field(None, gt=0, le=MAX_SHARES)
    pre_auction_price: Decimal | None = Field(None, gt=0, le=MAX_PRICE, allow_inf_nan=False)
    buyback_pool: int | None = Field(None, gt=0, le=MAX_SHARES)
    price_min: Decimal | None = Field(None, ge=0, le=MAX_PRICE, allow_inf_nan=False)
    price_max: Decimal | None = Field(None, gt=0, le=MAX_PRICE, allow_inf_nan=False)

    def changes(self) -> dict[str, Any]:
        """Snake_case field -> value for every field the admin actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class RawTenderIn(WireModel):
    qty: Decimal
    price: Decimal

    def to_domain(self) -> RawTender:
        return RawTender(qty=self.qty, price=self.price)


class TenderOut(WireModel):
    qty: int
    price: WireDecimal

    @classmethod
    def from_domain(cls, tender: Tender) -> "TenderOut":
        return cls(qty=tender.qty, price=tender.price)
