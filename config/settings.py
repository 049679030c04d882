from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Static frontend (admin.html, index.html); skipped when the directory is absent
    PUBLIC_DIR: str = "public"

    # Join link for the QR code; derived from the request when unset
    PUBLIC_URL: str | None = None
    QR_WIDTH: int = 400
    QR_MARGIN: int = 2

    # Auction defaults applied at startup and kept until an admin updates them
    DEFAULT_SHARES_PER_PARTICIPANT: int = 100
    DEFAULT_PRE_AUCTION_PRICE: Decimal = Decimal("52")
    DEFAULT_BUYBACK_POOL: int = 1000
    DEFAULT_PRICE_MIN: Decimal = Decimal("50")
    DEFAULT_PRICE_MAX: Decimal = Decimal("58")

    # App
    APP_NAME: str = "Dutch Auction Game Server"
    DEBUG: bool = False


settings = Settings()
