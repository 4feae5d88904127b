"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./ggstore.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class TelegramSettings(BaseModel):
    bot_token: str = ""
    # Drop updates queued while the bot was offline.
    drop_pending_updates: bool = True


class LedgerSettings(BaseModel):
    enforce_sufficiency: bool = True
    max_purchase_quantity: int = Field(default=50, ge=1)
    min_deposit: Decimal = Decimal("1.00")
    max_deposit: Decimal = Decimal("5000.00")


class PaymentsSettings(BaseModel):
    default_provider: Literal["wegate", "pagseguro"] = "wegate"


class WegateSettings(BaseModel):
    api_url: str = "https://api.wegate.com.br/v1/pix"
    api_key: str = ""
    pix_key: str = ""
    webhook_secret: str = ""
    signature_header: str = "X-Wegate-Signature"
    timeout: float = 15.0


class PagSeguroSettings(BaseModel):
    api_url: str = "https://sandbox.api.pagseguro.com"
    token: str = ""
    notification_url: str = ""
    webhook_secret: str = ""
    signature_header: str = "X-PagSeguro-Signature"
    qr_code_expiration_minutes: int = 30
    timeout: float = 15.0


class CheckerSettings(BaseModel):
    min_delay: float = 0.5
    max_delay: float = 2.0


class ReportingSettings(BaseModel):
    utc_offset_hours: int = -3
    recent_window_hours: int = 24
    history_limit: int = 10


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "GG Store Bot"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    telegram: TelegramSettings = TelegramSettings()
    ledger: LedgerSettings = LedgerSettings()
    payments: PaymentsSettings = PaymentsSettings()
    wegate: WegateSettings = WegateSettings()
    pagseguro: PagSeguroSettings = PagSeguroSettings()
    checker: CheckerSettings = CheckerSettings()
    reporting: ReportingSettings = ReportingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram.bot_token)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
