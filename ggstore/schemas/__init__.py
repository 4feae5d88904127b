"""Pydantic schemas used across the project."""
from decimal import Decimal
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WegateNotification(BaseModel):
    """PIX confirmation posted by Wegate."""

    event: Optional[str] = None
    status: Optional[str] = None
    reference_id: Optional[str] = None
    amount: Optional[Decimal] = None
    id: Optional[Union[str, int]] = None
    transaction_id: Optional[Union[str, int]] = None

    model_config = ConfigDict(extra="allow")


class PagSeguroAmount(BaseModel):
    value: int = Field(..., ge=0, description="Amount in cents")
    currency: str = "BRL"

    model_config = ConfigDict(extra="allow")


class PagSeguroPaymentMethod(BaseModel):
    type: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class PagSeguroCharge(BaseModel):
    id: str
    status: str
    amount: PagSeguroAmount
    payment_method: Optional[PagSeguroPaymentMethod] = None

    model_config = ConfigDict(extra="allow")


class PagSeguroOrderNotification(BaseModel):
    """Order notification posted by PagSeguro/PagBank."""

    id: Optional[str] = None
    reference_id: Optional[str] = None
    charges: list[PagSeguroCharge] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")


class WebhookAckResponse(BaseModel):
    status: Literal["credited", "duplicate", "ignored"]
    credited: int = 0
    duplicates: int = 0


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    telegram: bool
