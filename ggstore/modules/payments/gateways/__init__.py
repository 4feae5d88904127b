"""Payment provider adapters."""

from .base import PaymentGateway
from .pagseguro import PagSeguroGateway
from .wegate import WegateGateway

__all__ = ["PagSeguroGateway", "PaymentGateway", "WegateGateway"]
