"""Admin domain exports"""

from .exceptions import AdminError, InvalidArgumentsError, PermissionDeniedError
from .models import AdminReport, DailyTransactions
from .service import AdminService, local_midnight

__all__ = [
    "AdminError",
    "AdminReport",
    "AdminService",
    "DailyTransactions",
    "InvalidArgumentsError",
    "PermissionDeniedError",
    "local_midnight",
]
