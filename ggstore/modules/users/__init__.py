"""User domain exports"""

from .exceptions import UserError, UserNotFoundError
from .models import MAX_USER_ID, User, UserSummary
from .service import UserService

__all__ = [
    "MAX_USER_ID",
    "User",
    "UserError",
    "UserNotFoundError",
    "UserService",
    "UserSummary",
]
