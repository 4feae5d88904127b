"""Repository protocol for users."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import User, UserSummary


class UserRepository(Protocol):
    """Abstract repository interface for user persistence."""

    async def get_by_id(self, user_id: int) -> User | None:
        ...

    async def create_if_absent(self, user_id: int, username: str) -> tuple[User, bool]:
        ...

    async def list_by_balance(self, limit: int | None = None) -> Sequence[User]:
        ...

    async def summarize(self) -> UserSummary:
        ...

    async def set_admin(self, user_id: int, is_admin: bool) -> User | None:
        ...

    async def update_username(self, user_id: int, username: str) -> None:
        ...
