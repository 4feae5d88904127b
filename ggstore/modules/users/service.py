"""Domain services for bot users."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ggstore.infrastructure.database import Database

from .exceptions import UserNotFoundError
from .models import DEFAULT_USERNAME, User, UserSummary
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _sql_repository(session: AsyncSession) -> UserRepository:
    # Imported lazily to avoid a circular import with the repository layer.
    from ggstore.infrastructure.database.repositories.user_repository import SqlUserRepository

    return SqlUserRepository(session)


@dataclass(slots=True)
class UserService:
    database: Database
    repository_factory: Callable[[AsyncSession], UserRepository] = _sql_repository

    async def get_user(self, user_id: int) -> User | None:
        async with self.database.session() as session:
            return await self.repository_factory(session).get_by_id(user_id)

    async def require_user(self, user_id: int) -> User:
        user = await self.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def ensure_user(self, user_id: int, username: str | None = None) -> tuple[User, bool]:
        """Find-or-create; concurrent calls for the same id resolve to one row."""
        display_name = (username or DEFAULT_USERNAME)[:100]
        async with self.database.session() as session:
            repository = self.repository_factory(session)
            user, created = await repository.create_if_absent(user_id, display_name)
            if not created and username and user.username != display_name:
                await repository.update_username(user_id, display_name)
                user.username = display_name

        if created:
            logger.info("Registered new user %s (%s)", user.username, user.id)
        return user, created

    async def list_by_balance(self, limit: int | None = None) -> Sequence[User]:
        async with self.database.session() as session:
            return await self.repository_factory(session).list_by_balance(limit)

    async def summarize(self) -> UserSummary:
        async with self.database.session() as session:
            return await self.repository_factory(session).summarize()

    async def set_admin(self, user_id: int, is_admin: bool = True) -> User:
        async with self.database.session() as session:
            user = await self.repository_factory(session).set_admin(user_id, is_admin)
        if user is None:
            raise UserNotFoundError(user_id)
        logger.warning("Admin flag for user %s set to %s", user_id, is_admin)
        return user
