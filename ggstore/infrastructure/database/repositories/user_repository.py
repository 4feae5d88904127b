"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from sqlalchemy import desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ggstore.infrastructure.database.models import User as UserModel
from ggstore.modules.ledger.money import to_money
from ggstore.modules.users.models import User, UserSummary
from ggstore.modules.users.repository import UserRepository


class SqlUserRepository(UserRepository):
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, user_id: int) -> User | None:
        stmt = select(UserModel).where(UserModel.id == user_id)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create_if_absent(self, user_id: int, username: str) -> tuple[User, bool]:
        existing = await self.get_by_id(user_id)
        if existing is not None:
            return existing, False

        model = UserModel(id=user_id, username=username, balance=Decimal("0.00"), is_admin=False)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            # Another task inserted the same id between our read and write.
            await self._session.rollback()
            existing = await self.get_by_id(user_id)
            if existing is None:
                raise
            return existing, False
        return self._to_domain(model), True

    async def list_by_balance(self, limit: int | None = None) -> Sequence[User]:
        stmt = select(UserModel).order_by(desc(UserModel.balance), UserModel.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def summarize(self) -> UserSummary:
        stmt = select(
            func.count(UserModel.id),
            func.coalesce(func.sum(UserModel.balance), 0),
        )
        user_count, total_balance = (await self._session.execute(stmt)).one()
        admin_count = await self._session.scalar(
            select(func.count(UserModel.id)).where(UserModel.is_admin.is_(True))
        )
        return UserSummary(
            user_count=int(user_count or 0),
            admin_count=int(admin_count or 0),
            total_balance=to_money(total_balance or 0),
        )

    async def set_admin(self, user_id: int, is_admin: bool) -> User | None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(is_admin=is_admin)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)
        await self._session.flush()
        return await self.get_by_id(user_id)

    async def update_username(self, user_id: int, username: str) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(username=username)
            .execution_options(synchronize_session="fetch")
        )
        await self._session.execute(stmt)

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=int(model.id),
            username=model.username,
            balance=to_money(model.balance or 0),
            is_admin=bool(model.is_admin),
            created_at=model.created_at,
        )
