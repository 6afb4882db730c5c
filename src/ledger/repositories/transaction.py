"""Transaction repository with owner-scoped queries."""
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.models.transaction import Transaction
from ledger.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model; every read is filtered by owner."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_by_user(self, user_id: UUID, transaction_id: UUID) -> Transaction | None:
        """Get transaction only if it belongs to the specified user."""
        result = await self.db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id, Transaction.user_id == user_id
            )
        )
        return result.scalar_one_or_none()

    async def list_by_user(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[Transaction]:
        """Get a user's transactions, newest first, optionally within [start, end]."""
        query = select(Transaction).where(Transaction.user_id == user_id)
        if start is not None:
            query = query.where(Transaction.date >= start)
        if end is not None:
            query = query.where(Transaction.date <= end)

        result = await self.db.execute(query.order_by(Transaction.date.desc()))
        return list(result.scalars().all())

    async def create_many(self, rows: list[dict[str, Any]]) -> int:
        """Insert many transactions with a single multi-row INSERT.

        Returns:
            Number of rows inserted
        """
        if not rows:
            return 0
        await self.db.execute(insert(Transaction), rows)
        await self.db.commit()
        return len(rows)
